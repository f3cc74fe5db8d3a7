"""
Fuzzy matching for forgiving command input.

Edit distance over a fixed vocabulary, used by the validator to turn
typos into "did you mean" suggestions.
"""

from typing import Optional, Sequence


def levenshtein_distance(a: str, b: str) -> int:
    """Classic dynamic-programming edit distance, case-insensitive."""
    a = a.lower()
    b = b.lower()
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, 1):
        current = [i]
        for j, char_b in enumerate(b, 1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(min(
                    previous[j - 1] + 1,  # substitution
                    current[j - 1] + 1,   # insertion
                    previous[j] + 1,      # deletion
                ))
        previous = current
    return previous[-1]


def find_closest_match(
    value: str,
    options: Sequence[str],
    threshold: int = 3
) -> Optional[str]:
    """
    Find the option closest to value.

    Returns the option with the smallest distance that is still within
    threshold, or None. Ties go to the option listed first.
    """
    closest = None
    min_distance = threshold + 1

    for option in options:
        distance = levenshtein_distance(value, option)
        if distance < min_distance:
            min_distance = distance
            closest = option

    return closest


def get_suggestions(value: str, options: Sequence[str]) -> list[str]:
    """Up to 3 options within distance 2, nearest first."""
    scored = [
        (levenshtein_distance(value, option), option)
        for option in options
    ]
    close = [pair for pair in scored if pair[0] <= 2]
    # sorted() is stable, so equal distances keep input order
    close = sorted(close, key=lambda pair: pair[0])
    return [option for _, option in close[:3]]


def is_fuzzy_match(value: str, options: Sequence[str], threshold: int = 2) -> bool:
    return find_closest_match(value, options, threshold) is not None
