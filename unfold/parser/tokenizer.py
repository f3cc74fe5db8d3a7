"""
Tokenizer - Splits a raw command line into a structured command.

Homebrew-style grammar: <verb> <entity> [target] [flags]

    list tasks
    create task "Fix bug" priority:high
    list programs --limit=10

Quote characters group whitespace and are stripped. There is no
backslash escaping.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)

QUOTE_CHARS = ('"', "'")

FLAG_PATTERN = re.compile(r"^--?([a-zA-Z0-9_-]+)(?:=(.*))?$", re.DOTALL)
KEY_VALUE_PATTERN = re.compile(r"^([a-zA-Z0-9_-]+):(.+)$", re.DOTALL)


@dataclass
class ParsedCommand:
    """One tokenized input line."""
    verb: Optional[str] = None
    entity: Optional[str] = None
    target: Optional[str] = None
    flags: dict[str, str] = field(default_factory=dict)
    raw: str = ""

    def flag(self, *names: str) -> Optional[str]:
        """First non-empty flag value among names."""
        for name in names:
            value = self.flags.get(name)
            if value:
                return value
        return None


@dataclass
class _Part:
    text: str
    quoted: bool


def tokenize(line: str) -> ParsedCommand:
    """
    Tokenize a command line.

    Each token is, in order of precedence:
    1. a flag: --key=value, --key (value "true") or -k
    2. a key:value shorthand (priority:high)
    3. a positional: verb, entity, target

    Tokens that start with a quote are always positional. Positionals
    past the third are dropped. Never raises.
    """
    if line is None:
        line = ""

    command = ParsedCommand(raw=line)
    if not line.strip():
        return command

    positionals = []
    for part in _split_parts(line.strip()):
        if not part.quoted:
            flag_match = FLAG_PATTERN.match(part.text)
            if flag_match:
                key, value = flag_match.groups()
                command.flags[key] = value if value is not None else "true"
                continue

            pair_match = KEY_VALUE_PATTERN.match(part.text)
            if pair_match:
                key, value = pair_match.groups()
                command.flags[key] = value
                continue

        positionals.append(part.text)

    if len(positionals) > 3:
        logger.debug("Dropping extra positional tokens: %s", positionals[3:])

    padded = positionals[:3] + [None] * (3 - len(positionals[:3]))
    command.verb, command.entity, command.target = padded
    return command


def split_quoted(line: str) -> list[str]:
    """Split on whitespace, keeping quoted spans together."""
    return [part.text for part in _split_parts(line)]


def _split_parts(line: str) -> list[_Part]:
    parts = []
    current = []
    quoted = False
    in_quotes = False
    quote_char = ""
    has_token = False

    for char in line:
        if in_quotes:
            if char == quote_char:
                in_quotes = False
                quote_char = ""
            else:
                current.append(char)
            continue

        if char in QUOTE_CHARS:
            if not has_token:
                quoted = True
            in_quotes = True
            quote_char = char
            has_token = True
            continue

        if char.isspace():
            if has_token:
                parts.append(_Part("".join(current), quoted))
            current = []
            quoted = False
            has_token = False
            continue

        current.append(char)
        has_token = True

    if has_token:
        parts.append(_Part("".join(current), quoted))

    return parts
