"""
Validator - Checks a normalized command against the grammar.

Pure: no output, no persistence. Unknown words get a fuzzy
"did you mean" suggestion when one is close enough, otherwise the
full vocabulary is listed.
"""

from dataclasses import dataclass, field
from typing import Optional

from .fuzzy import find_closest_match
from .tokenizer import ParsedCommand

VALID_VERBS = ["list", "create", "remove", "info", "search", "update", "help", "man", "use"]
VALID_ENTITIES = [
    "program", "project", "task", "subtask",
    "programs", "projects", "tasks", "subtasks",
]
VALID_PRIORITIES = ["low", "medium", "high", "critical"]
VALID_STATUSES = ["planned", "active", "paused", "due", "completed"]

TARGET_VERBS = ("info", "remove", "update")
CHILD_ENTITIES = ("project", "task", "subtask")


@dataclass
class ValidationResult:
    """Outcome of validating one command."""
    valid: bool
    error: Optional[str] = None
    suggestions: list[str] = field(default_factory=list)


def validate_command(command: ParsedCommand) -> ValidationResult:
    """Validate a normalized command. Rules are checked in order."""
    if not command.verb and not command.entity:
        return ValidationResult(
            False, 'No command provided. Type "help" for available commands.'
        )

    if command.verb and command.verb not in VALID_VERBS:
        return _unknown_word("command", command.verb, VALID_VERBS, ", ".join(VALID_VERBS))

    if command.entity and command.entity not in VALID_ENTITIES:
        return _unknown_word("entity", command.entity, VALID_ENTITIES,
                             "program, project, task, subtask")

    if command.verb in TARGET_VERBS and not command.target and not command.flags.get("id"):
        entity = command.entity or "<entity>"
        return ValidationResult(
            False,
            f'"{command.verb}" requires a target ID. Usage: {command.verb} {entity} <id>'
        )

    for name, choices in (("priority", VALID_PRIORITIES), ("status", VALID_STATUSES)):
        result = _check_enum_flag(command, name, choices)
        if result is not None:
            return result

    return ValidationResult(True)


def check_choice(label: str, value: str, choices: list[str]) -> Optional[ValidationResult]:
    """Validate one enumerated value; None when it is acceptable."""
    if value.lower() in choices:
        return None
    closest = find_closest_match(value.lower(), choices)
    hint = f'Did you mean "{closest}"?' if closest else f"Valid: {', '.join(choices)}"
    return ValidationResult(
        False,
        f'Invalid {label}: "{value}". {hint}',
        [closest] if closest else [],
    )


def requires_parent(entity: str) -> bool:
    """Whether records of this entity type must name a parent."""
    return entity in CHILD_ENTITIES


def get_required_fields(entity: str, verb: str) -> list[str]:
    if verb != "create":
        return []
    required = ["title"]
    if requires_parent(entity):
        required.append("parentId")
    return required


def _unknown_word(kind: str, word: str, vocabulary: list[str], listing: str) -> ValidationResult:
    label = "Unknown command" if kind == "command" else "Unknown entity"
    closest = find_closest_match(word, vocabulary)
    if closest:
        return ValidationResult(
            False,
            f'{label}: "{word}". Did you mean "{closest}"?',
            [closest],
        )
    valid_label = "Available" if kind == "command" else "Valid"
    return ValidationResult(False, f'{label}: "{word}". {valid_label}: {listing}')


def _check_enum_flag(command: ParsedCommand, name: str, choices: list[str]) -> Optional[ValidationResult]:
    value = command.flags.get(name)
    if not value:
        return None
    return check_choice(name, value, choices)
