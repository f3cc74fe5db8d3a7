"""
Normalizer - Canonical verb and entity names.

Applied once per line, after tokenization and before validation.
Unknown words pass through lowercased so the validator can suggest
corrections.
"""

from dataclasses import replace
from typing import Optional

from .tokenizer import ParsedCommand

ENTITY_TYPES = ("program", "project", "task", "subtask")

ENTITY_ALIASES = {
    "prg": "program",
    "programs": "program",
    "prj": "project",
    "projects": "project",
    "tsk": "task",
    "tasks": "task",
    "sub": "subtask",
    "subtasks": "subtask",
}

VERB_ALIASES = {
    "ls": "list",
    "install": "create",
    "add": "create",
    "new": "create",
    "uninstall": "remove",
    "delete": "remove",
    "del": "remove",
    "rm": "remove",
    "show": "info",
    "view": "info",
    "display": "info",
    "find": "search",
    "edit": "update",
    "cd": "use",
    "switch": "use",
}

PLURALS = {
    "program": "programs",
    "project": "projects",
    "task": "tasks",
    "subtask": "subtasks",
}


def normalize_entity(entity: Optional[str]) -> Optional[str]:
    if entity is None:
        return None
    lowered = entity.lower()
    return ENTITY_ALIASES.get(lowered, lowered)


def normalize_verb(verb: Optional[str]) -> Optional[str]:
    if verb is None:
        return None
    lowered = verb.lower()
    return VERB_ALIASES.get(lowered, lowered)


def normalize_command(command: ParsedCommand) -> ParsedCommand:
    """Copy of command with canonical verb and entity."""
    return replace(
        command,
        verb=normalize_verb(command.verb) if command.verb else command.verb,
        entity=normalize_entity(command.entity) if command.entity else command.entity,
        flags=dict(command.flags),
    )


def plural(entity: str) -> str:
    return PLURALS.get(entity, entity + "s")
