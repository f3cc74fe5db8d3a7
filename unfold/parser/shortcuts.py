"""
Shortcuts - Rewrites common short inputs into full commands.

Runs on the raw line before tokenization:

    prg                 -> list programs
    add task Fix it     -> create task "Fix it"
    done task ABC123    -> update task ABC123 status:completed
    help create         -> man create
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional


@dataclass(frozen=True)
class Shortcut:
    pattern: re.Pattern
    expand: Callable[[re.Match], str]
    description: str


def _list_shortcut(words: str, plural: str) -> Shortcut:
    return Shortcut(
        pattern=re.compile(rf"^({words})$", re.IGNORECASE),
        expand=lambda m: f"list {plural}",
        description=f"List all {plural}",
    )


def _install_shortcut(words: str, entity: str) -> Shortcut:
    return Shortcut(
        pattern=re.compile(rf"^(install|add)\s+({words})\s+(.+)$", re.IGNORECASE),
        expand=lambda m: f'create {entity} "{_unquote(m.group(3))}"',
        description=f"Create a new {entity}",
    )


def _unquote(text: str) -> str:
    text = text.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"'):
        return text[1:-1]
    return text


SHORTCUTS = [
    _list_shortcut("prg|programs?", "programs"),
    _list_shortcut("prj|projects?", "projects"),
    _list_shortcut("tsk|tasks?", "tasks"),
    _list_shortcut("sub|subtasks?", "subtasks"),

    _install_shortcut("prg|program", "program"),
    _install_shortcut("prj|project", "project"),
    _install_shortcut("tsk|task", "task"),
    _install_shortcut("sub|subtask", "subtask"),

    Shortcut(
        pattern=re.compile(r"^done\s+(tsk|task)\s+(\S+)$", re.IGNORECASE),
        expand=lambda m: f"update task {m.group(2)} status:completed",
        description="Mark task as done",
    ),
    Shortcut(
        pattern=re.compile(r"^start\s+(tsk|task)\s+(\S+)$", re.IGNORECASE),
        expand=lambda m: f"update task {m.group(2)} status:active",
        description="Start a task",
    ),

    Shortcut(
        pattern=re.compile(r"^man\s+unfold$", re.IGNORECASE),
        expand=lambda m: "man",
        description="Show manual",
    ),
    Shortcut(
        pattern=re.compile(r"^help\s+(\w+)$", re.IGNORECASE),
        expand=lambda m: f"man {m.group(1)}",
        description="Show help for specific command",
    ),
]

KNOWN_COMMANDS = [
    "list programs",
    "list projects",
    "list tasks",
    "list subtasks",
    "create task",
    "create program",
    "create project",
    "create subtask",
    "info task",
    "remove task",
    "update task",
    "search tasks",
    "use program",
    "use project",
    "prg",
    "prj",
    "tsk",
    "sub",
    "help",
    "history",
    "man",
    "man list",
    "man create",
]


def expand_shortcut(line: str, aliases: Optional[dict[str, str]] = None) -> str:
    """
    Expand a shortcut into its full command.

    aliases maps single words to full commands (user configuration) and
    is consulted before the built-in table. Input that matches nothing
    is returned unchanged.
    """
    stripped = line.strip()
    if aliases:
        expansion = aliases.get(stripped.lower())
        if expansion:
            return expansion

    for shortcut in SHORTCUTS:
        match = shortcut.pattern.match(stripped)
        if match:
            return shortcut.expand(match)
    return line


def complete(prefix: str, limit: int = 5) -> list[str]:
    """Known commands starting with prefix, for tab completion."""
    lowered = prefix.lower()
    return [cmd for cmd in KNOWN_COMMANDS if cmd.startswith(lowered)][:limit]
