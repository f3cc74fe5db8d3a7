"""
Session context for one terminal.

Holds the navigation context used as a source of default parents,
the last list filter and the command history. One instance per
terminal; it is passed to the interpreter and handlers explicitly.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Optional

HISTORY_LIMIT = 100

# Which context slot supplies the default parent for each entity
PARENT_SLOTS = {
    "project": "current_container_id",
    "task": "current_sub_container_id",
    "subtask": "current_work_item_id",
}

# Which context slot `use <entity> <id>` writes
CONTEXT_SLOTS = {
    "program": "current_container_id",
    "project": "current_sub_container_id",
    "task": "current_work_item_id",
}


@dataclass
class CliSession:
    current_container_id: Optional[str] = None
    current_sub_container_id: Optional[str] = None
    current_work_item_id: Optional[str] = None
    last_filter: Optional[dict] = None
    history_limit: int = HISTORY_LIMIT
    history: deque = field(default_factory=deque)

    def __post_init__(self):
        self.history = deque(self.history, maxlen=self.history_limit)

    def add_to_history(self, line: str) -> None:
        """Record a command; the oldest entry goes once the cap is hit."""
        self.history.append(line)

    def get_history(self) -> list[str]:
        return list(self.history)

    def default_parent(self, entity_type: str) -> Optional[str]:
        """Parent id to assume when a new record of entity_type names none."""
        slot = PARENT_SLOTS.get(entity_type)
        return getattr(self, slot) if slot else None

    def set_current(self, entity_type: str, record_id: Optional[str]) -> None:
        """Point the context for entity_type at record_id (None clears it)."""
        slot = CONTEXT_SLOTS.get(entity_type)
        if slot is None:
            raise ValueError(f"Cannot use a {entity_type} as context")
        setattr(self, slot, record_id)

    def get_current(self, entity_type: str) -> Optional[str]:
        slot = CONTEXT_SLOTS.get(entity_type)
        return getattr(self, slot) if slot else None

    def set_last_filter(self, filters: Optional[dict]) -> None:
        self.last_filter = dict(filters) if filters else None

    def clear(self) -> None:
        self.current_container_id = None
        self.current_sub_container_id = None
        self.current_work_item_id = None
        self.last_filter = None
        self.history.clear()
