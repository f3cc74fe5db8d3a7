"""
Shared plumbing for verb handlers.

A handler gets everything it needs through a HandlerContext: the line
sink, the record store, the session context, the prompt engine and the
data-refresh notifier. Persistence errors stop at the handler and are
printed as "Error: <message>".
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol

from ..core.prompt import PromptEngine
from ..core.session import CliSession
from ..parser.tokenizer import ParsedCommand

logger = logging.getLogger(__name__)


class Repository(Protocol):
    """Per-entity persistence operations the handlers rely on."""

    def create(self, data: dict) -> str: ...

    def get(self, record_id: str) -> Optional[dict]: ...

    def list(self) -> list[dict]: ...

    def update(self, record_id: str, partial: dict) -> None: ...

    def delete(self, record_id: str) -> None: ...


class RecordSource(Protocol):
    def repository(self, entity_type: str) -> Repository: ...


def _no_refresh() -> None:
    return None


@dataclass
class HandlerContext:
    writeln: Callable[[str], None]
    store: RecordSource
    session: CliSession
    prompts: PromptEngine
    on_data_update: Callable[[], None] = field(default=_no_refresh)


class Handler:
    """Base class for verb handlers."""

    verb = ""
    usage = ""

    def __init__(self, context: HandlerContext):
        self.ctx = context
        self.writeln = context.writeln

    def execute(self, command: ParsedCommand) -> None:
        raise NotImplementedError

    def repository(self, entity: str) -> Repository:
        return self.ctx.store.repository(entity)

    def notify(self) -> None:
        self.ctx.on_data_update()

    def report_error(self, error: Exception) -> None:
        logger.debug("%s failed: %s", self.verb, error)
        self.writeln(f"Error: {error}")

    def require_entity(self, command: ParsedCommand) -> bool:
        if command.entity:
            return True
        self.writeln("Error: No entity specified")
        self.writeln(f"Usage: {self.usage}")
        return False


def record_id_of(command: ParsedCommand) -> Optional[str]:
    return command.target or command.flags.get("id")


def format_record_line(record: dict) -> str:
    status = f" [{record['status']}]" if record.get("status") else ""
    priority = f" ({record['priority']})" if record.get("priority") else ""
    return f"  {str(record.get('id', ''))[:8]} - {record.get('title', '')}{status}{priority}"


def format_value(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
