"""
Single-record handlers: info, update, remove, and use (navigation).

    info task ABC123
    update task ABC123 status:completed priority:high
    remove task ABC123 [--force]
    use project ABC123
"""

from ..core.prompt import Dialog, Question
from ..core.schema import get_schema
from ..parser.tokenizer import ParsedCommand
from .base import Handler, format_value, record_id_of

LABELS = {
    "id": "ID",
    "parentId": "Parent",
    "createdAt": "Created",
    "updatedAt": "Updated",
}

CONTEXT_LEVELS = ("program", "project", "task")


def label_for(key: str) -> str:
    return LABELS.get(key, key.capitalize())


class InfoHandler(Handler):
    verb = "info"
    usage = "info <entity> <id>"

    def execute(self, command: ParsedCommand) -> None:
        if not self.require_entity(command):
            return
        record_id = record_id_of(command)

        try:
            record = self.repository(command.entity).get(record_id)
        except Exception as e:
            self.report_error(e)
            return

        if record is None:
            self.writeln(f"Error: {command.entity} {record_id} not found")
            return

        self.writeln(f"{command.entity.capitalize()} {record['id']}")
        for key, value in _ordered_fields(command.entity, record):
            self.writeln(f"  {label_for(key)}: {format_value(value)}")


class UpdateHandler(Handler):
    verb = "update"
    usage = "update <entity> <id> key:value ..."

    def execute(self, command: ParsedCommand) -> None:
        if not self.require_entity(command):
            return
        record_id = record_id_of(command)
        schema = get_schema(command.entity)

        unknown = schema.unknown_flags(command.flags)
        if unknown:
            self.writeln(f"Warning: ignoring unknown field(s): {', '.join(unknown)}")

        values = schema.collect(command.flags)
        if not values:
            self.writeln("Error: Nothing to update")
            self.writeln(f"Usage: {self.usage}")
            return

        try:
            repository = self.repository(command.entity)
            record = repository.get(record_id)
            if record is None:
                self.writeln(f"Error: {command.entity} {record_id} not found")
                return
            partial = schema.build(values, partial=True)
            repository.update(record["id"], partial)
        except Exception as e:
            self.report_error(e)
            return

        self.writeln(f"✓ Updated {command.entity}: {record['id']}")
        for key, value in partial.items():
            self.writeln(f"  {label_for(key)}: {format_value(value)}")
        self.notify()


class RemoveHandler(Handler):
    verb = "remove"
    usage = "remove <entity> <id> [--force]"

    def execute(self, command: ParsedCommand) -> None:
        if not self.require_entity(command):
            return
        record_id = record_id_of(command)

        try:
            record = self.repository(command.entity).get(record_id)
        except Exception as e:
            self.report_error(e)
            return

        if record is None:
            self.writeln(f"Error: {command.entity} {record_id} not found")
            return

        if command.flag("force", "yes"):
            try:
                self._delete(command.entity, record)
            except Exception as e:
                self.report_error(e)
            return

        self.ctx.prompts.start(
            self._confirm_dialog(command.entity, record),
            on_error=self.report_error,
        )

    def _confirm_dialog(self, entity: str, record: dict) -> Dialog:
        answer = yield Question(f'Remove {entity} {record["id"]} "{record["title"]}"? (y/N)')
        if answer.lower() in ("y", "yes"):
            self._delete(entity, record)
        else:
            self.writeln("Cancelled.")

    def _delete(self, entity: str, record: dict) -> None:
        self.repository(entity).delete(record["id"])
        session = self.ctx.session
        if entity in CONTEXT_LEVELS and (session.get_current(entity) or "").upper() == record["id"].upper():
            session.set_current(entity, None)
            _clear_deeper(session, entity)
        self.writeln(f"✓ Removed {entity}: {record['id']}")
        self.notify()


class UseHandler(Handler):
    """Set the navigation context that supplies default parents."""

    verb = "use"
    usage = "use [program|project|task] [id]"

    def execute(self, command: ParsedCommand) -> None:
        session = self.ctx.session
        if not command.entity:
            self.show_context()
            return

        entity = command.entity
        if entity not in CONTEXT_LEVELS:
            self.writeln(f"Error: Cannot use a {entity} as context")
            self.writeln("Context levels: " + ", ".join(CONTEXT_LEVELS))
            return

        record_id = record_id_of(command)
        if not record_id:
            session.set_current(entity, None)
            self.writeln(f"Cleared {entity} context")
            return

        try:
            record = self.repository(entity).get(record_id)
        except Exception as e:
            self.report_error(e)
            return
        if record is None:
            self.writeln(f"Error: {entity} {record_id} not found")
            return

        session.set_current(entity, record["id"])
        _clear_deeper(session, entity)
        self.writeln(f'Using {entity} {record["id"]} "{record["title"]}"')

    def show_context(self) -> None:
        self.writeln("Context:")
        for entity in CONTEXT_LEVELS:
            self.writeln(f"  {entity}: {self.ctx.session.get_current(entity) or '(none)'}")


def _clear_deeper(session, entity: str) -> None:
    """Forget the levels below entity; they belonged to the old context."""
    for deeper in CONTEXT_LEVELS[CONTEXT_LEVELS.index(entity) + 1:]:
        session.set_current(deeper, None)


def _ordered_fields(entity: str, record: dict) -> list[tuple]:
    schema = get_schema(entity)
    order = [spec.name for spec in schema.fields] + ["createdAt", "updatedAt"]
    known = [(key, record[key]) for key in order if record.get(key) not in (None, "", [])]
    extra = [
        (key, value) for key, value in record.items()
        if key not in order and key != "id" and value not in (None, "", [])
    ]
    return known + extra
