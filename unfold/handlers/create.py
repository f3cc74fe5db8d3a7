"""
Create Handler - create <entity> "title" [flags]

Two paths:
- quick create: title and (when needed) parent are already known, so the
  record is built straight from the flags with one store call
- guided create: anything missing is asked for through the prompt
  engine, one question per input line
"""

from ..core.prompt import Dialog, Question
from ..core.schema import EntitySchema, get_schema
from ..parser.tokenizer import ParsedCommand
from .base import Handler


class CreateHandler(Handler):
    verb = "create"
    usage = 'create <entity> "title" [flags]'

    def execute(self, command: ParsedCommand) -> None:
        if not self.require_entity(command):
            return

        entity = command.entity
        schema = get_schema(entity)

        unknown = schema.unknown_flags(command.flags)
        if unknown:
            self.writeln(f"Warning: ignoring unknown field(s): {', '.join(unknown)}")

        values = schema.collect(command.flags)
        if not values.get("title") and command.target:
            values["title"] = command.target

        has_title = bool(values.get("title"))
        has_parent = bool(values.get("parentId") or self.ctx.session.default_parent(entity))
        guided = command.flags.get("guided", "false").lower() not in ("false", "0", "no")

        if has_title and (not schema.requires_parent or has_parent) and not guided:
            self.quick_create(entity, schema, values)
        else:
            self.guided_create(entity, schema, values)

    def quick_create(self, entity: str, schema: EntitySchema, values: dict) -> None:
        if schema.requires_parent and not values.get("parentId"):
            values["parentId"] = self.ctx.session.default_parent(entity)
        try:
            self._create_record(entity, schema, values)
        except Exception as e:
            self.report_error(e)

    def guided_create(self, entity: str, schema: EntitySchema, values: dict) -> None:
        self.writeln(f"Creating new {entity}...")
        self.writeln("(Press Enter to skip optional fields)")
        self.ctx.prompts.start(
            self._guided_dialog(entity, schema, values),
            on_error=self.report_error,
        )

    def _guided_dialog(self, entity: str, schema: EntitySchema, values: dict) -> Dialog:
        if not values.get("title"):
            values["title"] = yield Question("Title*", required=True)

        if schema.requires_parent and not values.get("parentId"):
            default = self.ctx.session.default_parent(entity)
            if default:
                answer = yield Question(f"Parent ID* (default: {default})", required=False)
                values["parentId"] = answer or default
            else:
                values["parentId"] = yield Question("Parent ID*", required=True)

        for spec in schema.guided_fields():
            if values.get(spec.name):
                continue
            answer = yield Question(spec.question)
            problem = spec.problem(answer)
            while problem:
                self.writeln(problem)
                answer = yield Question(spec.question)
                problem = spec.problem(answer)
            if answer:
                values[spec.name] = answer

        self._create_record(entity, schema, values)

    def _create_record(self, entity: str, schema: EntitySchema, values: dict) -> str:
        record = schema.build(values)
        record_id = self.repository(entity).create(record)

        self.writeln(f"✓ Created {entity}: {record_id}")
        self.writeln(f"  Title: {record['title']}")
        if record.get("parentId"):
            self.writeln(f"  Parent: {record['parentId']}")
        self.notify()
        return record_id
