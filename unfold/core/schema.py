"""
Entity schema - Known fields per record type.

One ordered list of FieldSpecs per entity drives:
- record construction from command flags (quick create, update)
- reporting of unknown flags
- the guided-create question sequence
- a JSON Schema that every record is validated against before it
  reaches the store
"""

import math
from dataclasses import dataclass, field
from typing import Any, Optional

import jsonschema

from ..parser.validator import VALID_PRIORITIES, VALID_STATUSES, check_choice

SECONDARY_STATUSES = ["planned", "completed"]

# Flags that steer a command rather than describe a record
CONTROL_FLAGS = {"guided", "force", "yes", "id", "limit", "all"}


@dataclass(frozen=True)
class FieldSpec:
    """One record field and how to read it from a flag value."""
    name: str
    label: str
    kind: str = "text"  # text | enum | list | number
    choices: tuple = ()
    aliases: tuple = ()
    guided: bool = False

    @property
    def question(self) -> str:
        if self.kind == "enum" and self.choices:
            return f"{self.label} ({'/'.join(self.choices)})"
        return self.label

    def problem(self, raw: str) -> Optional[str]:
        """Why raw is not acceptable for this field, or None."""
        if not raw:
            return None
        if self.kind == "enum":
            result = check_choice(self.name, raw, list(self.choices))
            return result.error if result else None
        if self.kind == "number":
            try:
                value = float(raw)
            except ValueError:
                value = math.nan
            if not math.isfinite(value):
                return f'Invalid {self.name}: "{raw}". Expected a number'
        return None

    def convert(self, raw: str) -> Any:
        if self.kind == "enum":
            return raw.lower()
        if self.kind == "list":
            return [item.strip() for item in raw.split(",") if item.strip()]
        if self.kind == "number":
            return float(raw)
        return raw


@dataclass
class EntitySchema:
    entity: str
    fields: list[FieldSpec] = field(default_factory=list)
    parent: Optional[str] = None

    @property
    def requires_parent(self) -> bool:
        return self.parent is not None

    def field_for(self, key: str) -> Optional[FieldSpec]:
        """Resolve a flag key (name or alias) to its field."""
        for spec in self.fields:
            if key == spec.name or key in spec.aliases:
                return spec
        return None

    def guided_fields(self) -> list[FieldSpec]:
        return [spec for spec in self.fields if spec.guided]

    def unknown_flags(self, flags: dict[str, str]) -> list[str]:
        return sorted(
            key for key in flags
            if key not in CONTROL_FLAGS and self.field_for(key) is None
        )

    def collect(self, flags: dict[str, str]) -> dict[str, str]:
        """Raw values for known fields, keyed by canonical field name."""
        values = {}
        for key, raw in flags.items():
            spec = self.field_for(key)
            if spec is None or not raw:
                continue
            # Canonical name wins over an alias given on the same line
            if spec.name in values and key != spec.name:
                continue
            values[spec.name] = raw
        return values

    def build(self, values: dict[str, str], partial: bool = False) -> dict[str, Any]:
        """
        Convert raw field values into a record payload.

        Empty values are left out. Raises ValueError when a value does not
        fit its field or the payload breaks the JSON Schema.
        """
        record = {}
        for spec in self.fields:
            raw = values.get(spec.name)
            if raw is None or raw == "":
                continue
            problem = spec.problem(raw)
            if problem:
                raise ValueError(problem)
            record[spec.name] = spec.convert(raw)

        self.check(record, partial=partial)
        return record

    def json_schema(self, partial: bool = False) -> dict:
        properties = {}
        for spec in self.fields:
            if spec.kind == "enum":
                properties[spec.name] = {"type": "string", "enum": list(spec.choices)}
            elif spec.kind == "list":
                properties[spec.name] = {"type": "array", "items": {"type": "string"}}
            elif spec.kind == "number" and spec.name == "progress":
                properties[spec.name] = {"type": "number", "minimum": 0, "maximum": 100}
            elif spec.kind == "number":
                properties[spec.name] = {"type": "number"}
            else:
                properties[spec.name] = {"type": "string", "minLength": 1}

        schema = {
            "type": "object",
            "properties": properties,
            "additionalProperties": False,
        }
        if not partial:
            schema["required"] = ["title"] + (["parentId"] if self.requires_parent else [])
        return schema

    def check(self, record: dict, partial: bool = False) -> None:
        try:
            jsonschema.validate(instance=record, schema=self.json_schema(partial))
        except jsonschema.ValidationError as e:
            raise ValueError(_describe_error(e)) from e


def _describe_error(error: jsonschema.ValidationError) -> str:
    if error.validator == "required":
        return error.message.replace("is a required property", "is required")
    where = ".".join(str(p) for p in error.absolute_path)
    return f"{where}: {error.message}" if where else error.message


def _common(status_choices: list[str]) -> list[FieldSpec]:
    return [
        FieldSpec("description", "Description", aliases=("desc",), guided=True),
        FieldSpec("priority", "Priority", kind="enum", choices=tuple(VALID_PRIORITIES), guided=True),
        FieldSpec("status", "Status", kind="enum", choices=tuple(status_choices), guided=True),
    ]


TITLE = FieldSpec("title", "Title*")
PARENT = FieldSpec("parentId", "Parent ID*", aliases=("parent",))
NOTES = FieldSpec("notes", "Notes")
TAGS = FieldSpec("tags", "Tags (comma-separated)", kind="list")
OBJECTIVE = FieldSpec("objective", "Objective")
RESOURCES = FieldSpec("resources", "Resources (comma-separated)", kind="list")
DEPENDENCIES = FieldSpec("dependencies", "Dependencies (comma-separated IDs)", kind="list")
PROGRESS = FieldSpec("progress", "Progress (0-100)", kind="number")


SCHEMAS = {
    "program": EntitySchema("program", [
        TITLE,
        *_common(VALID_STATUSES),
        FieldSpec("category", "Category"),
        OBJECTIVE, NOTES, TAGS, RESOURCES, PROGRESS,
    ]),
    "project": EntitySchema("project", [
        TITLE, PARENT,
        *_common(VALID_STATUSES),
        FieldSpec("phase", "Phase"),
        OBJECTIVE, NOTES, TAGS, RESOURCES, DEPENDENCIES, PROGRESS,
    ], parent="program"),
    "task": EntitySchema("task", [
        TITLE, PARENT,
        *_common(VALID_STATUSES),
        NOTES, TAGS, DEPENDENCIES,
        FieldSpec("subtasks", "Subtasks (comma-separated IDs)", kind="list"),
    ], parent="project"),
    "subtask": EntitySchema("subtask", [
        TITLE, PARENT,
        *_common(SECONDARY_STATUSES),
        NOTES, TAGS,
    ], parent="task"),
}


def get_schema(entity: str) -> EntitySchema:
    try:
        return SCHEMAS[entity]
    except KeyError:
        raise ValueError(f"Unknown entity: {entity}") from None
