"""
List and Search Handlers.

    list tasks
    list tasks status:active parent:ABC123 --limit=10
    search tasks "bug"
"""

from typing import Optional

from ..parser.normalize import plural
from ..parser.tokenizer import ParsedCommand
from .base import Handler, format_record_line

FILTER_KEYS = ("parentId", "status", "priority")


class ListHandler(Handler):
    verb = "list"
    usage = "list <entity> (programs/projects/tasks/subtasks)"

    def execute(self, command: ParsedCommand) -> None:
        if not self.require_entity(command):
            return

        try:
            filters = self.filters_from(command)
            records = self.repository(command.entity).list()
            records = self.apply_filters(records, filters)
        except Exception as e:
            self.report_error(e)
            return

        self.ctx.session.set_last_filter(filters)
        self.render(command.entity, records)

    def filters_from(self, command: ParsedCommand) -> dict:
        """Record filters named by the command's flags."""
        filters = {}
        parent = command.flag("parentId", "parent")
        if parent:
            filters["parentId"] = parent
        for key in ("status", "priority"):
            if command.flags.get(key):
                filters[key] = command.flags[key].lower()

        limit = command.flags.get("limit")
        if limit is not None:
            filters["limit"] = _parse_limit(limit)
        return filters

    def apply_filters(self, records: list[dict], filters: dict) -> list[dict]:
        selected = []
        for record in records:
            if all(_matches(record, key, filters[key]) for key in FILTER_KEYS if key in filters):
                selected.append(record)
        limit = filters.get("limit")
        return selected[:limit] if limit is not None else selected

    def render(self, entity: str, records: list[dict], heading: Optional[str] = None) -> None:
        name = plural(entity)
        self.writeln(heading or f"{name.capitalize()} ({len(records)}):")
        if not records:
            self.writeln(f"  No {name} found.")
            return
        for record in records:
            self.writeln(format_record_line(record))


class SearchHandler(ListHandler):
    verb = "search"
    usage = 'search <entity> "query"'

    def execute(self, command: ParsedCommand) -> None:
        if not self.require_entity(command):
            return

        query = (command.target or command.flags.get("query") or "").strip()
        if not query:
            self.writeln("Error: No search query given")
            self.writeln(f"Usage: {self.usage}")
            return

        try:
            filters = self.filters_from(command)
            records = self.repository(command.entity).list()
            records = [r for r in records if _contains(r, query)]
            records = self.apply_filters(records, filters)
        except Exception as e:
            self.report_error(e)
            return

        self.ctx.session.set_last_filter({**filters, "query": query})
        heading = f'{plural(command.entity).capitalize()} matching "{query}" ({len(records)}):'
        self.render(command.entity, records, heading=heading)


def _parse_limit(raw: str) -> int:
    try:
        limit = int(raw)
    except ValueError:
        raise ValueError(f'Invalid limit: "{raw}". Expected a positive number') from None
    if limit < 1:
        raise ValueError(f'Invalid limit: "{raw}". Expected a positive number')
    return limit


def _matches(record: dict, key: str, expected: str) -> bool:
    value = record.get(key)
    return value is not None and str(value).lower() == expected.lower()


def _contains(record: dict, query: str) -> bool:
    needle = query.lower()
    haystack = [record.get("title") or "", record.get("description") or ""]
    return any(needle in str(text).lower() for text in haystack)
