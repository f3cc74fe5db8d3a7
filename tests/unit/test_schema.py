"""
Tests for per-entity field schemas.
"""

import pytest

from unfold.core.schema import SCHEMAS, get_schema


class TestFieldSpec:
    """Tests for single-field parsing."""

    def test_enum_question_lists_choices(self):
        priority = get_schema("task").field_for("priority")
        assert priority.question == "Priority (low/medium/high/critical)"

    def test_subtask_status_choices(self):
        status = get_schema("subtask").field_for("status")
        assert status.question == "Status (planned/completed)"

    def test_list_conversion(self):
        tags = get_schema("task").field_for("tags")
        assert tags.convert("a, b,,c ") == ["a", "b", "c"]

    def test_number_problem(self):
        progress = get_schema("program").field_for("progress")

        assert progress.problem("lots") == 'Invalid progress: "lots". Expected a number'
        assert progress.problem("40") is None

    def test_empty_answer_has_no_problem(self):
        assert get_schema("task").field_for("priority").problem("") is None


class TestEntitySchema:
    """Tests for flag collection and record building."""

    def test_alias_resolves(self):
        assert get_schema("task").field_for("desc").name == "description"
        assert get_schema("task").field_for("parent").name == "parentId"

    def test_program_has_no_parent(self):
        assert not get_schema("program").requires_parent
        assert get_schema("program").field_for("parent") is None

    def test_child_entities_require_parent(self):
        assert SCHEMAS["project"].parent == "program"
        assert SCHEMAS["task"].parent == "project"
        assert SCHEMAS["subtask"].parent == "task"

    def test_unknown_flags(self):
        flags = {"guided": "true", "color": "red", "priority": "high", "zz": "1"}
        assert get_schema("task").unknown_flags(flags) == ["color", "zz"]

    def test_collect_maps_aliases(self):
        values = get_schema("task").collect({"parent": "P1", "desc": "text", "limit": "3"})
        assert values == {"parentId": "P1", "description": "text"}

    @pytest.mark.parametrize("flags", [
        {"desc": "alias", "description": "canonical"},
        {"description": "canonical", "desc": "alias"},
    ])
    def test_canonical_name_wins(self, flags):
        assert get_schema("task").collect(flags)["description"] == "canonical"

    def test_build_converts_values(self):
        record = get_schema("task").build({
            "title": "Fix bug",
            "parentId": "P1",
            "priority": "HIGH",
            "tags": "ui,login",
        })

        assert record == {
            "title": "Fix bug",
            "parentId": "P1",
            "priority": "high",
            "tags": ["ui", "login"],
        }

    def test_build_drops_empty_values(self):
        record = get_schema("program").build({"title": "Work", "description": ""})
        assert record == {"title": "Work"}

    def test_build_requires_title(self):
        with pytest.raises(ValueError, match="'title' is required"):
            get_schema("program").build({"description": "no title"})

    def test_build_requires_parent_for_children(self):
        with pytest.raises(ValueError, match="'parentId' is required"):
            get_schema("project").build({"title": "Website"})

    def test_build_rejects_bad_enum(self):
        with pytest.raises(ValueError, match='Invalid priority: "urgent"'):
            get_schema("task").build({"title": "T", "parentId": "P", "priority": "urgent"})

    def test_progress_range(self):
        with pytest.raises(ValueError, match="progress"):
            get_schema("program").build({"title": "Work", "progress": "150"})

    @pytest.mark.parametrize("raw", ["nan", "inf", "-Infinity"])
    def test_non_finite_numbers_rejected(self, raw):
        progress = get_schema("program").field_for("progress")
        assert progress.problem(raw) == f'Invalid progress: "{raw}". Expected a number'

        with pytest.raises(ValueError, match="Expected a number"):
            get_schema("program").build({"title": "Work", "progress": raw})

    def test_partial_build_skips_required(self):
        assert get_schema("task").build({"status": "paused"}, partial=True) == {"status": "paused"}

    def test_json_schema_closed(self):
        schema = get_schema("program").json_schema()

        assert schema["additionalProperties"] is False
        assert schema["required"] == ["title"]
        assert "required" not in get_schema("program").json_schema(partial=True)

    def test_guided_fields(self):
        names = [spec.name for spec in get_schema("project").guided_fields()]
        assert names == ["description", "priority", "status"]

    def test_unknown_entity(self):
        with pytest.raises(ValueError, match="Unknown entity: widget"):
            get_schema("widget")
