"""
Tests for the SQLite RecordStore.

Tests all CRUD operations per entity type.
"""

import re

import pytest

from unfold.db.record_store import RecordStore, new_id


class TestIds:
    def test_new_id_shape(self):
        for _ in range(20):
            assert re.fullmatch(r"[0-9A-Z]{6}", new_id())


class TestRecordOperations:
    """Tests for record CRUD."""

    def test_create_and_get(self, record_store):
        """Can create a record and read it back."""
        programs = record_store.repository("program")
        record_id = programs.create({"title": "Work", "priority": "high", "tags": ["a"]})

        record = programs.get(record_id)
        assert record["id"] == record_id
        assert record["title"] == "Work"
        assert record["priority"] == "high"
        assert record["tags"] == ["a"]
        assert record["createdAt"] == record["updatedAt"]
        assert "parentId" not in record

    def test_get_is_case_insensitive(self, record_store):
        programs = record_store.repository("program")
        record_id = programs.create({"title": "Work"})

        assert programs.get(record_id.lower())["id"] == record_id

    def test_get_nonexistent(self, record_store):
        assert record_store.repository("task").get("NOPE00") is None

    def test_get_scoped_to_type(self, record_store):
        record_id = record_store.repository("program").create({"title": "Work"})
        assert record_store.repository("project").get(record_id) is None

    def test_create_requires_title(self, record_store):
        with pytest.raises(ValueError, match="title is required"):
            record_store.repository("program").create({"description": "x"})

    def test_parent_id_round_trips(self, record_store):
        project_id = record_store.repository("project").create(
            {"title": "Website", "parentId": "PRG001"}
        )
        assert record_store.repository("project").get(project_id)["parentId"] == "PRG001"

    def test_list_oldest_first(self, record_store):
        tasks = record_store.repository("task")
        first = tasks.create({"title": "One", "parentId": "P1"})
        second = tasks.create({"title": "Two", "parentId": "P1"})
        tasks.create({"title": "Three", "parentId": "P2"})

        assert [r["id"] for r in tasks.list()][:2] == [first, second]
        assert [r["title"] for r in tasks.list(parent_id="p1")] == ["One", "Two"]

    def test_update_merges(self, record_store):
        tasks = record_store.repository("task")
        record_id = tasks.create({"title": "Fix bug", "parentId": "P1", "priority": "low"})
        tasks.update(record_id, {"status": "active"})

        record = tasks.get(record_id)
        assert record["priority"] == "low"
        assert record["status"] == "active"
        assert record["parentId"] == "P1"

    def test_update_title(self, record_store):
        programs = record_store.repository("program")
        record_id = programs.create({"title": "Old"})
        programs.update(record_id, {"title": "New"})

        assert programs.get(record_id)["title"] == "New"

    def test_update_missing(self, record_store):
        with pytest.raises(ValueError, match="Task not found: NOPE00"):
            record_store.repository("task").update("NOPE00", {"status": "active"})

    def test_delete(self, record_store):
        programs = record_store.repository("program")
        record_id = programs.create({"title": "Work"})
        programs.delete(record_id)

        assert programs.get(record_id) is None
        assert record_store.count() == 0

    def test_delete_missing(self, record_store):
        with pytest.raises(ValueError, match="Program not found"):
            record_store.repository("program").delete("NOPE00")

    def test_count_by_type(self, populated_store):
        assert populated_store.count("task") == 2
        assert populated_store.count() == 4

    def test_unknown_entity_type(self, record_store):
        with pytest.raises(ValueError, match="Unknown entity type: widget"):
            record_store.repository("widget")

    def test_repository_cached(self, record_store):
        assert record_store.repository("task") is record_store.repository("task")

    def test_ensure_schema_idempotent(self, db_path):
        store = RecordStore(db_path)
        store.ensure_schema()
        store.ensure_schema()
        assert store.count() == 0
