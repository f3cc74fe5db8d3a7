"""
Record Store - SQLite-backed persistence for programs, projects, tasks
and subtasks.

The interpreter only talks to the per-entity repositories returned by
RecordStore.repository(); any object with the same five methods can
stand in for it.
"""

import json
import logging
import secrets
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

ENTITY_TYPES = ("program", "project", "task", "subtask")
ID_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
ID_LENGTH = 6

# Stored in their own columns rather than in data_json
_COLUMN_FIELDS = {"id", "title", "parentId", "createdAt", "updatedAt"}


class RecordStore:
    """
    SQLite-backed record store.

    All optional record fields are kept as one JSON document per row.
    """

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path)
        self._repositories: dict[str, EntityRepository] = {}

    def connect(self) -> sqlite3.Connection:
        """Create a database connection with row factory."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def ensure_schema(self) -> None:
        """Initialize database schema from schema.sql."""
        schema_path = Path(__file__).with_name("schema.sql")
        sql = schema_path.read_text(encoding="utf-8")
        with self.connect() as conn:
            conn.executescript(sql)
            conn.commit()

    def repository(self, entity_type: str) -> "EntityRepository":
        """CRUD operations scoped to one entity type."""
        if entity_type not in ENTITY_TYPES:
            raise ValueError(f"Unknown entity type: {entity_type}")
        if entity_type not in self._repositories:
            self._repositories[entity_type] = EntityRepository(self, entity_type)
        return self._repositories[entity_type]

    def count(self, entity_type: Optional[str] = None) -> int:
        with self.connect() as conn:
            if entity_type:
                row = conn.execute(
                    "SELECT COUNT(*) FROM records WHERE type = ?", (entity_type,)
                ).fetchone()
            else:
                row = conn.execute("SELECT COUNT(*) FROM records").fetchone()
        return row[0]


class EntityRepository:
    """create / get / list / update / delete for a single entity type."""

    def __init__(self, store: RecordStore, entity_type: str):
        self.store = store
        self.entity_type = entity_type

    def create(self, data: dict) -> str:
        """Insert a record and return its generated id."""
        if not data.get("title"):
            raise ValueError("title is required")

        record_id = self._unused_id()
        now = _now()
        extra = {k: v for k, v in data.items() if k not in _COLUMN_FIELDS}
        with self.store.connect() as conn:
            conn.execute(
                """
                INSERT INTO records (id, type, parent_id, title, data_json,
                    created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record_id,
                    self.entity_type,
                    data.get("parentId"),
                    data["title"],
                    json_dumps(extra),
                    now,
                    now,
                )
            )
            conn.commit()
        logger.info("Created %s %s", self.entity_type, record_id)
        return record_id

    def get(self, record_id: str) -> Optional[dict]:
        """Get a record by id (case-insensitive)."""
        with self.store.connect() as conn:
            row = conn.execute(
                "SELECT * FROM records WHERE id = ? AND type = ?",
                (record_id, self.entity_type)
            ).fetchone()
        if not row:
            return None
        return _parse_record_row(row)

    def list(self, parent_id: Optional[str] = None) -> list[dict]:
        """All records of this type, oldest first."""
        query = "SELECT * FROM records WHERE type = ?"
        params: list[Any] = [self.entity_type]
        if parent_id:
            query += " AND parent_id = ? COLLATE NOCASE"
            params.append(parent_id)
        query += " ORDER BY created_at, rowid"

        with self.store.connect() as conn:
            rows = conn.execute(query, params).fetchall()
        return [_parse_record_row(row) for row in rows]

    def update(self, record_id: str, partial: dict) -> None:
        """Merge partial into an existing record."""
        current = self.get(record_id)
        if current is None:
            raise ValueError(f"{self.entity_type.capitalize()} not found: {record_id}")

        merged = {**current, **partial}
        extra = {k: v for k, v in merged.items() if k not in _COLUMN_FIELDS}
        with self.store.connect() as conn:
            conn.execute(
                """
                UPDATE records
                SET title = ?, parent_id = ?, data_json = ?, updated_at = ?
                WHERE id = ? AND type = ?
                """,
                (
                    merged["title"],
                    merged.get("parentId"),
                    json_dumps(extra),
                    _now(),
                    current["id"],
                    self.entity_type,
                )
            )
            conn.commit()
        logger.info("Updated %s %s: %s", self.entity_type, current["id"], sorted(partial))

    def delete(self, record_id: str) -> None:
        with self.store.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM records WHERE id = ? AND type = ?",
                (record_id, self.entity_type)
            )
            conn.commit()
        if cursor.rowcount == 0:
            raise ValueError(f"{self.entity_type.capitalize()} not found: {record_id}")
        logger.info("Deleted %s %s", self.entity_type, record_id)

    def _unused_id(self) -> str:
        with self.store.connect() as conn:
            while True:
                candidate = new_id()
                taken = conn.execute(
                    "SELECT 1 FROM records WHERE id = ?", (candidate,)
                ).fetchone()
                if not taken:
                    return candidate


def new_id() -> str:
    """Generate a 6-character uppercase base-36 id."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


def json_dumps(value: Any) -> str:
    """Serialize value to JSON string."""
    return json.dumps(value, ensure_ascii=True, separators=(",", ":"))


def json_loads(value: str) -> Any:
    """Deserialize JSON string to value."""
    return json.loads(value) if value else None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _parse_record_row(row: sqlite3.Row) -> dict:
    """Parse a record row to dict."""
    record = {
        "id": row["id"],
        "title": row["title"],
    }
    if row["parent_id"]:
        record["parentId"] = row["parent_id"]
    record.update(json_loads(row["data_json"]) or {})
    record["createdAt"] = row["created_at"]
    record["updatedAt"] = row["updated_at"]
    return record
