"""Reference persistence collaborator (SQLite)."""

from .record_store import RecordStore, EntityRepository, new_id

__all__ = ["RecordStore", "EntityRepository", "new_id"]
