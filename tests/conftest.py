"""
Shared pytest fixtures for all tests.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from unfold.core.interpreter import Interpreter
from unfold.core.session import CliSession
from unfold.db.record_store import RecordStore


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture
def db_path(tmp_path):
    """Temporary database path for testing."""
    return tmp_path / "test_unfold.db"


@pytest.fixture
def record_store(db_path):
    """Fresh record store with schema initialized."""
    store = RecordStore(db_path)
    store.ensure_schema()
    return store


@pytest.fixture
def populated_store(record_store):
    """
    Record store with a small hierarchy loaded.

    Contains:
    - 1 program (high, active)
    - 1 project under it
    - 2 tasks under the project (one active, one completed)
    """
    from tests.fixtures.records import setup_hierarchy

    record_store.ids = setup_hierarchy(record_store)
    return record_store


@pytest.fixture
def mock_store():
    """Store double whose repository() hands out one shared MagicMock."""
    store = MagicMock()
    repository = MagicMock()
    repository.create.return_value = "ABC123"
    repository.get.return_value = None
    repository.list.return_value = []
    store.repository.return_value = repository
    store.repo = repository
    return store


# =============================================================================
# Interpreter Fixtures
# =============================================================================

@pytest.fixture
def output():
    """List-backed line sink."""
    return []


@pytest.fixture
def session():
    return CliSession()


@pytest.fixture
def refreshes():
    """Counter of on_data_update calls."""
    return []


@pytest.fixture
def interpreter(record_store, output, session, refreshes):
    """Interpreter over a real (empty) SQLite store."""
    return Interpreter(
        store=record_store,
        writeln=output.append,
        session=session,
        on_data_update=lambda: refreshes.append(True),
    )


@pytest.fixture
def mock_interpreter(mock_store, output, session, refreshes):
    """Interpreter over a MagicMock store."""
    return Interpreter(
        store=mock_store,
        writeln=output.append,
        session=session,
        on_data_update=lambda: refreshes.append(True),
    )
