"""pytest configuration and shared fixtures."""

import sqlite3
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from unittest.mock import patch

import pytest

from parkrank.db.memory import MemoryStore
from parkrank.db.repository import SqliteStore
from parkrank.db.store import RankingStore
from parkrank.models.park import Park, ParkCreate
from parkrank.ranking.parks import create_park


@pytest.fixture(autouse=True)
def use_test_database() -> Iterator[sqlite3.Connection]:
    """Use an isolated in-memory database for all tests.

    This fixture runs automatically for all tests to ensure they
    don't touch the real database.
    """
    from parkrank.db.migrate import SCHEMA

    test_conn = sqlite3.connect(":memory:", check_same_thread=False)
    test_conn.row_factory = sqlite3.Row
    test_conn.executescript(SCHEMA)
    test_conn.commit()

    @contextmanager
    def mock_get_connection() -> Iterator[sqlite3.Connection]:
        """Return the test connection as a context manager."""
        yield test_conn

    # Patch in all modules that import get_connection
    with (
        patch("parkrank.db.connection.get_connection", mock_get_connection),
        patch("parkrank.db.repository.get_connection", mock_get_connection),
        patch("parkrank.db.migrate.get_connection", mock_get_connection),
    ):
        yield test_conn

    test_conn.close()


@pytest.fixture
def file_store(tmp_path: Path) -> Iterator[SqliteStore]:
    """SqliteStore on a real database file, one connection per transaction."""
    from parkrank.db.migrate import SCHEMA

    db_path = tmp_path / "parkrank.db"
    with sqlite3.connect(db_path) as conn:
        conn.executescript(SCHEMA)

    @contextmanager
    def file_connection() -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(db_path, timeout=10.0, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        try:
            yield conn
        finally:
            conn.close()

    with patch("parkrank.db.repository.get_connection", file_connection):
        yield SqliteStore()


@pytest.fixture(params=["memory", "sqlite"])
def store(request: pytest.FixtureRequest) -> RankingStore:
    """Every engine test runs against both backends."""
    if request.param == "memory":
        return MemoryStore()
    return SqliteStore()


@pytest.fixture
def make_park(store: RankingStore) -> Callable[..., Park]:
    """Create a park in ``store`` with a generated name."""
    counter = iter(range(1, 10_000))

    def _make(name: str | None = None, rating: int = 1500) -> Park:
        park_name = name or f"Park {next(counter)}"
        return create_park(store, ParkCreate(name=park_name, rating=rating))

    return _make
