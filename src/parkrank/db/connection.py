"""Database connection management."""

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from parkrank.config import get_settings


def get_db_path() -> Path:
    """Get the database path, creating parent directories if needed."""
    db_path = get_settings().db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return db_path


@contextmanager
def get_connection() -> Iterator[sqlite3.Connection]:
    """Get a database connection with WAL mode enabled.

    The database directory is created by ``migrate()``, which runs before
    the first connection.
    """
    settings = get_settings()
    conn = sqlite3.connect(
        settings.db_path,
        timeout=settings.db_timeout_seconds,
        check_same_thread=False,
    )
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    try:
        yield conn
    finally:
        conn.close()
