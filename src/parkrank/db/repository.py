"""SQLite-backed store for parks and matchups."""

import logging
import sqlite3
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from datetime import UTC, datetime
from enum import Enum

from parkrank.db.connection import get_connection
from parkrank.errors import DuplicateParkError, StorageUnavailableError
from parkrank.models.matchup import Matchup, MatchupResolution
from parkrank.models.park import Park, ParkCreate, ParkIconType

logger = logging.getLogger(__name__)

# Columns a caller may overwrite through update_park()
PARK_UPDATABLE_COLUMNS = frozenset(
    {"name", "description", "icon_type", "image_url", "rating", "trending", "last_change"}
)


class _Repository:
    """Base for repositories bound to an open connection."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn


class ParkRepository(_Repository):
    """Repository for park CRUD operations."""

    def list_parks(self) -> list[Park]:
        """Get all parks ordered by id."""
        rows = self.conn.execute("SELECT * FROM parks ORDER BY id").fetchall()
        return [self._row_to_park(row) for row in rows]

    def get_park(self, park_id: int) -> Park | None:
        """Get a single park by ID."""
        row = self.conn.execute("SELECT * FROM parks WHERE id = ?", (park_id,)).fetchone()
        if row:
            return self._row_to_park(row)
        return None

    def create_park(self, park: ParkCreate) -> Park:
        """Create a new park and return it."""
        try:
            cursor = self.conn.execute(
                """
                INSERT INTO parks (name, description, icon_type, image_url, rating)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    park.name,
                    park.description,
                    park.icon_type.value,
                    park.image_url,
                    park.rating,
                ),
            )
        except sqlite3.IntegrityError as e:
            if "UNIQUE" in str(e):
                raise DuplicateParkError(park.name) from e
            raise
        created = self.get_park(cursor.lastrowid or 0)
        if created is None:
            msg = f"Park {park.name!r} vanished after insert"
            raise StorageUnavailableError(msg)
        return created

    def update_park(self, park_id: int, **fields: object) -> Park | None:
        """Overwrite the given columns of a park."""
        unknown = set(fields) - PARK_UPDATABLE_COLUMNS
        if unknown:
            msg = f"Cannot update park columns: {sorted(unknown)}"
            raise ValueError(msg)
        if fields:
            assignments = ", ".join(f"{column} = ?" for column in fields)
            values = [_to_sql(value) for value in fields.values()]
            try:
                self.conn.execute(
                    f"UPDATE parks SET {assignments} WHERE id = ?",  # noqa: S608
                    [*values, park_id],
                )
            except sqlite3.IntegrityError as e:
                if "UNIQUE" in str(e):
                    raise DuplicateParkError(str(fields.get("name"))) from e
                raise
        return self.get_park(park_id)

    def set_ranks(self, ranks: Mapping[int, int]) -> None:
        """Write the rank of each park."""
        self.conn.executemany(
            "UPDATE parks SET rank = ? WHERE id = ?",
            [(rank, park_id) for park_id, rank in ranks.items()],
        )

    def _row_to_park(self, row: sqlite3.Row) -> Park:
        """Convert a database row to a Park model."""
        return Park(
            id=row["id"],
            name=row["name"],
            description=row["description"] or "",
            icon_type=ParkIconType(row["icon_type"]),
            image_url=row["image_url"],
            rating=row["rating"],
            rank=row["rank"],
            trending=bool(row["trending"]),
            last_change=row["last_change"] or 0,
        )


class MatchupRepository(_Repository):
    """Repository for matchup records."""

    def create_matchup(self, park1_id: int, park2_id: int) -> Matchup:
        """Create a pending matchup and return it."""
        cursor = self.conn.execute(
            "INSERT INTO matchups (park1_id, park2_id, created_at) VALUES (?, ?, ?)",
            (park1_id, park2_id, datetime.now(UTC).isoformat()),
        )
        created = self.get_matchup(cursor.lastrowid or 0)
        if created is None:
            msg = f"Matchup {park1_id} vs {park2_id} vanished after insert"
            raise StorageUnavailableError(msg)
        return created

    def get_matchup(self, matchup_id: int) -> Matchup | None:
        """Get a single matchup by ID."""
        row = self.conn.execute("SELECT * FROM matchups WHERE id = ?", (matchup_id,)).fetchone()
        if row:
            return self._row_to_matchup(row)
        return None

    def resolve_matchup(self, matchup_id: int, resolution: MatchupResolution) -> bool:
        """Set the winner and ratings of a pending matchup.

        The ``winner_id IS NULL`` guard makes this a check-and-set: a second
        resolution of the same matchup updates no rows.
        """
        cursor = self.conn.execute(
            """
            UPDATE matchups SET
                winner_id = ?,
                park1_old_rating = ?,
                park2_old_rating = ?,
                park1_new_rating = ?,
                park2_new_rating = ?,
                resolved_at = ?
            WHERE id = ? AND winner_id IS NULL
            """,
            (
                resolution.winner_id,
                resolution.park1_old_rating,
                resolution.park2_old_rating,
                resolution.park1_new_rating,
                resolution.park2_new_rating,
                datetime.now(UTC).isoformat(),
                matchup_id,
            ),
        )
        return cursor.rowcount == 1

    def get_latest_resolved_matchup(self) -> Matchup | None:
        """Get the most recently resolved matchup."""
        row = self.conn.execute(
            """
            SELECT * FROM matchups
            WHERE winner_id IS NOT NULL
            ORDER BY resolved_at DESC, id DESC
            LIMIT 1
            """
        ).fetchone()
        if row:
            return self._row_to_matchup(row)
        return None

    def _row_to_matchup(self, row: sqlite3.Row) -> Matchup:
        """Convert a database row to a Matchup model."""
        return Matchup(
            id=row["id"],
            park1_id=row["park1_id"],
            park2_id=row["park2_id"],
            winner_id=row["winner_id"],
            park1_old_rating=row["park1_old_rating"],
            park2_old_rating=row["park2_old_rating"],
            park1_new_rating=row["park1_new_rating"],
            park2_new_rating=row["park2_new_rating"],
            created_at=datetime.fromisoformat(row["created_at"]),
            resolved_at=(
                datetime.fromisoformat(row["resolved_at"]) if row["resolved_at"] else None
            ),
        )


class SqliteSession(ParkRepository, MatchupRepository):
    """All repositories sharing one connection and one transaction."""


class SqliteStore:
    """Transactional store backed by the configured SQLite database.

    Writers are serialized in-process by a lock and across processes by
    ``BEGIN IMMEDIATE``, which takes SQLite's reserved lock up front.
    """

    def __init__(self) -> None:
        self._write_lock = threading.Lock()

    @contextmanager
    def transaction(self) -> Iterator[SqliteSession]:
        """Open a session; commit on success, roll back on any exception."""
        with self._write_lock:
            try:
                with get_connection() as conn:
                    conn.execute("BEGIN IMMEDIATE")
                    try:
                        yield SqliteSession(conn)
                    except BaseException:
                        conn.rollback()
                        raise
                    conn.commit()
            except sqlite3.OperationalError as e:
                logger.error("Database unavailable: %s", e, exc_info=True)
                raise StorageUnavailableError(str(e)) from e


def _to_sql(value: object) -> object:
    """Convert model values to SQLite column values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, bool):
        return int(value)
    return value
