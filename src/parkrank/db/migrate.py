"""Database migrations for parkrank."""

import logging

from parkrank.db.connection import get_connection, get_db_path

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS parks (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  name TEXT NOT NULL UNIQUE,
  description TEXT NOT NULL DEFAULT '',
  icon_type TEXT NOT NULL DEFAULT 'mountain',
  image_url TEXT,

  -- Rating state; rank is derived from rating and rewritten after every change
  rating INTEGER NOT NULL DEFAULT 1500,
  rank INTEGER,
  trending BOOLEAN NOT NULL DEFAULT 0,
  last_change INTEGER NOT NULL DEFAULT 0
);

CREATE INDEX IF NOT EXISTS idx_parks_rating ON parks(rating DESC);
CREATE INDEX IF NOT EXISTS idx_parks_rank ON parks(rank);

-- winner_id IS NULL marks a pending matchup
CREATE TABLE IF NOT EXISTS matchups (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  park1_id INTEGER NOT NULL,
  park2_id INTEGER NOT NULL,
  winner_id INTEGER,
  park1_old_rating INTEGER,
  park2_old_rating INTEGER,
  park1_new_rating INTEGER,
  park2_new_rating INTEGER,
  created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
  resolved_at TIMESTAMP,

  CHECK (park1_id != park2_id),
  CHECK (winner_id IS NULL OR winner_id IN (park1_id, park2_id)),
  FOREIGN KEY (park1_id) REFERENCES parks(id),
  FOREIGN KEY (park2_id) REFERENCES parks(id)
);

CREATE INDEX IF NOT EXISTS idx_matchups_resolved ON matchups(resolved_at DESC);
"""


def migrate() -> None:
    """Run database migrations."""
    db_path = get_db_path()
    with get_connection() as conn:
        conn.executescript(SCHEMA)
        conn.commit()
    logger.info("Database migrations complete: %s", db_path)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    migrate()
