"""Reset database (development only)."""

import logging

from parkrank.config import get_settings
from parkrank.db.migrate import migrate

logger = logging.getLogger(__name__)


def reset() -> None:
    """Delete and recreate the database."""
    db_path = get_settings().db_path

    # WAL mode leaves -wal and -shm companions next to the main file
    for path in (db_path, db_path.with_suffix(".db-wal"), db_path.with_suffix(".db-shm")):
        if path.exists():
            path.unlink()
            logger.info("Deleted %s", path)

    migrate()
    logger.info("Database reset complete")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    reset()
