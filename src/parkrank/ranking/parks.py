"""Park catalogue operations.

Every operation that can change a rating re-ranks all parks before its
transaction commits.
"""

import logging
from collections.abc import Iterable

from parkrank.db.store import RankingStore
from parkrank.errors import ParkNotFoundError
from parkrank.models.park import Park, ParkCreate, ParkUpdate
from parkrank.ranking.ranks import recompute_ranks

logger = logging.getLogger(__name__)


def list_parks(store: RankingStore) -> list[Park]:
    """Get all parks ordered by id."""
    with store.transaction() as session:
        return session.list_parks()


def get_park(store: RankingStore, park_id: int) -> Park:
    """Get a park by id.

    Raises:
        ParkNotFoundError: If no park has this id
    """
    with store.transaction() as session:
        park = session.get_park(park_id)
    if park is None:
        raise ParkNotFoundError(park_id)
    return park


def create_park(store: RankingStore, park: ParkCreate) -> Park:
    """Create a park and give it a rank.

    Raises:
        DuplicateParkError: If the name is already taken
    """
    with store.transaction() as session:
        created = session.create_park(park)
        ranked = {p.id: p for p in recompute_ranks(session)}
    logger.info("Created park %d: %s (rating %d)", created.id, created.name, created.rating)
    return ranked[created.id]


def update_park(store: RankingStore, park_id: int, update: ParkUpdate) -> Park:
    """Apply a partial edit to a park, re-ranking if its rating changed.

    Raises:
        ParkNotFoundError: If no park has this id
        DuplicateParkError: If the new name is already taken
    """
    fields = update.model_dump(exclude_unset=True)
    # None means "leave as is" for every column except image_url
    fields = {
        key: value for key, value in fields.items() if value is not None or key == "image_url"
    }

    with store.transaction() as session:
        existing = session.get_park(park_id)
        if existing is None:
            raise ParkNotFoundError(park_id)
        updated = session.update_park(park_id, **fields)
        if updated is None:
            raise ParkNotFoundError(park_id)
        if "rating" in fields and fields["rating"] != existing.rating:
            ranked = {p.id: p for p in recompute_ranks(session)}
            updated = ranked[park_id]

    logger.info("Updated park %d: %s", park_id, sorted(fields))
    return updated


def seed_parks(store: RankingStore, parks: Iterable[ParkCreate]) -> int:
    """Insert ``parks`` if the store has none yet.

    Returns:
        Number of parks inserted
    """
    with store.transaction() as session:
        if session.list_parks():
            return 0
        count = 0
        for park in parks:
            session.create_park(park)
            count += 1
        recompute_ranks(session)
    logger.info("Seeded %d parks", count)
    return count
