"""Random matchup selection."""

import logging
import random

from parkrank.db.store import RankingStore
from parkrank.errors import NotEnoughParksError
from parkrank.models.matchup import CurrentMatchup

logger = logging.getLogger(__name__)

# Shared generator for callers that do not pass their own
_default_rng = random.Random()


def pick_distinct_pair(count: int, rng: random.Random | None = None) -> tuple[int, int]:
    """Pick two distinct indices in ``range(count)`` uniformly at random.

    The second index is drawn from ``count - 1`` slots and shifted past the
    first, so every ordered pair is equally likely and no redraw is needed.
    """
    if count < 2:
        msg = f"Need at least 2 items to pick a pair, got {count}"
        raise ValueError(msg)
    rng = rng or _default_rng
    first = rng.randrange(count)
    second = rng.randrange(count - 1)
    if second >= first:
        second += 1
    return first, second


def create_random_matchup(store: RankingStore, rng: random.Random | None = None) -> CurrentMatchup:
    """Create a pending matchup between two random parks.

    Raises:
        NotEnoughParksError: If fewer than two parks exist
    """
    with store.transaction() as session:
        parks = session.list_parks()
        if len(parks) < 2:
            msg = f"Need at least 2 parks for a matchup, found {len(parks)}"
            raise NotEnoughParksError(msg)

        first, second = pick_distinct_pair(len(parks), rng)
        park1, park2 = parks[first], parks[second]
        matchup = session.create_matchup(park1.id, park2.id)

    logger.info("Created matchup %d: park %d vs park %d", matchup.id, park1.id, park2.id)
    return CurrentMatchup(id=matchup.id, park1=park1, park2=park2)
