"""Leaderboard rank assignment.

Rank is derived state: it is recomputed from ratings after every change
and never edited on its own.
"""

from collections.abc import Iterable

from parkrank.db.store import StoreSession
from parkrank.models.park import Park


def assign_ranks(parks: Iterable[Park]) -> list[Park]:
    """Return copies of ``parks`` ordered by rating with ranks 1..N set.

    Equal ratings are ordered by park id, lowest first.
    """
    ordered = sorted(parks, key=lambda park: (-park.rating, park.id))
    return [park.model_copy(update={"rank": position}) for position, park in enumerate(ordered, 1)]


def recompute_ranks(session: StoreSession) -> list[Park]:
    """Rewrite the stored rank of every park and return them in rank order."""
    ranked = assign_ranks(session.list_parks())
    session.set_ranks({park.id: park.rank for park in ranked if park.rank is not None})
    return ranked
