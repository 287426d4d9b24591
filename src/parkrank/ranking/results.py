"""Read-side views: the leaderboard and the latest vote result."""

import logging

from parkrank.db.store import RankingStore
from parkrank.models.matchup import LatestVoteResult
from parkrank.models.park import RankedPark

logger = logging.getLogger(__name__)


def get_ranked_parks(store: RankingStore) -> list[RankedPark]:
    """Get all parks ordered by rank, unranked parks last."""
    with store.transaction() as session:
        parks = session.list_parks()
    parks.sort(key=lambda park: (park.rank is None, park.rank or 0, park.id))
    return [RankedPark.from_park(park) for park in parks]


def get_latest_vote_result(store: RankingStore) -> LatestVoteResult | None:
    """Get winner and loser ratings before and after the most recent vote.

    Returns None if no matchup has been resolved yet.
    """
    with store.transaction() as session:
        matchup = session.get_latest_resolved_matchup()
        if matchup is None:
            return None
        park1 = session.get_park(matchup.park1_id)
        park2 = session.get_park(matchup.park2_id)

    if (
        park1 is None
        or park2 is None
        or matchup.park1_old_rating is None
        or matchup.park2_old_rating is None
        or matchup.park1_new_rating is None
        or matchup.park2_new_rating is None
    ):
        logger.warning("Resolved matchup %d is missing parks or ratings", matchup.id)
        return None

    if matchup.winner_id == park1.id:
        return LatestVoteResult(
            id=matchup.id,
            winner=park1,
            loser=park2,
            winner_old_rating=matchup.park1_old_rating,
            winner_new_rating=matchup.park1_new_rating,
            loser_old_rating=matchup.park2_old_rating,
            loser_new_rating=matchup.park2_new_rating,
            created_at=matchup.resolved_at or matchup.created_at,
        )
    return LatestVoteResult(
        id=matchup.id,
        winner=park2,
        loser=park1,
        winner_old_rating=matchup.park2_old_rating,
        winner_new_rating=matchup.park2_new_rating,
        loser_old_rating=matchup.park1_old_rating,
        loser_new_rating=matchup.park1_new_rating,
        created_at=matchup.resolved_at or matchup.created_at,
    )
