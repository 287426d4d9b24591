"""Vote processing: validate a vote, apply Elo, re-rank.

All reads and writes of one vote happen inside a single store transaction,
so a vote is applied completely or not at all, and a matchup can be
resolved at most once.
"""

import logging

from parkrank.db.store import RankingStore, StoreSession
from parkrank.errors import (
    InvalidVoteError,
    MatchupAlreadyResolvedError,
    MatchupNotFoundError,
    ParkNotFoundError,
)
from parkrank.models.matchup import MatchupResolution
from parkrank.models.park import Park, RankedPark
from parkrank.ranking.elo import DEFAULT_K_FACTOR, update_ratings
from parkrank.ranking.ranks import recompute_ranks

logger = logging.getLogger(__name__)

DEFAULT_TRENDING_THRESHOLD = 10


def extend_win_streak(last_change: int) -> int:
    """Streak counter after a win: grow a winning streak or start one at 1."""
    return last_change + 1 if last_change > 0 else 1


def extend_loss_streak(last_change: int) -> int:
    """Streak counter after a loss: grow a losing streak or start one at -1."""
    return last_change - 1 if last_change < 0 else -1


def submit_vote(
    store: RankingStore,
    matchup_id: int,
    winner_id: int,
    k_factor: float = DEFAULT_K_FACTOR,
    trending_threshold: int = DEFAULT_TRENDING_THRESHOLD,
) -> list[RankedPark]:
    """Record a vote on a matchup and return the refreshed leaderboard.

    Args:
        store: Store holding parks and matchups
        matchup_id: Matchup being voted on
        winner_id: Park the voter picked; must be one of the matchup's parks
        k_factor: Elo K-factor
        trending_threshold: Swing above which a park is flagged as trending

    Returns:
        All parks in rank order

    Raises:
        MatchupNotFoundError: If the matchup does not exist
        InvalidVoteError: If winner_id is not in the matchup
        MatchupAlreadyResolvedError: If the matchup already has a winner
        ParkNotFoundError: If either park of the matchup is missing
    """
    with store.transaction() as session:
        matchup = session.get_matchup(matchup_id)
        if matchup is None:
            raise MatchupNotFoundError(matchup_id)

        if not matchup.has_participant(winner_id):
            msg = f"Park {winner_id} is not part of matchup {matchup_id}"
            raise InvalidVoteError(msg)
        if matchup.is_resolved:
            raise MatchupAlreadyResolvedError(matchup_id)

        park1 = session.get_park(matchup.park1_id)
        if park1 is None:
            raise ParkNotFoundError(matchup.park1_id)
        park2 = session.get_park(matchup.park2_id)
        if park2 is None:
            raise ParkNotFoundError(matchup.park2_id)

        # Snapshot by position before anything is written
        park1_old_rating = park1.rating
        park2_old_rating = park2.rating

        winner, loser = (park1, park2) if winner_id == park1.id else (park2, park1)
        winner_new_rating, loser_new_rating = update_ratings(
            winner.rating, loser.rating, k_factor
        )

        _apply_result(session, winner, winner_new_rating, trending_threshold, won=True)
        _apply_result(session, loser, loser_new_rating, trending_threshold, won=False)

        resolution = MatchupResolution(
            winner_id=winner_id,
            park1_old_rating=park1_old_rating,
            park2_old_rating=park2_old_rating,
            park1_new_rating=winner_new_rating if winner is park1 else loser_new_rating,
            park2_new_rating=winner_new_rating if winner is park2 else loser_new_rating,
        )
        if not session.resolve_matchup(matchup_id, resolution):
            # Another vote resolved it after we read it; roll back our writes
            raise MatchupAlreadyResolvedError(matchup_id)

        ranked = recompute_ranks(session)

    logger.info(
        "Vote on matchup %d: park %d (%d -> %d) beat park %d (%d -> %d)",
        matchup_id,
        winner.id,
        winner.rating,
        winner_new_rating,
        loser.id,
        loser.rating,
        loser_new_rating,
    )
    return [RankedPark.from_park(park) for park in ranked]


def _apply_result(
    session: StoreSession,
    park: Park,
    new_rating: int,
    trending_threshold: int,
    *,
    won: bool,
) -> None:
    """Persist a park's new rating, trending flag and streak counter."""
    session.update_park(
        park.id,
        rating=new_rating,
        trending=abs(new_rating - park.rating) > trending_threshold,
        last_change=extend_win_streak(park.last_change)
        if won
        else extend_loss_streak(park.last_change),
    )
