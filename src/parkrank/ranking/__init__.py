"""Rating and ranking engine."""

from parkrank.ranking.elo import expected_score, update_ratings
from parkrank.ranking.matchups import create_random_matchup, pick_distinct_pair
from parkrank.ranking.parks import create_park, get_park, list_parks, seed_parks, update_park
from parkrank.ranking.ranks import assign_ranks, recompute_ranks
from parkrank.ranking.results import get_latest_vote_result, get_ranked_parks
from parkrank.ranking.votes import submit_vote

__all__ = [
    "assign_ranks",
    "create_park",
    "create_random_matchup",
    "expected_score",
    "get_latest_vote_result",
    "get_park",
    "get_ranked_parks",
    "list_parks",
    "pick_distinct_pair",
    "recompute_ranks",
    "seed_parks",
    "submit_vote",
    "update_park",
    "update_ratings",
]
