"""API routes for parkrank.

Parks, random matchups, votes and the latest vote result.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel

from parkrank.config import Settings, get_settings
from parkrank.db.store import RankingStore
from parkrank.errors import ParkNotFoundError
from parkrank.models.matchup import CurrentMatchup, LatestVoteResult, Vote
from parkrank.models.park import Park, ParkCreate, ParkUpdate, RankedPark
from parkrank.ranking import (
    create_park,
    create_random_matchup,
    get_latest_vote_result,
    get_park,
    get_ranked_parks,
    list_parks,
    submit_vote,
    update_park,
)

router = APIRouter(tags=["api"])
logger = logging.getLogger(__name__)


class VoteResponse(BaseModel):
    """Response after a vote is recorded."""

    message: str
    rankings: list[RankedPark]


def get_store(request: Request) -> RankingStore:
    """Store attached to the application at startup."""
    store: RankingStore = request.app.state.store
    return store


StoreDep = Annotated[RankingStore, Depends(get_store)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


@router.get("/parks", response_model=list[Park])
async def all_parks(store: StoreDep) -> list[Park]:
    """List all parks ordered by id."""
    return list_parks(store)


@router.get("/parks/ranked", response_model=list[RankedPark])
async def ranked_parks(store: StoreDep) -> list[RankedPark]:
    """Leaderboard: all parks ordered by rank."""
    return get_ranked_parks(store)


@router.get("/parks/{park_id}", response_model=Park)
async def park_detail(park_id: int, store: StoreDep) -> Park:
    """Get a single park."""
    try:
        return get_park(store, park_id)
    except ParkNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post("/parks", response_model=Park, status_code=status.HTTP_201_CREATED)
async def add_park(park: ParkCreate, store: StoreDep, settings: SettingsDep) -> Park:
    """Create a park. It joins the leaderboard at the configured default rating."""
    if "rating" not in park.model_fields_set:
        park = park.model_copy(update={"rating": settings.default_rating})
    return create_park(store, park)


@router.patch("/parks/{park_id}", response_model=Park)
async def edit_park(park_id: int, update: ParkUpdate, store: StoreDep) -> Park:
    """Edit a park. Changing its rating re-ranks every park."""
    try:
        return update_park(store, park_id, update)
    except ParkNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.get("/matchups/random", response_model=CurrentMatchup)
async def random_matchup(store: StoreDep) -> CurrentMatchup:
    """Create a matchup between two random parks."""
    return create_random_matchup(store)


@router.get("/matchups/latest-result", response_model=LatestVoteResult)
async def latest_result(store: StoreDep) -> LatestVoteResult:
    """Ratings before and after the most recent vote."""
    result = get_latest_vote_result(store)
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No vote results found")
    return result


@router.post("/matchups/vote", response_model=VoteResponse)
async def vote(body: Vote, store: StoreDep, settings: SettingsDep) -> VoteResponse:
    """Record a vote and return the updated rankings."""
    logger.info("Received vote for park %d on matchup %d", body.winner_id, body.matchup_id)
    rankings = submit_vote(
        store,
        body.matchup_id,
        body.winner_id,
        k_factor=settings.k_factor,
        trending_threshold=settings.trending_threshold,
    )
    return VoteResponse(message="Vote recorded successfully", rankings=rankings)
