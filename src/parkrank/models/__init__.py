"""Pydantic models for parkrank."""

from parkrank.models.matchup import (
    CurrentMatchup,
    LatestVoteResult,
    Matchup,
    MatchupResolution,
    Vote,
)
from parkrank.models.park import Park, ParkCreate, ParkIconType, ParkUpdate, RankedPark

__all__ = [
    "CurrentMatchup",
    "LatestVoteResult",
    "Matchup",
    "MatchupResolution",
    "Park",
    "ParkCreate",
    "ParkIconType",
    "ParkUpdate",
    "RankedPark",
    "Vote",
]
