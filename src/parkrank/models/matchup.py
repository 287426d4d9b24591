"""Matchup and vote models.

A matchup is created unresolved and transitions exactly once to resolved
when a vote is recorded. Ratings are addressed by park position (1 or 2),
not by win/loss role.
"""

from datetime import datetime

from pydantic import BaseModel, model_validator

from parkrank.models.park import Park


class Matchup(BaseModel):
    """A single pairwise comparison, pending or resolved."""

    id: int
    park1_id: int
    park2_id: int
    winner_id: int | None = None
    park1_old_rating: int | None = None
    park2_old_rating: int | None = None
    park1_new_rating: int | None = None
    park2_new_rating: int | None = None
    created_at: datetime
    resolved_at: datetime | None = None

    @property
    def is_resolved(self) -> bool:
        return self.winner_id is not None

    def has_participant(self, park_id: int) -> bool:
        return park_id in (self.park1_id, self.park2_id)


class MatchupResolution(BaseModel):
    """Write-set applied to a matchup when a vote resolves it."""

    winner_id: int
    park1_old_rating: int
    park2_old_rating: int
    park1_new_rating: int
    park2_new_rating: int


class Vote(BaseModel):
    """Vote submitted by a client. Not stored."""

    matchup_id: int
    winner_id: int


class CurrentMatchup(BaseModel):
    """A freshly created matchup with both parks attached for display."""

    id: int
    park1: Park
    park2: Park

    @model_validator(mode="after")
    def _distinct_parks(self) -> "CurrentMatchup":
        if self.park1.id == self.park2.id:
            msg = "A matchup needs two distinct parks"
            raise ValueError(msg)
        return self


class LatestVoteResult(BaseModel):
    """Before/after ratings of the most recently resolved matchup."""

    id: int
    winner: Park
    loser: Park
    winner_old_rating: int
    winner_new_rating: int
    loser_old_rating: int
    loser_new_rating: int
    created_at: datetime
