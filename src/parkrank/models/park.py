"""Park models."""

import logging
from enum import Enum

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_RATING = 1500


class ParkIconType(str, Enum):
    """Landscape category used to pick a park's icon."""

    MOUNTAIN = "mountain"
    CANYON = "canyon"
    DESERT = "desert"
    LAKE = "lake"
    FOREST = "forest"
    COASTAL = "coastal"
    VOLCANIC = "volcanic"
    CAVE = "cave"


def coerce_icon_type(value: object) -> ParkIconType:
    """Map an arbitrary value to a ParkIconType, falling back to mountain."""
    if isinstance(value, ParkIconType):
        return value
    try:
        return ParkIconType(str(value))
    except ValueError:
        logger.warning("Invalid park icon type %r, using 'mountain'", value)
        return ParkIconType.MOUNTAIN


class ParkCreate(BaseModel):
    """Data required to create a new park."""

    name: str = Field(min_length=1, description="Unique display name")
    description: str = Field(default="", description="Short description")
    icon_type: ParkIconType = Field(default=ParkIconType.MOUNTAIN, description="Icon category")
    image_url: str | None = Field(default=None, description="Image URL")
    rating: int = Field(default=DEFAULT_RATING, description="Initial Elo rating")

    @field_validator("icon_type", mode="before")
    @classmethod
    def _coerce_icon_type(cls, value: object) -> ParkIconType:
        return coerce_icon_type(value)


class ParkUpdate(BaseModel):
    """Partial edit of a park.

    Rank is derived from rating and cannot be set directly.
    """

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    icon_type: ParkIconType | None = None
    image_url: str | None = None
    rating: int | None = None

    @field_validator("icon_type", mode="before")
    @classmethod
    def _coerce_icon_type(cls, value: object) -> ParkIconType | None:
        if value is None:
            return None
        return coerce_icon_type(value)


class Park(BaseModel):
    """Full park model with rating state."""

    id: int
    name: str
    description: str = ""
    icon_type: ParkIconType = ParkIconType.MOUNTAIN
    image_url: str | None = None

    rating: int = Field(default=DEFAULT_RATING, description="Elo rating")
    rank: int | None = Field(default=None, ge=1, description="1-based rank, lower is better")
    trending: bool = Field(
        default=False, description="Whether the most recent rating swing was large"
    )
    last_change: int = Field(
        default=0,
        description="Win/loss streak: positive for consecutive wins, negative for losses",
    )


class RankedPark(BaseModel):
    """Leaderboard row: the park as displayed, plus its streak counter."""

    id: int
    name: str
    description: str
    icon_type: ParkIconType
    image_url: str | None
    rating: int
    rank: int | None
    trending: bool
    rank_change: int = Field(description="Win/loss streak counter of the park")

    @classmethod
    def from_park(cls, park: Park) -> "RankedPark":
        return cls(
            id=park.id,
            name=park.name,
            description=park.description,
            icon_type=park.icon_type,
            image_url=park.image_url,
            rating=park.rating,
            rank=park.rank,
            trending=park.trending,
            rank_change=park.last_change,
        )
