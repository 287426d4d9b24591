"""Built-in national parks for a fresh database."""

import logging

from parkrank.db.migrate import migrate
from parkrank.db.repository import SqliteStore
from parkrank.db.store import RankingStore
from parkrank.models.park import ParkCreate, ParkIconType
from parkrank.ranking.parks import seed_parks

logger = logging.getLogger(__name__)

NATIONAL_PARKS: list[ParkCreate] = [
    ParkCreate(
        name="Yellowstone",
        description="Geysers, hot springs and bison across Wyoming, Montana and Idaho.",
        icon_type=ParkIconType.VOLCANIC,
    ),
    ParkCreate(
        name="Yosemite",
        description="Granite cliffs, giant sequoias and waterfalls in the Sierra Nevada.",
        icon_type=ParkIconType.MOUNTAIN,
    ),
    ParkCreate(
        name="Grand Canyon",
        description="A mile-deep gorge carved by the Colorado River.",
        icon_type=ParkIconType.CANYON,
    ),
    ParkCreate(
        name="Zion",
        description="Red sandstone canyons and the Virgin River Narrows.",
        icon_type=ParkIconType.CANYON,
    ),
    ParkCreate(
        name="Acadia",
        description="Rocky Atlantic coastline and Cadillac Mountain.",
        icon_type=ParkIconType.COASTAL,
    ),
    ParkCreate(
        name="Crater Lake",
        description="The deepest lake in the United States, in a collapsed volcano.",
        icon_type=ParkIconType.LAKE,
    ),
    ParkCreate(
        name="Great Smoky Mountains",
        description="Mist-covered ridges and old-growth forest.",
        icon_type=ParkIconType.FOREST,
    ),
    ParkCreate(
        name="Joshua Tree",
        description="Where the Mojave and Colorado deserts meet.",
        icon_type=ParkIconType.DESERT,
    ),
    ParkCreate(
        name="Mammoth Cave",
        description="The longest known cave system in the world.",
        icon_type=ParkIconType.CAVE,
    ),
    ParkCreate(
        name="Hawaii Volcanoes",
        description="Kilauea and Mauna Loa, two of the most active volcanoes.",
        icon_type=ParkIconType.VOLCANIC,
    ),
    ParkCreate(
        name="Olympic",
        description="Temperate rainforest, glaciated peaks and Pacific beaches.",
        icon_type=ParkIconType.FOREST,
    ),
    ParkCreate(
        name="Arches",
        description="Over two thousand natural sandstone arches.",
        icon_type=ParkIconType.DESERT,
    ),
]


def seed(store: RankingStore | None = None, default_rating: int | None = None) -> int:
    """Insert the built-in parks into an empty store."""
    parks = NATIONAL_PARKS
    if default_rating is not None:
        parks = [park.model_copy(update={"rating": default_rating}) for park in parks]
    return seed_parks(store or SqliteStore(), parks)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    migrate()
    inserted = seed()
    if not inserted:
        logger.info("Database already has parks, nothing seeded")
