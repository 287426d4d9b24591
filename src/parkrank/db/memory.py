"""In-memory store, used by tests and throwaway instances."""

import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from datetime import UTC, datetime

from parkrank.db.repository import PARK_UPDATABLE_COLUMNS
from parkrank.errors import DuplicateParkError
from parkrank.models.matchup import Matchup, MatchupResolution
from parkrank.models.park import Park, ParkCreate


class MemoryStore:
    """Parks and matchups held in dicts with auto-increment ids.

    Transactions are serialized by a re-entrant lock. A session writes
    straight into the maps; if the block raises, the maps and id counters
    are restored from the snapshot taken when it opened.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.parks: dict[int, Park] = {}
        self.matchups: dict[int, Matchup] = {}
        self.next_park_id = 1
        self.next_matchup_id = 1

    @contextmanager
    def transaction(self) -> Iterator["MemorySession"]:
        """Open a session; restore the previous state on any exception."""
        with self._lock:
            # Models are replaced, never mutated, so shallow copies suffice
            snapshot = (
                dict(self.parks),
                dict(self.matchups),
                self.next_park_id,
                self.next_matchup_id,
            )
            try:
                yield MemorySession(self)
            except BaseException:
                self.parks, self.matchups, self.next_park_id, self.next_matchup_id = snapshot
                raise


class MemorySession:
    """Session over a MemoryStore."""

    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    def list_parks(self) -> list[Park]:
        return [self.store.parks[park_id] for park_id in sorted(self.store.parks)]

    def get_park(self, park_id: int) -> Park | None:
        return self.store.parks.get(park_id)

    def create_park(self, park: ParkCreate) -> Park:
        if any(existing.name == park.name for existing in self.store.parks.values()):
            raise DuplicateParkError(park.name)
        park_id = self.store.next_park_id
        self.store.next_park_id += 1
        created = Park(
            id=park_id,
            name=park.name,
            description=park.description,
            icon_type=park.icon_type,
            image_url=park.image_url,
            rating=park.rating,
        )
        self.store.parks[park_id] = created
        return created

    def update_park(self, park_id: int, **fields: object) -> Park | None:
        unknown = set(fields) - PARK_UPDATABLE_COLUMNS
        if unknown:
            msg = f"Cannot update park columns: {sorted(unknown)}"
            raise ValueError(msg)
        park = self.store.parks.get(park_id)
        if park is None:
            return None
        name = fields.get("name")
        if name is not None and any(
            other.name == name and other.id != park_id for other in self.store.parks.values()
        ):
            raise DuplicateParkError(str(name))
        updated = park.model_copy(update=fields)
        self.store.parks[park_id] = updated
        return updated

    def set_ranks(self, ranks: Mapping[int, int]) -> None:
        for park_id, rank in ranks.items():
            park = self.store.parks.get(park_id)
            if park is not None:
                self.store.parks[park_id] = park.model_copy(update={"rank": rank})

    def create_matchup(self, park1_id: int, park2_id: int) -> Matchup:
        matchup_id = self.store.next_matchup_id
        self.store.next_matchup_id += 1
        matchup = Matchup(
            id=matchup_id,
            park1_id=park1_id,
            park2_id=park2_id,
            created_at=datetime.now(UTC),
        )
        self.store.matchups[matchup_id] = matchup
        return matchup

    def get_matchup(self, matchup_id: int) -> Matchup | None:
        return self.store.matchups.get(matchup_id)

    def resolve_matchup(self, matchup_id: int, resolution: MatchupResolution) -> bool:
        matchup = self.store.matchups.get(matchup_id)
        if matchup is None or matchup.is_resolved:
            return False
        self.store.matchups[matchup_id] = matchup.model_copy(
            update={**resolution.model_dump(), "resolved_at": datetime.now(UTC)}
        )
        return True

    def get_latest_resolved_matchup(self) -> Matchup | None:
        resolved = [m for m in self.store.matchups.values() if m.is_resolved]
        if not resolved:
            return None
        return max(resolved, key=lambda m: (m.resolved_at or m.created_at, m.id))
