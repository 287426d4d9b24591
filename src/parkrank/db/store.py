"""Storage interface used by the ranking engine.

The engine never touches a backend directly. It opens a transaction on a
``RankingStore`` and works through the ``StoreSession`` it yields; writes made
through the session are committed when the block exits normally and discarded
when it raises.
"""

from collections.abc import Mapping
from contextlib import AbstractContextManager
from typing import Protocol

from parkrank.models.matchup import Matchup, MatchupResolution
from parkrank.models.park import Park, ParkCreate


class StoreSession(Protocol):
    """Operations available inside a store transaction."""

    def list_parks(self) -> list[Park]:
        """Return every park ordered by id."""
        ...

    def get_park(self, park_id: int) -> Park | None: ...

    def create_park(self, park: ParkCreate) -> Park:
        """Insert a park. Raises DuplicateParkError if the name is taken."""
        ...

    def update_park(self, park_id: int, **fields: object) -> Park | None:
        """Overwrite the given columns of a park and return the result."""
        ...

    def set_ranks(self, ranks: Mapping[int, int]) -> None:
        """Write the rank of every park id in ``ranks``."""
        ...

    def create_matchup(self, park1_id: int, park2_id: int) -> Matchup: ...

    def get_matchup(self, matchup_id: int) -> Matchup | None: ...

    def resolve_matchup(self, matchup_id: int, resolution: MatchupResolution) -> bool:
        """Record the outcome of a pending matchup.

        Returns False without writing anything if the matchup already has a
        winner.
        """
        ...

    def get_latest_resolved_matchup(self) -> Matchup | None: ...


class RankingStore(Protocol):
    """A backend able to open transactional sessions."""

    def transaction(self) -> AbstractContextManager[StoreSession]: ...
