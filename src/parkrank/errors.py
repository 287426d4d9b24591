"""Errors raised by the ranking engine and its stores."""


class RankingError(Exception):
    """Base class for ranking engine errors."""


class NotEnoughParksError(RankingError):
    """Fewer than two parks exist, so no matchup can be created."""


class MatchupNotFoundError(RankingError):
    """The referenced matchup does not exist."""

    def __init__(self, matchup_id: int) -> None:
        super().__init__(f"Matchup {matchup_id} not found")
        self.matchup_id = matchup_id


class InvalidVoteError(RankingError):
    """The vote cannot be applied to the matchup."""


class MatchupAlreadyResolvedError(InvalidVoteError):
    """The matchup already has a winner."""

    def __init__(self, matchup_id: int) -> None:
        super().__init__(f"Matchup {matchup_id} has already been voted on")
        self.matchup_id = matchup_id


class ParkNotFoundError(RankingError):
    """The referenced park does not exist."""

    def __init__(self, park_id: int) -> None:
        super().__init__(f"Park {park_id} not found")
        self.park_id = park_id


class DuplicateParkError(RankingError):
    """A park with the same name already exists."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Park {name!r} already exists")
        self.name = name


class StorageUnavailableError(RankingError):
    """The storage backend could not be reached or is locked."""
