"""Tests for leaderboard rank assignment."""

from collections.abc import Callable

from hypothesis import given
from hypothesis import strategies as st

from parkrank.db.store import RankingStore
from parkrank.models.park import Park
from parkrank.ranking.ranks import assign_ranks, recompute_ranks


def _parks(ratings: list[int]) -> list[Park]:
    return [Park(id=i, name=f"Park {i}", rating=r) for i, r in enumerate(ratings, 1)]


class TestAssignRanks:
    """Tests for the pure assign_ranks()."""

    def test_orders_by_rating_descending(self) -> None:
        """Higher rating means better rank."""
        ranked = assign_ranks(_parks([1400, 1600, 1500]))
        assert [p.id for p in ranked] == [2, 3, 1]
        assert [p.rank for p in ranked] == [1, 2, 3]

    def test_ties_broken_by_id(self) -> None:
        """Equal ratings are ordered by id, lowest first."""
        parks = list(reversed(_parks([1500, 1500, 1500])))
        ranked = assign_ranks(parks)
        assert [p.id for p in ranked] == [1, 2, 3]

    def test_does_not_mutate_input(self) -> None:
        """Input parks keep their old ranks."""
        parks = _parks([1500, 1600])
        assign_ranks(parks)
        assert all(p.rank is None for p in parks)

    def test_empty(self) -> None:
        """Test no parks gives no ranks."""
        assert assign_ranks([]) == []

    @given(st.lists(st.integers(min_value=-500, max_value=4000), min_size=1, max_size=60))
    def test_ranks_are_permutation_of_one_to_n(self, ratings: list[int]) -> None:
        """Property: ranks are exactly 1..N."""
        ranked = assign_ranks(_parks(ratings))
        assert sorted(p.rank for p in ranked) == list(range(1, len(ratings) + 1))

    @given(st.lists(st.integers(min_value=-500, max_value=4000), min_size=2, max_size=60))
    def test_ratings_non_increasing_by_rank(self, ratings: list[int]) -> None:
        """Property: ratings never increase going down the ranks."""
        ranked = sorted(assign_ranks(_parks(ratings)), key=lambda p: p.rank or 0)
        assert all(a.rating >= b.rating for a, b in zip(ranked, ranked[1:], strict=False))

    @given(st.lists(st.integers(min_value=1000, max_value=2000), max_size=40))
    def test_idempotent(self, ratings: list[int]) -> None:
        """Property: ranking twice changes nothing."""
        once = assign_ranks(_parks(ratings))
        twice = assign_ranks(once)
        assert [(p.id, p.rank) for p in once] == [(p.id, p.rank) for p in twice]


class TestRecomputeRanks:
    """Tests for recompute_ranks() against a store."""

    def test_writes_ranks(
        self, store: RankingStore, make_park: Callable[..., Park]
    ) -> None:
        """Ranks are written back to the store."""
        low = make_park(rating=1400)
        high = make_park(rating=1600)

        with store.transaction() as session:
            session.update_park(low.id, rating=1700)
            recompute_ranks(session)

        with store.transaction() as session:
            assert session.get_park(low.id).rank == 1  # type: ignore[union-attr]
            assert session.get_park(high.id).rank == 2  # type: ignore[union-attr]

    def test_returns_parks_in_rank_order(
        self, store: RankingStore, make_park: Callable[..., Park]
    ) -> None:
        """Parks are returned in rank order with their ranks set."""
        for rating in (1500, 1700, 1600):
            make_park(rating=rating)

        with store.transaction() as session:
            ranked = recompute_ranks(session)

        assert [p.rating for p in ranked] == [1700, 1600, 1500]
        assert [p.rank for p in ranked] == [1, 2, 3]
