"""Tests for the HTTP API."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from parkrank.db.memory import MemoryStore
from parkrank.models.park import ParkCreate, ParkIconType
from parkrank.ranking.parks import create_park
from parkrank.web.app import create_app


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def client(memory_store: MemoryStore) -> Iterator[TestClient]:
    with TestClient(create_app(store=memory_store)) as test_client:
        yield test_client


@pytest.fixture
def two_parks(memory_store: MemoryStore) -> tuple[int, int]:
    a = create_park(
        memory_store,
        ParkCreate(
            name="Acadia",
            description="Rocky coast",
            icon_type=ParkIconType.COASTAL,
            image_url="https://example.com/acadia.jpg",
        ),
    )
    b = create_park(
        memory_store,
        ParkCreate(name="Badlands", description="Eroded buttes", icon_type=ParkIconType.CANYON),
    )
    return a.id, b.id


class TestHealth:
    """Readiness endpoint."""

    def test_health(self, client: TestClient) -> None:
        """Health check answers plain text."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.text == "ok"


class TestParksApi:
    """Park catalogue endpoints."""

    def test_list_empty(self, client: TestClient) -> None:
        """A fresh store lists no parks."""
        response = client.get("/api/parks")
        assert response.status_code == 200
        assert response.json() == []

    def test_create(self, client: TestClient) -> None:
        """Creating a park returns it with a rank."""
        response = client.post(
            "/api/parks",
            json={"name": "Zion", "description": "Canyons", "icon_type": "canyon"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Zion"
        assert body["icon_type"] == "canyon"
        assert body["rating"] == 1500
        assert body["rank"] == 1

    def test_create_uses_configured_default_rating(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without a rating, new parks start at the configured default."""
        monkeypatch.setenv("PARKRANK_DEFAULT_RATING", "1200")

        response = client.post("/api/parks", json={"name": "Zion"})

        assert response.json()["rating"] == 1200

    def test_create_with_explicit_rating(self, client: TestClient) -> None:
        """An explicit rating wins over the default."""
        response = client.post("/api/parks", json={"name": "Zion", "rating": 1650})
        assert response.json()["rating"] == 1650

    def test_create_unknown_icon_falls_back(self, client: TestClient) -> None:
        """Unknown icon types are stored as mountain."""
        response = client.post("/api/parks", json={"name": "Zion", "icon_type": "glacier"})
        assert response.json()["icon_type"] == "mountain"

    def test_create_duplicate(self, client: TestClient) -> None:
        """A taken name is a conflict."""
        client.post("/api/parks", json={"name": "Zion"})
        response = client.post("/api/parks", json={"name": "Zion"})
        assert response.status_code == 409

    def test_create_without_name(self, client: TestClient) -> None:
        """The name is required."""
        response = client.post("/api/parks", json={"description": "Nameless"})
        assert response.status_code == 422

    def test_detail(self, client: TestClient, two_parks: tuple[int, int]) -> None:
        """A single park is fetched by id."""
        response = client.get(f"/api/parks/{two_parks[0]}")
        assert response.status_code == 200
        assert response.json()["name"] == "Acadia"

    def test_detail_missing(self, client: TestClient) -> None:
        """Unknown park ids are 404."""
        response = client.get("/api/parks/404")
        assert response.status_code == 404
        assert response.json()["detail"] == "Park 404 not found"

    def test_patch_rating_reranks(self, client: TestClient, two_parks: tuple[int, int]) -> None:
        """Editing a rating moves the park on the leaderboard."""
        _, b = two_parks

        response = client.patch(f"/api/parks/{b}", json={"rating": 1600})

        assert response.status_code == 200
        assert response.json()["rank"] == 1
        assert client.get(f"/api/parks/{two_parks[0]}").json()["rank"] == 2

    def test_patch_missing(self, client: TestClient) -> None:
        """Editing an unknown park is 404."""
        response = client.patch("/api/parks/9", json={"description": "x"})
        assert response.status_code == 404

    def test_ranked(self, client: TestClient, two_parks: tuple[int, int]) -> None:
        """The leaderboard is ordered by rank."""
        client.patch(f"/api/parks/{two_parks[1]}", json={"rating": 1600})

        response = client.get("/api/parks/ranked")

        assert response.status_code == 200
        rows = response.json()
        assert [row["id"] for row in rows] == [two_parks[1], two_parks[0]]
        assert set(rows[0]) == {
            "id",
            "name",
            "description",
            "icon_type",
            "image_url",
            "rating",
            "rank",
            "trending",
            "rank_change",
        }

    def test_ranked_rows_carry_display_fields(
        self, client: TestClient, two_parks: tuple[int, int]
    ) -> None:
        """Each leaderboard row has what is needed to draw it: icon, text and image."""
        rows = {row["name"]: row for row in client.get("/api/parks/ranked").json()}

        assert rows["Acadia"]["icon_type"] == "coastal"
        assert rows["Acadia"]["description"] == "Rocky coast"
        assert rows["Acadia"]["image_url"] == "https://example.com/acadia.jpg"
        assert rows["Badlands"]["icon_type"] == "canyon"
        assert rows["Badlands"]["image_url"] is None


class TestMatchupsApi:
    """Matchup, vote and result endpoints."""

    def test_random_needs_two_parks(
        self, client: TestClient, memory_store: MemoryStore
    ) -> None:
        """No matchup can be drawn from fewer than two parks."""
        assert client.get("/api/matchups/random").status_code == 404

        create_park(memory_store, ParkCreate(name="Lonely"))

        assert client.get("/api/matchups/random").status_code == 404

    def test_random(self, client: TestClient, two_parks: tuple[int, int]) -> None:
        """A random matchup pairs two distinct parks."""
        response = client.get("/api/matchups/random")

        assert response.status_code == 200
        body = response.json()
        assert {body["park1"]["id"], body["park2"]["id"]} == set(two_parks)
        assert isinstance(body["id"], int)

    def test_vote_flow(self, client: TestClient, two_parks: tuple[int, int]) -> None:
        """A vote returns the refreshed leaderboard."""
        matchup = client.get("/api/matchups/random").json()
        winner = matchup["park2"]["id"]

        response = client.post(
            "/api/matchups/vote", json={"matchup_id": matchup["id"], "winner_id": winner}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Vote recorded successfully"
        assert body["rankings"][0]["id"] == winner
        assert body["rankings"][0]["rating"] == 1516
        assert body["rankings"][0]["rank_change"] == 1
        assert body["rankings"][1]["rating"] == 1484
        assert body["rankings"][1]["rank_change"] == -1
        assert {row["icon_type"] for row in body["rankings"]} == {"coastal", "canyon"}

    def test_vote_body_is_snake_case(
        self, client: TestClient, two_parks: tuple[int, int]
    ) -> None:
        """Vote fields use the same snake_case names as every response."""
        matchup = client.get("/api/matchups/random").json()

        response = client.post(
            "/api/matchups/vote", json={"matchupId": matchup["id"], "winnerId": two_parks[0]}
        )

        assert response.status_code == 422

    def test_vote_for_park_not_in_matchup(
        self, client: TestClient, memory_store: MemoryStore, two_parks: tuple[int, int]
    ) -> None:
        """Voting for a park outside the matchup is a bad request."""
        outsider = create_park(memory_store, ParkCreate(name="Outsider"))
        with memory_store.transaction() as session:
            matchup_id = session.create_matchup(*two_parks).id

        response = client.post(
            "/api/matchups/vote", json={"matchup_id": matchup_id, "winner_id": outsider.id}
        )

        assert response.status_code == 400

    def test_vote_twice(self, client: TestClient, two_parks: tuple[int, int]) -> None:
        """A second vote on the same matchup is a conflict."""
        matchup = client.get("/api/matchups/random").json()
        vote = {"matchup_id": matchup["id"], "winner_id": two_parks[0]}

        assert client.post("/api/matchups/vote", json=vote).status_code == 200
        response = client.post("/api/matchups/vote", json=vote)

        assert response.status_code == 409
        assert "already" in response.json()["detail"]

    def test_vote_unknown_matchup(self, client: TestClient) -> None:
        """Voting on an unknown matchup is 404."""
        response = client.post("/api/matchups/vote", json={"matchup_id": 42, "winner_id": 1})
        assert response.status_code == 404

    def test_vote_malformed_body(self, client: TestClient) -> None:
        """A vote without a winner is rejected by validation."""
        response = client.post("/api/matchups/vote", json={"matchup_id": 1})
        assert response.status_code == 422

    def test_vote_with_vanished_park(
        self, client: TestClient, memory_store: MemoryStore, two_parks: tuple[int, int]
    ) -> None:
        """A matchup park that no longer exists is an internal error and writes nothing."""
        with memory_store.transaction() as session:
            matchup_id = session.create_matchup(*two_parks).id
        del memory_store.parks[two_parks[1]]

        response = client.post(
            "/api/matchups/vote", json={"matchup_id": matchup_id, "winner_id": two_parks[0]}
        )

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal error"}
        assert not memory_store.matchups[matchup_id].is_resolved

    def test_latest_result(self, client: TestClient, two_parks: tuple[int, int]) -> None:
        """The latest result is 404 until a vote, then names winner and loser."""
        assert client.get("/api/matchups/latest-result").status_code == 404

        matchup = client.get("/api/matchups/random").json()
        client.post(
            "/api/matchups/vote", json={"matchup_id": matchup["id"], "winner_id": two_parks[0]}
        )
        response = client.get("/api/matchups/latest-result")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == matchup["id"]
        assert body["winner"]["id"] == two_parks[0]
        assert body["loser"]["id"] == two_parks[1]
        assert (body["winner_old_rating"], body["winner_new_rating"]) == (1500, 1516)
        assert (body["loser_old_rating"], body["loser_new_rating"]) == (1500, 1484)
