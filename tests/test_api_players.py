"""Tests for public player lookup and maps API endpoints."""

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from nolu.db.schema import Base
from nolu.models.domain import KNOWN_MAPS


def create_test_app_and_client():
    """Create app with test database and return (client, engine)."""
    from nolu.api.app import create_app, get_db_session

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    app = create_app()

    def override_get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db
    client = TestClient(app)

    return client, engine


def auth_headers(client, user_id, username="Player") -> dict[str, str]:
    """Sign up and return bearer headers."""
    response = client.post(
        "/api/signup",
        json={"user_id": user_id, "username": username, "password": "hunter22"},
    )
    return {"Authorization": f"Bearer {response.json()['token']}"}


def add_match(client, headers, played_on="2024-05-01"):
    return client.post(
        "/api/user/me/matches",
        json={
            "played_on": played_on,
            "played_at": "21:00",
            "match_type": "Ranked",
            "outcome": "Win",
            "map_name": "Split",
            "rounds_won": 13,
            "rounds_lost": 3,
            "damage": 2400,
            "kills": 16,
            "deaths": 4,
            "assists": 1,
        },
        headers=headers,
    )


class TestPublicProfileEndpoint:
    """Test GET /api/user/{user_id}."""

    def test_returns_profile_and_recent_matches(self):
        """Public profile has stats and at most five recent matches."""
        client, _ = create_test_app_and_client()
        headers = auth_headers(client, "ace_01", "Ace")
        for day in range(1, 8):
            add_match(client, headers, played_on=f"2024-05-0{day}")

        response = client.get("/api/user/ace_01")
        assert response.status_code == 200
        data = response.json()
        assert data["user_id"] == "ace_01"
        assert data["username"] == "Ace"
        assert data["stats"]["total_games"] == 7
        assert data["stats"]["kd_ratio"] == 4.0
        assert [m["played_on"] for m in data["recent_matches"]] == [
            "2024-05-07",
            "2024-05-06",
            "2024-05-05",
            "2024-05-04",
            "2024-05-03",
        ]

    def test_unknown_player_returns_404(self):
        """Unknown handle returns 404."""
        client, _ = create_test_app_and_client()

        response = client.get("/api/user/ghost")
        assert response.status_code == 404
        assert response.json()["detail"] == "Player not found"

    def test_private_player_returns_403(self):
        """Private profile returns 403."""
        client, _ = create_test_app_and_client()
        headers = auth_headers(client, "ace_01")
        client.put("/api/user/me/privacy", json={"is_public": False}, headers=headers)

        response = client.get("/api/user/ace_01")
        assert response.status_code == 403
        assert response.json()["detail"] == "This player profile is private"


class TestSearchEndpoint:
    """Test GET /api/search/players."""

    def test_orders_by_games_played(self):
        """Results are ordered by total games, most first."""
        client, _ = create_test_app_and_client()
        casual = auth_headers(client, "sky_low", "Skylar")
        grinder = auth_headers(client, "sky_high", "Sky")
        add_match(client, casual)
        for _ in range(3):
            add_match(client, grinder)

        response = client.get("/api/search/players", params={"query": "sky"})
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert [p["user_id"] for p in data["players"]] == ["sky_high", "sky_low"]
        assert data["players"][0]["stats"] == {
            "kd_ratio": 4.0,
            "win_percentage": 100.0,
            "total_games": 3,
            "wins": 3,
            "kills": 48,
            "deaths": 12,
        }

    def test_excludes_private(self):
        """Private profiles are not returned."""
        client, _ = create_test_app_and_client()
        headers = auth_headers(client, "hidden_one")
        client.put("/api/user/me/privacy", json={"is_public": False}, headers=headers)

        response = client.get("/api/search/players", params={"query": "hidden"})
        assert response.json() == {"count": 0, "players": []}

    def test_respects_limit(self):
        """limit caps the number of results."""
        client, _ = create_test_app_and_client()
        for i in range(3):
            auth_headers(client, f"team_{i}")

        response = client.get("/api/search/players", params={"query": "team", "limit": 2})
        assert response.json()["count"] == 2

    def test_short_query_returns_400(self):
        """Query under two characters returns 400."""
        client, _ = create_test_app_and_client()

        response = client.get("/api/search/players", params={"query": "a"})
        assert response.status_code == 400

    def test_missing_query_returns_400(self):
        """Missing query returns 400."""
        client, _ = create_test_app_and_client()

        response = client.get("/api/search/players")
        assert response.status_code == 400


class TestMapsEndpoint:
    """Test GET /api/maps."""

    def test_lists_known_maps(self):
        """Returns every known map name."""
        client, _ = create_test_app_and_client()

        response = client.get("/api/maps")
        assert response.status_code == 200
        assert response.json()["maps"] == list(KNOWN_MAPS)
        assert "Dust2" in response.json()["maps"]
