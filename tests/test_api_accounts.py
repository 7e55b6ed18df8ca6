"""Tests for account dashboard API endpoints."""

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from nolu.db.schema import Account, Base, Match, SessionToken


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


def auth_headers(client, user_id="ace_01") -> dict[str, str]:
    """Sign up and return bearer headers."""
    response = client.post(
        "/api/signup",
        json={"user_id": user_id, "username": "Ace", "password": "hunter22"},
    )
    return {"Authorization": f"Bearer {response.json()['token']}"}


def add_match(client, headers, **overrides):
    payload = {
        "played_on": "2024-05-01",
        "played_at": "19:30",
        "match_type": "Casual",
        "outcome": "Win",
        "map_name": "Haven",
        "rounds_won": 13,
        "rounds_lost": 11,
        "damage": 3600,
        "kills": 22,
        "deaths": 16,
        "assists": 4,
    }
    payload.update(overrides)
    return client.post("/api/user/me/matches", json=payload, headers=headers)


class TestMyStatsEndpoint:
    """Test GET /api/user/me/stats."""

    def test_returns_stats_settings_and_user(self):
        """Dashboard payload has stats, settings and identity."""
        client, _ = create_test_app_and_client()
        headers = auth_headers(client)
        add_match(client, headers)

        response = client.get("/api/user/me/stats", headers=headers)
        assert response.status_code == 200
        data = response.json()
        assert data["user"] == {"user_id": "ace_01", "username": "Ace"}
        assert data["settings"] == {"is_public": True}
        assert data["stats"]["total_games"] == 1
        assert data["stats"]["kd_ratio"] == 1.38
        assert data["stats"]["damage_per_round"] == 150
        assert data["stats"]["kills_per_round"] == 0.92
        assert data["stats"]["win_percentage"] == 100.0


class TestResetStatsEndpoint:
    """Test DELETE /api/user/me/stats."""

    def test_reset_returns_zero_stats(self):
        """Reset deletes all matches and returns zero stats."""
        client, engine = create_test_app_and_client()
        headers = auth_headers(client)
        add_match(client, headers)
        add_match(client, headers, outcome="Loss")

        response = client.delete("/api/user/me/stats", headers=headers)
        assert response.status_code == 200
        stats = response.json()["stats"]
        assert all(value == 0 for value in stats.values())
        assert len(stats) == 11

        with Session(engine) as session:
            assert session.query(Match).count() == 0
            assert session.query(Account).one().total_games == 0


class TestPrivacyEndpoints:
    """Test GET/PUT /api/user/me/privacy."""

    def test_default_public(self):
        """New accounts are public."""
        client, _ = create_test_app_and_client()
        headers = auth_headers(client)

        response = client.get("/api/user/me/privacy", headers=headers)
        assert response.json() == {"is_public": True}

    def test_make_private(self):
        """PUT switches visibility and hides the public profile."""
        client, _ = create_test_app_and_client()
        headers = auth_headers(client)

        response = client.put("/api/user/me/privacy", json={"is_public": False}, headers=headers)
        assert response.status_code == 200
        assert response.json() == {"message": "Profile is now private", "is_public": False}

        assert client.get("/api/user/me/privacy", headers=headers).json() == {"is_public": False}
        assert client.get("/api/user/ace_01").status_code == 403

    def test_non_boolean_returns_422(self):
        """Non-boolean visibility is rejected."""
        client, _ = create_test_app_and_client()
        headers = auth_headers(client)

        response = client.put("/api/user/me/privacy", json={"is_public": "no"}, headers=headers)
        assert response.status_code == 422


class TestDeleteAccountEndpoint:
    """Test DELETE /api/user/me."""

    def test_deletes_account_matches_and_tokens(self):
        """Everything belonging to the account is removed."""
        client, engine = create_test_app_and_client()
        headers = auth_headers(client)
        auth_headers(client, "bob_02")
        add_match(client, headers)

        response = client.delete("/api/user/me", headers=headers)
        assert response.status_code == 200
        assert response.json() == {"message": "Account deleted successfully!"}

        with Session(engine) as session:
            assert [a.user_id for a in session.query(Account).all()] == ["bob_02"]
            assert session.query(Match).count() == 0
            assert session.query(SessionToken).count() == 1

    def test_token_unusable_afterwards(self):
        """The deleted account's token no longer works."""
        client, _ = create_test_app_and_client()
        headers = auth_headers(client)
        client.delete("/api/user/me", headers=headers)

        response = client.get("/api/user/me/stats", headers=headers)
        assert response.status_code == 403
