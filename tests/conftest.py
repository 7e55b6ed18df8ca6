"""Shared pytest fixtures for nolu tests."""

from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from nolu.db.schema import Base
from nolu.models.domain import MatchEntity


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session(engine):
    """Create a database session for testing."""
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def make_match():
    """Factory for MatchEntity values with sensible defaults."""
    counter = {"n": 0}

    def _make(**overrides) -> MatchEntity:
        counter["n"] += 1
        fields = {
            "match_id": f"match-{counter['n']:03d}",
            "account_id": "acct-001",
            "played_on": date(2024, 5, 1),
            "played_at": "20:00",
            "match_type": "Ranked",
            "outcome": "Win",
            "map_name": "Ascent",
            "rounds_won": 13,
            "rounds_lost": 7,
            "damage": 3000,
            "kills": 20,
            "deaths": 10,
            "assists": 5,
        }
        fields.update(overrides)
        return MatchEntity(**fields)

    return _make
