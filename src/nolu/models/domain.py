"""Domain models for Nolu.

Pure Python dataclasses representing domain entities.
These models are independent of SQLAlchemy and used throughout
the application for clean separation from the database layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal

# ============================================================================
# Match Domain
# ============================================================================

MatchType = Literal["Ranked", "Casual", "Tournament", "Practice"]
Outcome = Literal["Win", "Loss", "Draw"]

KNOWN_MAPS: tuple[str, ...] = (
    "Ascent",
    "Bind",
    "Haven",
    "Split",
    "Icebox",
    "Breeze",
    "Fracture",
    "Pearl",
    "Lotus",
    "Sunset",
    "Abyss",
    "District",
    "Mirage",
    "Inferno",
    "Dust2",
    "Nuke",
    "Overpass",
    "Vertigo",
)


@dataclass
class MatchEntity:
    """Domain model for one played match.

    Date and time-of-day are kept as two independent values, the way the
    player entered them. Matches are immutable once stored.
    """

    match_id: str
    account_id: str
    played_on: date
    played_at: str
    match_type: MatchType
    outcome: Outcome
    map_name: str
    rounds_won: int
    rounds_lost: int
    damage: int
    kills: int
    deaths: int
    assists: int
    created_at: datetime | None = None

    @property
    def rounds(self) -> int:
        """Total rounds played (derived, never stored)."""
        return self.rounds_won + self.rounds_lost


# ============================================================================
# Account Domain
# ============================================================================


@dataclass
class AccountEntity:
    """Domain model for a registered account.

    The summary columns are a cache of the aggregate over the account's
    matches; they are only ever replaced as a whole.
    """

    account_id: str
    user_id: str
    username: str
    password_hash: str
    is_public: bool = True
    kd_ratio: float = 0.0
    damage_per_round: float = 0.0
    win_percentage: float = 0.0
    kills_per_round: float = 0.0
    wins: int = 0
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    total_games: int = 0
    total_rounds: int = 0
    total_damage: int = 0


# ============================================================================
# Session Token Domain
# ============================================================================


@dataclass
class SessionTokenEntity:
    """Domain model for an issued bearer token (stored by digest only)."""

    token_hash: str
    account_id: str
    expires_at: datetime
