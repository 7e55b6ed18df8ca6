"""Pydantic models for the Nolu API.

Request models enforce the record-creation boundary: by the time a match
reaches the aggregator every field is present and every count is a
non-negative integer.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Literal

from pydantic import BaseModel, Field, StrictBool, StringConstraints

UserId = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=20)]
Username = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=30)]
MapName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=64)]
TimeOfDay = Annotated[str, StringConstraints(pattern=r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$")]
# Upper bound keeps per-match values and summed totals inside SQLite INTEGER.
MAX_COUNT = 2**31 - 1
Count = Annotated[int, Field(ge=0, le=MAX_COUNT)]


class AccountSummary(BaseModel):
    """Derived statistics for one account.

    Exactly eleven fields; always the aggregate of the account's full
    match set.
    """

    kd_ratio: float
    damage_per_round: float
    win_percentage: float
    kills_per_round: float
    wins: int
    kills: int
    deaths: int
    assists: int
    total_games: int
    total_rounds: int
    total_damage: int


# ============================================================================
# Matches
# ============================================================================


class MatchSubmission(BaseModel):
    """New match record submitted by the account owner."""

    played_on: date
    played_at: TimeOfDay
    match_type: Literal["Ranked", "Casual", "Tournament", "Practice"]
    outcome: Literal["Win", "Loss", "Draw"]
    map_name: MapName
    rounds_won: Count
    rounds_lost: Count
    damage: Count
    kills: Count
    deaths: Count
    assists: Count


class MatchDetail(BaseModel):
    """Stored match record for API responses."""

    match_id: str
    played_on: date
    played_at: str
    match_type: Literal["Ranked", "Casual", "Tournament", "Practice"]
    outcome: Literal["Win", "Loss", "Draw"]
    map_name: str
    rounds_won: int
    rounds_lost: int
    rounds: int
    damage: int
    kills: int
    deaths: int
    assists: int
    created_at: datetime | None


class MatchListResponse(BaseModel):
    """Own match history."""

    matches: list[MatchDetail]


class MatchCreatedResponse(BaseModel):
    """Response for match submission."""

    message: str
    match: MatchDetail
    updated_stats: AccountSummary


class MatchDeletedResponse(BaseModel):
    """Response for match deletion."""

    message: str
    updated_stats: AccountSummary


class StatsResetResponse(BaseModel):
    """Response for a full stats reset."""

    message: str
    stats: AccountSummary


# ============================================================================
# Accounts
# ============================================================================


class SignupRequest(BaseModel):
    """Account registration payload."""

    user_id: UserId
    username: Username
    password: Annotated[str, Field(min_length=6, max_length=128)]


class LoginRequest(BaseModel):
    """Login payload."""

    user_id: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    password: Annotated[str, Field(min_length=1)]


class AccountProfile(BaseModel):
    """Account as returned to its owner after signup/login."""

    user_id: str
    username: str
    is_public: bool
    stats: AccountSummary


class AuthResponse(BaseModel):
    """Issued bearer token plus the account it belongs to."""

    message: str
    token: str
    account: AccountProfile


class AccountIdentity(BaseModel):
    """Public handle and display name."""

    user_id: str
    username: str


class PrivacySettings(BaseModel):
    """Profile visibility."""

    is_public: bool


class PrivacyUpdate(BaseModel):
    """Profile visibility change request."""

    is_public: StrictBool


class PrivacyUpdatedResponse(BaseModel):
    """Response for a visibility change."""

    message: str
    is_public: bool


class DashboardStats(BaseModel):
    """Owner's dashboard payload."""

    stats: AccountSummary
    settings: PrivacySettings
    user: AccountIdentity


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


# ============================================================================
# Public lookup
# ============================================================================


class PlayerProfile(BaseModel):
    """Public profile with the most recent matches."""

    user_id: str
    username: str
    stats: AccountSummary
    recent_matches: list[MatchDetail]


class PlayerSearchStats(BaseModel):
    """Stats subset shown in search results."""

    kd_ratio: float
    win_percentage: float
    total_games: int
    wins: int
    kills: int
    deaths: int


class PlayerSearchHit(BaseModel):
    """One search result."""

    user_id: str
    username: str
    stats: PlayerSearchStats


class PlayerSearchResponse(BaseModel):
    """Search results ordered by games played."""

    count: int
    players: list[PlayerSearchHit]


class MapsResponse(BaseModel):
    """Known map names."""

    maps: list[str]
