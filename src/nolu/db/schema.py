"""Database schema for Nolu.

Accounts carry their summary columns directly; matches reference their
owning account. Unique constraints enforce the public handle and the
token digest.
"""

from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from nolu.core.identity import utcnow


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Account(Base):
    """Registered account plus its cached statistics summary.

    Invariant: the eleven summary columns always equal the aggregate over
    the account's matches. They are overwritten together, never patched.
    """

    __tablename__ = "accounts"

    account_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    username: Mapped[str] = mapped_column(String(30), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(256), nullable=False)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Aggregated stats (calculated from matches)
    kd_ratio: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    damage_per_round: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    win_percentage: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    kills_per_round: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    wins: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    kills: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    deaths: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    assists: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_games: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_rounds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_damage: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )


class Match(Base):
    """One played match (immutable once created)."""

    __tablename__ = "matches"

    match_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    account_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("accounts.account_id"), nullable=False
    )
    played_on: Mapped[date] = mapped_column(Date, nullable=False)
    played_at: Mapped[str] = mapped_column(String(8), nullable=False)
    match_type: Mapped[str] = mapped_column(String(16), nullable=False)
    outcome: Mapped[str] = mapped_column(String(8), nullable=False)
    map_name: Mapped[str] = mapped_column(String(64), nullable=False)
    rounds_won: Mapped[int] = mapped_column(Integer, nullable=False)
    rounds_lost: Mapped[int] = mapped_column(Integer, nullable=False)
    damage: Mapped[int] = mapped_column(Integer, nullable=False)
    kills: Mapped[int] = mapped_column(Integer, nullable=False)
    deaths: Mapped[int] = mapped_column(Integer, nullable=False)
    assists: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )


class SessionToken(Base):
    """Issued bearer token, stored by SHA-256 digest only."""

    __tablename__ = "session_tokens"

    token_hash: Mapped[str] = mapped_column(String(64), primary_key=True)
    account_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("accounts.account_id"), nullable=False
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )
