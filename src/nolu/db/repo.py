"""Repository pattern for database operations.

Encapsulates all SQLAlchemy queries, keeping domain logic pure.
Returns domain models (not SQLAlchemy entities) to external callers.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import or_
from sqlalchemy.orm import Session

from nolu.db.schema import Account, Match, SessionToken
from nolu.models.domain import AccountEntity, MatchEntity, SessionTokenEntity

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession

    from nolu.models.types import AccountSummary
else:
    DbSession = Session

# Re-export for external use
__all__ = ["DbSession"]

SUMMARY_COLUMNS: tuple[str, ...] = (
    "kd_ratio",
    "damage_per_round",
    "win_percentage",
    "kills_per_round",
    "wins",
    "kills",
    "deaths",
    "assists",
    "total_games",
    "total_rounds",
    "total_damage",
)


# ============================================================================
# Converters: SQLAlchemy -> Domain
# ============================================================================


def _account_to_entity(account: Account) -> AccountEntity:
    """Convert SQLAlchemy Account to domain entity."""
    return AccountEntity(
        account_id=account.account_id,
        user_id=account.user_id,
        username=account.username,
        password_hash=account.password_hash,
        is_public=account.is_public,
        kd_ratio=account.kd_ratio,
        damage_per_round=account.damage_per_round,
        win_percentage=account.win_percentage,
        kills_per_round=account.kills_per_round,
        wins=account.wins,
        kills=account.kills,
        deaths=account.deaths,
        assists=account.assists,
        total_games=account.total_games,
        total_rounds=account.total_rounds,
        total_damage=account.total_damage,
    )


def _match_to_entity(match: Match) -> MatchEntity:
    """Convert SQLAlchemy Match to domain entity."""
    return MatchEntity(
        match_id=match.match_id,
        account_id=match.account_id,
        played_on=match.played_on,
        played_at=match.played_at,
        match_type=match.match_type,
        outcome=match.outcome,
        map_name=match.map_name,
        rounds_won=match.rounds_won,
        rounds_lost=match.rounds_lost,
        damage=match.damage,
        kills=match.kills,
        deaths=match.deaths,
        assists=match.assists,
        created_at=match.created_at,
    )


def _token_to_entity(token: SessionToken) -> SessionTokenEntity:
    """Convert SQLAlchemy SessionToken to domain entity."""
    return SessionTokenEntity(
        token_hash=token.token_hash,
        account_id=token.account_id,
        expires_at=token.expires_at,
    )


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


# ============================================================================
# Account Repository
# ============================================================================


def get_account(session: DbSession, account_id: str) -> AccountEntity | None:
    """Get account by internal ID."""
    account = session.query(Account).filter(Account.account_id == account_id).first()
    return _account_to_entity(account) if account else None


def get_account_by_user_id(session: DbSession, user_id: str) -> AccountEntity | None:
    """Get account by public handle."""
    account = session.query(Account).filter(Account.user_id == user_id).first()
    return _account_to_entity(account) if account else None


def create_account(session: DbSession, entity: AccountEntity) -> AccountEntity:
    """Create a new account with an all-zero summary."""
    account = Account(
        account_id=entity.account_id,
        user_id=entity.user_id,
        username=entity.username,
        password_hash=entity.password_hash,
        is_public=entity.is_public,
    )
    session.add(account)
    return entity


def update_account_privacy(session: DbSession, account_id: str, is_public: bool) -> None:
    """Set profile visibility."""
    account = session.query(Account).filter(Account.account_id == account_id).first()
    if account:
        account.is_public = is_public


def replace_account_summary(
    session: DbSession, account_id: str, summary: AccountSummary
) -> None:
    """Overwrite all summary columns of an account at once."""
    account = session.query(Account).filter(Account.account_id == account_id).first()
    if account:
        for column in SUMMARY_COLUMNS:
            setattr(account, column, getattr(summary, column))


def delete_account(session: DbSession, account_id: str) -> None:
    """Delete account row (matches and tokens must be removed first)."""
    session.query(Account).filter(Account.account_id == account_id).delete(
        synchronize_session=False
    )


def search_public_accounts(session: DbSession, term: str, limit: int) -> list[AccountEntity]:
    """Public accounts whose handle or display name contains term.

    Case-insensitive, ordered by games played (most first).
    """
    pattern = f"%{_escape_like(term)}%"
    accounts = (
        session.query(Account)
        .filter(
            Account.is_public.is_(True),
            or_(
                Account.user_id.ilike(pattern, escape="\\"),
                Account.username.ilike(pattern, escape="\\"),
            ),
        )
        .order_by(Account.total_games.desc(), Account.user_id)
        .limit(limit)
        .all()
    )
    return [_account_to_entity(a) for a in accounts]


# ============================================================================
# Match Repository
# ============================================================================


def create_match(session: DbSession, entity: MatchEntity) -> MatchEntity:
    """Create a new match."""
    match = Match(
        match_id=entity.match_id,
        account_id=entity.account_id,
        played_on=entity.played_on,
        played_at=entity.played_at,
        match_type=entity.match_type,
        outcome=entity.outcome,
        map_name=entity.map_name,
        rounds_won=entity.rounds_won,
        rounds_lost=entity.rounds_lost,
        damage=entity.damage,
        kills=entity.kills,
        deaths=entity.deaths,
        assists=entity.assists,
    )
    session.add(match)
    session.flush()
    return _match_to_entity(match)


def get_matches_for_account(session: DbSession, account_id: str) -> list[MatchEntity]:
    """Get every match owned by an account."""
    matches = (
        session.query(Match)
        .filter(Match.account_id == account_id)
        .order_by(Match.played_on, Match.created_at)
        .all()
    )
    return [_match_to_entity(m) for m in matches]


def get_recent_matches(session: DbSession, account_id: str, limit: int) -> list[MatchEntity]:
    """Get the most recent matches of an account, newest first."""
    matches = (
        session.query(Match)
        .filter(Match.account_id == account_id)
        .order_by(Match.played_on.desc(), Match.created_at.desc())
        .limit(limit)
        .all()
    )
    return [_match_to_entity(m) for m in matches]


def delete_match(session: DbSession, account_id: str, match_id: str) -> bool:
    """Delete a match owned by account_id. Returns False if none matched."""
    deleted = (
        session.query(Match)
        .filter(Match.match_id == match_id, Match.account_id == account_id)
        .delete(synchronize_session=False)
    )
    return deleted > 0


def delete_matches_for_account(session: DbSession, account_id: str) -> int:
    """Delete every match of an account. Returns the number removed."""
    return (
        session.query(Match)
        .filter(Match.account_id == account_id)
        .delete(synchronize_session=False)
    )


# ============================================================================
# Session Token Repository
# ============================================================================


def create_session_token(session: DbSession, entity: SessionTokenEntity) -> SessionTokenEntity:
    """Store a new token digest."""
    token = SessionToken(
        token_hash=entity.token_hash,
        account_id=entity.account_id,
        expires_at=entity.expires_at,
    )
    session.add(token)
    return entity


def get_session_token(session: DbSession, token_hash: str) -> SessionTokenEntity | None:
    """Get token by digest."""
    token = session.query(SessionToken).filter(SessionToken.token_hash == token_hash).first()
    return _token_to_entity(token) if token else None


def delete_session_token(session: DbSession, token_hash: str) -> None:
    """Revoke a single token."""
    session.query(SessionToken).filter(SessionToken.token_hash == token_hash).delete(
        synchronize_session=False
    )


def delete_tokens_for_account(session: DbSession, account_id: str) -> int:
    """Revoke every token of an account."""
    return (
        session.query(SessionToken)
        .filter(SessionToken.account_id == account_id)
        .delete(synchronize_session=False)
    )


def delete_expired_tokens(session: DbSession, now: datetime) -> int:
    """Drop tokens whose expiry has passed."""
    return (
        session.query(SessionToken)
        .filter(SessionToken.expires_at <= now)
        .delete(synchronize_session=False)
    )


# ============================================================================
# Batch Operations
# ============================================================================


def commit(session: DbSession) -> None:
    """Commit current transaction."""
    session.commit()


def rollback(session: DbSession) -> None:
    """Roll back current transaction."""
    session.rollback()
