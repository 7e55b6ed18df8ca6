"""Match record mutations.

Each operation changes an account's match set and rebuilds the account's
summary inside the same transaction. On any failure the transaction is
rolled back, leaving both matches and the stored summary as they were.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, TypeVar

from nolu.aggregation.summary import rebuild_account_summary
from nolu.core.errors import AccountNotFoundError, MatchNotFoundError
from nolu.core.identity import new_id
from nolu.db import repo
from nolu.db.repo import DbSession
from nolu.models.domain import MatchEntity, MatchType, Outcome
from nolu.models.types import AccountSummary

logger = logging.getLogger(__name__)

MATCH_HISTORY_LIMIT = 100

T = TypeVar("T")


@dataclass
class MatchInput:
    """Validated input for a new match."""

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


@dataclass
class MatchMutationResult:
    """Result of a mutation: the affected match (if any) and the new summary."""

    summary: AccountSummary
    match: MatchEntity | None = None
    removed_count: int = 0


def _in_transaction(session: DbSession, work: Callable[[], T]) -> T:
    """Run work and commit, or roll back everything on failure."""
    try:
        result = work()
        repo.commit(session)
    except Exception:
        repo.rollback(session)
        raise
    return result


def _require_account(session: DbSession, account_id: str) -> None:
    if repo.get_account(session, account_id) is None:
        raise AccountNotFoundError(f"Account not found: {account_id}")


def add_match(
    session: DbSession,
    account_id: str,
    match_input: MatchInput,
) -> MatchMutationResult:
    """Store a new match and rebuild the owner's summary.

    Args:
        session: Database session.
        account_id: Owning account.
        match_input: Validated match data.

    Returns:
        MatchMutationResult with the stored match and the new summary.

    Raises:
        AccountNotFoundError: If the account does not exist.
    """
    _require_account(session, account_id)

    def work() -> MatchMutationResult:
        match = repo.create_match(session, _create_match_entity(account_id, match_input))
        summary = rebuild_account_summary(session, account_id)
        return MatchMutationResult(summary=summary, match=match)

    result = _in_transaction(session, work)
    logger.info(f"Added match {result.match.match_id} for account {account_id}")
    return result


def delete_match(
    session: DbSession,
    account_id: str,
    match_id: str,
) -> MatchMutationResult:
    """Delete one of the account's matches and rebuild its summary.

    Raises:
        MatchNotFoundError: If no such match is owned by the account.
    """

    def work() -> MatchMutationResult:
        if not repo.delete_match(session, account_id, match_id):
            raise MatchNotFoundError(f"Match not found: {match_id}")
        summary = rebuild_account_summary(session, account_id)
        return MatchMutationResult(summary=summary, removed_count=1)

    result = _in_transaction(session, work)
    logger.info(f"Deleted match {match_id} for account {account_id}")
    return result


def reset_stats(session: DbSession, account_id: str) -> MatchMutationResult:
    """Delete every match of the account and rebuild its (now empty) summary.

    Raises:
        AccountNotFoundError: If the account does not exist.
    """
    _require_account(session, account_id)

    def work() -> MatchMutationResult:
        removed = repo.delete_matches_for_account(session, account_id)
        summary = rebuild_account_summary(session, account_id)
        return MatchMutationResult(summary=summary, removed_count=removed)

    result = _in_transaction(session, work)
    logger.info(f"Reset stats for account {account_id} ({result.removed_count} matches removed)")
    return result


def list_matches(
    session: DbSession, account_id: str, limit: int = MATCH_HISTORY_LIMIT
) -> list[MatchEntity]:
    """Own match history, newest first."""
    return repo.get_recent_matches(session, account_id, limit)


def _create_match_entity(account_id: str, match_input: MatchInput) -> MatchEntity:
    """Create match entity from input.

    Pure function - no database access.
    """
    return MatchEntity(
        match_id=new_id(),
        account_id=account_id,
        played_on=match_input.played_on,
        played_at=match_input.played_at,
        match_type=match_input.match_type,
        outcome=match_input.outcome,
        map_name=match_input.map_name,
        rounds_won=match_input.rounds_won,
        rounds_lost=match_input.rounds_lost,
        damage=match_input.damage,
        kills=match_input.kills,
        deaths=match_input.deaths,
        assists=match_input.assists,
    )
