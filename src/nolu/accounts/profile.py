"""Profile visibility, public lookup and account deletion."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from nolu.core.errors import AccountNotFoundError, ProfilePrivateError
from nolu.db import repo
from nolu.db.repo import DbSession
from nolu.models.domain import AccountEntity, MatchEntity

logger = logging.getLogger(__name__)

RECENT_MATCH_LIMIT = 5
MIN_SEARCH_LENGTH = 2
DEFAULT_SEARCH_LIMIT = 10
MAX_SEARCH_LIMIT = 50


@dataclass
class PublicProfile:
    """Public account view with its latest matches."""

    account: AccountEntity
    recent_matches: list[MatchEntity]


def set_privacy(session: DbSession, account_id: str, is_public: bool) -> AccountEntity:
    """Show or hide the profile from public lookup and search.

    Raises:
        AccountNotFoundError: If the account does not exist.
    """
    if repo.get_account(session, account_id) is None:
        raise AccountNotFoundError("User not found")

    repo.update_account_privacy(session, account_id, is_public)
    repo.commit(session)
    return repo.get_account(session, account_id)


def delete_account(session: DbSession, account_id: str) -> None:
    """Delete the account together with its matches and tokens.

    Raises:
        AccountNotFoundError: If the account does not exist.
    """
    account = repo.get_account(session, account_id)
    if account is None:
        raise AccountNotFoundError("User not found")

    try:
        removed = repo.delete_matches_for_account(session, account_id)
        repo.delete_tokens_for_account(session, account_id)
        repo.delete_account(session, account_id)
        repo.commit(session)
    except Exception:
        repo.rollback(session)
        raise

    logger.info(f"Deleted account {account.user_id} ({removed} matches removed)")


def get_public_profile(session: DbSession, user_id: str) -> PublicProfile:
    """Look up a public profile by handle.

    Raises:
        AccountNotFoundError: If no account has this handle.
        ProfilePrivateError: If the account hides its profile.
    """
    account = repo.get_account_by_user_id(session, user_id)
    if account is None:
        raise AccountNotFoundError("Player not found")
    if not account.is_public:
        raise ProfilePrivateError("This player profile is private")

    recent = repo.get_recent_matches(session, account.account_id, RECENT_MATCH_LIMIT)
    return PublicProfile(account=account, recent_matches=recent)


def search_players(
    session: DbSession, query: str, limit: int = DEFAULT_SEARCH_LIMIT
) -> list[AccountEntity]:
    """Search public profiles by handle or display name.

    Raises:
        ValueError: If the trimmed query is shorter than two characters.
    """
    term = query.strip()
    if len(term) < MIN_SEARCH_LENGTH:
        raise ValueError("Search query must be at least 2 characters long")

    limit = max(1, min(limit, MAX_SEARCH_LIMIT))
    return repo.search_public_accounts(session, term, limit)
