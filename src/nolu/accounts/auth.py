"""Registration, login and bearer-token sessions.

Tokens are opaque random strings; only their SHA-256 digest is stored,
together with an expiry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

from nolu.core.errors import (
    AccountExistsError,
    AccountNotFoundError,
    InvalidCredentialsError,
    InvalidTokenError,
)
from nolu.core.identity import (
    generate_token,
    hash_password,
    hash_token,
    new_id,
    token_expiry,
    utcnow,
    verify_password,
)
from nolu.db import repo
from nolu.db.repo import DbSession
from nolu.models.domain import AccountEntity, SessionTokenEntity

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
    """Issued token plus the account it authenticates."""

    account: AccountEntity
    token: str


def _issue_token(session: DbSession, account_id: str) -> str:
    repo.delete_expired_tokens(session, utcnow())
    token = generate_token()
    repo.create_session_token(
        session,
        SessionTokenEntity(
            token_hash=hash_token(token),
            account_id=account_id,
            expires_at=token_expiry(),
        ),
    )
    return token


def register_account(
    session: DbSession,
    user_id: str,
    username: str,
    password: str,
) -> AuthResult:
    """Create a public account with an all-zero summary and log it in.

    Args:
        session: Database session.
        user_id: Public handle (unique).
        username: Display name.
        password: Plain-text password.

    Returns:
        AuthResult with the new account and a fresh token.

    Raises:
        AccountExistsError: If user_id is taken.
    """
    if repo.get_account_by_user_id(session, user_id) is not None:
        raise AccountExistsError(f"User ID already exists: {user_id}")

    account = AccountEntity(
        account_id=new_id(),
        user_id=user_id,
        username=username,
        password_hash=hash_password(password),
        is_public=True,
    )

    try:
        repo.create_account(session, account)
        session.flush()
        token = _issue_token(session, account.account_id)
        repo.commit(session)
    except IntegrityError as e:
        repo.rollback(session)
        raise AccountExistsError(f"User ID already exists: {user_id}") from e

    logger.info(f"Created account {user_id}")
    return AuthResult(account=account, token=token)


def login(session: DbSession, user_id: str, password: str) -> AuthResult:
    """Verify credentials and issue a new token.

    Raises:
        InvalidCredentialsError: If the handle is unknown or the password wrong.
    """
    account = repo.get_account_by_user_id(session, user_id)
    if account is None or not verify_password(password, account.password_hash):
        logger.warning(f"Failed login for {user_id}")
        raise InvalidCredentialsError("Invalid credentials")

    token = _issue_token(session, account.account_id)
    repo.commit(session)
    return AuthResult(account=account, token=token)


def authenticate_token(session: DbSession, token: str) -> AccountEntity:
    """Resolve a bearer token to its account.

    Raises:
        InvalidTokenError: If the token is unknown or expired.
        AccountNotFoundError: If the token's account no longer exists.
    """
    stored = repo.get_session_token(session, hash_token(token))
    if stored is None or stored.expires_at <= utcnow():
        raise InvalidTokenError("Invalid or expired token")

    account = repo.get_account(session, stored.account_id)
    if account is None:
        raise AccountNotFoundError("User not found")
    return account


def logout(session: DbSession, token: str) -> None:
    """Revoke a token and purge expired ones."""
    repo.delete_session_token(session, hash_token(token))
    repo.delete_expired_tokens(session, utcnow())
    repo.commit(session)
