"""Identity utilities for accounts and sessions.

- new_id: opaque random identifiers for accounts and matches
- hash_password / verify_password: salted PBKDF2-SHA256 credentials
- generate_token / hash_token: bearer tokens, stored by digest only
- token_expiry: expiry timestamp from NOLU_TOKEN_TTL_HOURS
"""

from __future__ import annotations

import hashlib
import hmac
import os
import secrets
import uuid
from datetime import datetime, timedelta, timezone

PASSWORD_SCHEME = "pbkdf2_sha256"
PASSWORD_ITERATIONS = 260_000
SALT_BYTES = 16
TOKEN_BYTES = 32
DEFAULT_TOKEN_TTL_HOURS = 24


def new_id() -> str:
    """Generate a random opaque identifier."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (the form SQLite hands back)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def hash_password(password: str, iterations: int = PASSWORD_ITERATIONS) -> str:
    """Hash a password for storage.

    Format: pbkdf2_sha256$<iterations>$<salt hex>$<digest hex>

    Args:
        password: Plain-text password.
        iterations: PBKDF2 work factor.

    Returns:
        Encoded hash string.
    """
    salt = secrets.token_hex(SALT_BYTES)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations
    )
    return f"{PASSWORD_SCHEME}${iterations}${salt}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    """Check a password against a stored hash in constant time.

    Malformed or foreign-scheme hashes never verify.
    """
    try:
        scheme, iterations_str, salt, expected = encoded.split("$")
        iterations = int(iterations_str)
    except ValueError:
        return False
    if scheme != PASSWORD_SCHEME:
        return False

    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations
    )
    return hmac.compare_digest(digest.hex(), expected)


def generate_token() -> str:
    """Generate a URL-safe bearer token."""
    return secrets.token_urlsafe(TOKEN_BYTES)


def hash_token(token: str) -> str:
    """Digest under which a token is stored and looked up.

    Returns:
        64-character hex string (SHA256)
    """
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def token_ttl() -> timedelta:
    """Token lifetime from NOLU_TOKEN_TTL_HOURS (default 24h)."""
    raw = os.environ.get("NOLU_TOKEN_TTL_HOURS")
    hours = float(raw) if raw else DEFAULT_TOKEN_TTL_HOURS
    return timedelta(hours=hours)


def token_expiry(now: datetime | None = None) -> datetime:
    """Expiry timestamp for a token issued at now."""
    return (now or utcnow()) + token_ttl()
