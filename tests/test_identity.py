"""Tests for identity utilities.

Tests validate:
1. Password hashes are salted and verify only the right password
2. Malformed hashes never verify
3. Tokens are random and stored by a stable digest
4. Token expiry honours NOLU_TOKEN_TTL_HOURS
"""

from datetime import datetime, timedelta

from nolu.core.identity import (
    DEFAULT_TOKEN_TTL_HOURS,
    PASSWORD_SCHEME,
    generate_token,
    hash_password,
    hash_token,
    new_id,
    token_expiry,
    verify_password,
)


class TestPasswordHashing:
    """Test hash_password / verify_password."""

    def test_hash_format(self):
        """Hash carries scheme, iterations, salt and digest."""
        encoded = hash_password("secret123", iterations=1000)
        scheme, iterations, salt, digest = encoded.split("$")
        assert scheme == PASSWORD_SCHEME
        assert iterations == "1000"
        assert len(salt) == 32
        assert len(digest) == 64

    def test_correct_password_verifies(self):
        """The original password verifies."""
        encoded = hash_password("secret123", iterations=1000)
        assert verify_password("secret123", encoded) is True

    def test_wrong_password_rejected(self):
        """A different password does not verify."""
        encoded = hash_password("secret123", iterations=1000)
        assert verify_password("secret124", encoded) is False

    def test_salted(self):
        """Same password hashes differently each time."""
        assert hash_password("secret123", iterations=1000) != hash_password(
            "secret123", iterations=1000
        )

    def test_malformed_hash_rejected(self):
        """Garbage or foreign schemes never verify."""
        assert verify_password("secret123", "not-a-hash") is False
        assert verify_password("secret123", "md5$1$salt$digest") is False
        assert verify_password("secret123", "pbkdf2_sha256$many$salt$digest") is False


class TestTokens:
    """Test token generation and digests."""

    def test_tokens_unique(self):
        """Consecutive tokens differ."""
        assert generate_token() != generate_token()

    def test_token_is_url_safe(self):
        """Token contains only URL-safe characters."""
        token = generate_token()
        assert all(c.isalnum() or c in "-_" for c in token)

    def test_hash_token_deterministic(self):
        """Same token always maps to the same digest."""
        assert hash_token("abc") == hash_token("abc")
        assert len(hash_token("abc")) == 64

    def test_hash_token_differs_from_token(self):
        """The digest is not the token itself."""
        token = generate_token()
        assert hash_token(token) != token

    def test_new_id_unique(self):
        """Identifiers are unique."""
        assert new_id() != new_id()


class TestTokenExpiry:
    """Test token_expiry."""

    def test_default_ttl(self, monkeypatch):
        """Defaults to 24 hours."""
        monkeypatch.delenv("NOLU_TOKEN_TTL_HOURS", raising=False)
        now = datetime(2024, 1, 1, 12, 0, 0)
        assert token_expiry(now) == now + timedelta(hours=DEFAULT_TOKEN_TTL_HOURS)

    def test_env_override(self, monkeypatch):
        """NOLU_TOKEN_TTL_HOURS overrides the default."""
        monkeypatch.setenv("NOLU_TOKEN_TTL_HOURS", "2")
        now = datetime(2024, 1, 1, 12, 0, 0)
        assert token_expiry(now) == datetime(2024, 1, 1, 14, 0, 0)
