"""Domain errors raised by account and match services.

All are ValueError subclasses; the API layer maps each to a status code.
"""


class AccountExistsError(ValueError):
    """Public handle already taken."""


class InvalidCredentialsError(ValueError):
    """Unknown handle or wrong password."""


class InvalidTokenError(ValueError):
    """Bearer token unknown, revoked or expired."""


class AccountNotFoundError(ValueError):
    """Account does not exist (or no longer exists)."""


class MatchNotFoundError(ValueError):
    """Match does not exist or is owned by another account."""


class ProfilePrivateError(ValueError):
    """Profile exists but is hidden from public lookup."""
