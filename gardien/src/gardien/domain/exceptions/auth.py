"""
Session token exceptions.
"""

from gardien.domain.exceptions.base import GardienException


class AuthenticationError(GardienException):
    """Raised when a session credential cannot be accepted."""

    def __init__(
        self,
        message: str = "Authentication failed",
        code: str = "AUTHENTICATION_ERROR",
    ):
        super().__init__(message, code=code)


class ExpiredTokenError(AuthenticationError):
    """Raised when a session token has expired."""

    def __init__(self):
        super().__init__("Session token has expired", code="TOKEN_EXPIRED")


class InvalidTokenError(AuthenticationError):
    """Raised when a session token is malformed, forged or revoked."""

    def __init__(self):
        super().__init__("Invalid session token", code="INVALID_TOKEN")
