"""
Wallet verification domain exceptions.

Nonce and signature failures use fixed texts so callers cannot tell
which internal check rejected the attempt.
"""

import math

from gardien.domain.exceptions.base import GardienException


class VerificationError(GardienException):
    """Base exception for challenge-response failures."""


class RateLimitExceededError(VerificationError):
    """Raised when an identity requests too many challenges in one window."""

    def __init__(self, retry_after: int):
        self.retry_after = max(0, int(retry_after))
        minutes = max(1, math.ceil(self.retry_after / 60))
        super().__init__(
            "Too many verification attempts. "
            f"Please try again in {minutes} minute(s).",
            code="RATE_LIMIT_EXCEEDED",
        )


class WalletAlreadyBoundError(VerificationError):
    """Raised when a wallet or identity is already linked elsewhere."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or (
                "This wallet is already linked to another account. "
                "Unlink it first before verifying again."
            ),
            code="WALLET_ALREADY_BOUND",
        )

    @classmethod
    def identity_bound(cls) -> "WalletAlreadyBoundError":
        """The identity already holds a different wallet."""
        return cls(
            "This account is already linked to a different wallet. "
            "Unlink it first before verifying again."
        )


class NonceExpiredOrInvalidError(VerificationError):
    """Raised when a challenge is unknown, already used or expired."""

    def __init__(self):
        super().__init__(
            "Invalid or expired verification request. "
            "Please request a new challenge.",
            code="NONCE_EXPIRED_OR_INVALID",
        )


class SignatureMismatchError(VerificationError):
    """Raised when a signature does not prove ownership of the wallet."""

    def __init__(self):
        super().__init__(
            "Signature verification failed.",
            code="SIGNATURE_MISMATCH",
        )
