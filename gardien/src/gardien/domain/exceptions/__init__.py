"""
Domain exceptions package.
"""

# Auth exceptions
from gardien.domain.exceptions.auth import (
    AuthenticationError,
    ExpiredTokenError,
    InvalidTokenError,
)

# Base exceptions
from gardien.domain.exceptions.base import (
    GardienException,
    StoreUnavailableError,
    ValidationError,
)

# Verification exceptions
from gardien.domain.exceptions.verification import (
    NonceExpiredOrInvalidError,
    RateLimitExceededError,
    SignatureMismatchError,
    VerificationError,
    WalletAlreadyBoundError,
)

__all__ = [
    # Base
    "GardienException",
    "ValidationError",
    "StoreUnavailableError",
    # Auth
    "AuthenticationError",
    "ExpiredTokenError",
    "InvalidTokenError",
    # Verification
    "VerificationError",
    "RateLimitExceededError",
    "WalletAlreadyBoundError",
    "NonceExpiredOrInvalidError",
    "SignatureMismatchError",
]
