"""Domain entities."""

from gardien.domain.entities.session_claims import SessionClaims
from gardien.domain.entities.verification_request import VerificationRequest
from gardien.domain.entities.wallet_binding import WalletBinding

__all__ = [
    "VerificationRequest",
    "WalletBinding",
    "SessionClaims",
]
