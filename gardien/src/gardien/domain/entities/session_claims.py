"""
SessionClaims entity - decoded content of a session token.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from gardien.domain.value_objects.platform import Platform


@dataclass(frozen=True)
class SessionClaims:
    """Claims carried by a wallet session token. Never stored server-side."""

    identity_id: str
    platform: Platform
    wallet_address: str
    issued_at: datetime
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Check if claims are past their expiry."""
        current = now or datetime.now(timezone.utc)
        return current >= self.expires_at

    def to_dict(self) -> dict:
        """Convert claims to dictionary representation."""
        return {
            "identity_id": self.identity_id,
            "platform": self.platform.value,
            "wallet_address": self.wallet_address,
            "issued_at": self.issued_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
        }
