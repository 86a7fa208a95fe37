"""
VerificationRequest entity - one in-flight wallet challenge.
"""

import json
import secrets
import time
from dataclasses import dataclass
from typing import Optional

from gardien.domain.value_objects.platform import Platform

# 32 random bytes, hex encoded (256 bits)
NONCE_BYTES = 32


def now_millis() -> int:
    """Current unix time in milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class VerificationRequest:
    """
    Pending challenge keyed by its nonce.

    Business rules:
    - Nonce is unguessable and unique
    - expires_at is fixed at issuance (issued_at + TTL)
    - Consumed exactly once (on verification or store expiry)
    """

    identity_id: str
    platform: Platform
    wallet_address: str
    nonce: str
    issued_at: int
    expires_at: int

    def __post_init__(self):
        """Validate request data after initialization."""
        if not self.identity_id:
            raise ValueError("Identity id is required")
        if not self.nonce:
            raise ValueError("Nonce is required")
        if self.expires_at <= self.issued_at:
            raise ValueError("expires_at must be after issued_at")

    @classmethod
    def issue(
        cls,
        identity_id: str,
        platform: Platform,
        wallet_address: str,
        ttl_seconds: int,
        now_ms: Optional[int] = None,
    ) -> "VerificationRequest":
        """
        Create a new request with a fresh random nonce.

        Args:
            identity_id: Platform user id
            platform: Chat platform
            wallet_address: Checksummed wallet address
            ttl_seconds: Challenge lifetime
            now_ms: Issuance time override (unix millis)

        Returns:
            New VerificationRequest
        """
        issued_at = now_ms if now_ms is not None else now_millis()
        return cls(
            identity_id=identity_id,
            platform=platform,
            wallet_address=wallet_address,
            nonce=secrets.token_hex(NONCE_BYTES),
            issued_at=issued_at,
            expires_at=issued_at + ttl_seconds * 1000,
        )

    def is_expired(self, now_ms: Optional[int] = None) -> bool:
        """Check whether the challenge lifetime has passed."""
        current = now_ms if now_ms is not None else now_millis()
        return current > self.expires_at

    def remaining_seconds(self, now_ms: Optional[int] = None) -> int:
        """Seconds left before expiry (never negative)."""
        current = now_ms if now_ms is not None else now_millis()
        return max(0, (self.expires_at - current) // 1000)

    def to_json(self) -> str:
        """Serialize for the challenge store."""
        return json.dumps(
            {
                "identity_id": self.identity_id,
                "platform": self.platform.value,
                "wallet_address": self.wallet_address,
                "nonce": self.nonce,
                "issued_at": self.issued_at,
                "expires_at": self.expires_at,
            }
        )

    @classmethod
    def from_json(cls, raw: str) -> "VerificationRequest":
        """
        Deserialize from the challenge store.

        Raises:
            ValueError: If payload is malformed
        """
        try:
            data = json.loads(raw)
            return cls(
                identity_id=str(data["identity_id"]),
                platform=Platform.parse(data["platform"]),
                wallet_address=str(data["wallet_address"]),
                nonce=str(data["nonce"]),
                issued_at=int(data["issued_at"]),
                expires_at=int(data["expires_at"]),
            )
        except (TypeError, KeyError, json.JSONDecodeError) as e:
            raise ValueError(f"Malformed verification request: {e}")
