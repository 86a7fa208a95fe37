"""
WalletBinding entity - durable identity to wallet link.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from gardien.domain.value_objects.platform import Platform


@dataclass
class WalletBinding:
    """
    WalletBinding entity.

    Business rules:
    - One wallet per (identity_id, platform)
    - One (identity_id, platform) per wallet
    - Wallet comparison is case-insensitive
    """

    identity_id: str
    platform: Platform
    wallet_address: str
    bound_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        """Validate binding data after initialization."""
        if not self.identity_id:
            raise ValueError("Identity id is required")
        if not self.wallet_address:
            raise ValueError("Wallet address is required")

    @property
    def owner_key(self) -> str:
        """Reverse-index value: '<identity_id>:<platform>'."""
        return f"{self.identity_id}:{self.platform.value}"

    @property
    def wallet_key(self) -> str:
        """Lower-cased wallet used for uniqueness."""
        return self.wallet_address.lower()

    def is_owned_by(self, identity_id: str, platform: Platform) -> bool:
        """Check if binding belongs to given identity."""
        return self.identity_id == identity_id and self.platform == platform

    def matches_wallet(self, wallet_address: str) -> bool:
        """Check if binding points at given wallet (case-insensitive)."""
        return self.wallet_key == wallet_address.lower()

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        return {
            "identity_id": self.identity_id,
            "platform": self.platform.value,
            "wallet_address": self.wallet_address,
            "bound_at": self.bound_at.isoformat(),
        }
