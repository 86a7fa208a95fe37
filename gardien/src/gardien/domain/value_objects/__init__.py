"""Domain value objects."""

from gardien.domain.value_objects.platform import Platform
from gardien.domain.value_objects.wallet_address import WalletAddress

__all__ = ["Platform", "WalletAddress"]
