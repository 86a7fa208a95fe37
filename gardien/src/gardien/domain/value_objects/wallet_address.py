"""
WalletAddress value object - Immutable EVM wallet address.
"""

from dataclasses import dataclass

from eth_utils import is_address, to_checksum_address


@dataclass(frozen=True, eq=False)
class WalletAddress:
    """
    Value object representing a validated account-based wallet address.

    Business rules:
    - 0x-prefixed, 20-byte hex string
    - Mixed-case input must carry a valid EIP-55 checksum
    - Equality is case-insensitive
    """

    address: str

    def __post_init__(self):
        """Validate wallet address on creation."""
        if not self.address:
            raise ValueError("Wallet address cannot be empty")

        if not isinstance(self.address, str) or not is_address(self.address):
            raise ValueError(f"Invalid wallet address: {self.address!r}")

    @property
    def checksum(self) -> str:
        """EIP-55 checksummed form used for display and message text."""
        return to_checksum_address(self.address)

    @property
    def key(self) -> str:
        """Lower-cased form used for uniqueness lookups."""
        return self.address.lower()

    def truncated(self) -> str:
        """Return truncated address for display (e.g., '0xAbC1...9fE2')."""
        checksum = self.checksum
        return f"{checksum[:6]}...{checksum[-4:]}"

    def __str__(self) -> str:
        """String representation returns checksummed address."""
        return self.checksum

    def __eq__(self, other) -> bool:
        """Compare wallet addresses case-insensitively."""
        if not isinstance(other, WalletAddress):
            return False
        return self.key == other.key

    def __hash__(self) -> int:
        """Make wallet address hashable for use in sets/dicts."""
        return hash(self.key)
