"""
Binding registry interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from gardien.domain.entities.wallet_binding import WalletBinding
from gardien.domain.value_objects.platform import Platform


class IBindingRegistry(ABC):
    """
    Interface for identity <-> wallet bindings.

    Implementations must enforce uniqueness in both directions
    atomically without in-process locks.
    """

    @abstractmethod
    async def bind(
        self,
        identity_id: str,
        platform: Platform,
        wallet_address: str,
    ) -> WalletBinding:
        """
        Bind wallet to identity.

        Re-binding the same identity to the same wallet returns the
        existing binding.

        Args:
            identity_id: Platform user id
            platform: Chat platform
            wallet_address: Checksummed wallet address

        Returns:
            Created (or existing identical) binding

        Raises:
            WalletAlreadyBoundError: If wallet or identity is bound elsewhere
            StoreUnavailableError: If store cannot be reached
        """

    @abstractmethod
    async def unbind(
        self,
        identity_id: str,
        platform: Platform,
    ) -> Optional[WalletBinding]:
        """
        Remove binding for identity.

        Args:
            identity_id: Platform user id
            platform: Chat platform

        Returns:
            Removed binding, or None if identity was not bound
        """

    @abstractmethod
    async def get_by_identity(
        self,
        identity_id: str,
        platform: Platform,
    ) -> Optional[WalletBinding]:
        """
        Get binding by identity.

        Args:
            identity_id: Platform user id
            platform: Chat platform

        Returns:
            WalletBinding if found, None otherwise
        """

    @abstractmethod
    async def get_by_wallet(self, wallet_address: str) -> Optional[WalletBinding]:
        """
        Get binding by wallet address (case-insensitive).

        Args:
            wallet_address: Wallet address

        Returns:
            WalletBinding if found, None otherwise
        """
