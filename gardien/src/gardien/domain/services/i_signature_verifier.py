"""
Signature verifier interface.
"""

from abc import ABC, abstractmethod


class ISignatureVerifier(ABC):
    """Recovers signer addresses from message-recoverable signatures."""

    @abstractmethod
    def recover(self, message: str, signature: str) -> str:
        """
        Recover signing address.

        Args:
            message: Exact signed text
            signature: Hex-encoded signature

        Returns:
            Checksummed signer address

        Raises:
            SignatureMismatchError: If signature is malformed or unrecoverable
        """

    @abstractmethod
    def verify(self, message: str, signature: str, wallet_address: str) -> bool:
        """
        Check that signature was produced by wallet_address.

        Returns:
            True if recovered address matches (case-insensitive)
        """
