"""
Challenge store interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from gardien.domain.entities.verification_request import VerificationRequest


class IChallengeStore(ABC):
    """Interface for TTL-bound storage of in-flight verification requests."""

    @abstractmethod
    async def create(self, request: VerificationRequest, ttl_seconds: int) -> bool:
        """
        Insert request keyed by its nonce if the nonce is unused.

        Args:
            request: Request to store
            ttl_seconds: Native store expiry

        Returns:
            True if stored, False if the nonce already exists

        Raises:
            StoreUnavailableError: If store cannot be reached
        """

    @abstractmethod
    async def consume(self, nonce: str) -> Optional[VerificationRequest]:
        """
        Atomically read and delete request for nonce.

        Exactly one concurrent caller receives the request.

        Args:
            nonce: Challenge nonce

        Returns:
            Stored request, or None if missing, expired or undecodable

        Raises:
            StoreUnavailableError: If store cannot be reached
        """
