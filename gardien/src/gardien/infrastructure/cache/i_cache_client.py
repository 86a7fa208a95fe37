"""Cache client interface for key-value storage."""

from abc import ABC, abstractmethod
from typing import Optional, Tuple


class ICacheClient(ABC):
    """
    Abstract TTL-capable key-value store.

    Every conditional primitive must be atomic in the backing store, since
    several service instances share it.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Establish connection to cache server."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close connection to cache server."""

    @abstractmethod
    async def set(
        self,
        key: str,
        value: str,
        expire_seconds: Optional[int] = None,
    ) -> bool:
        """
        Store value with optional expiration.

        Args:
            key: Cache key
            value: Value to store (string)
            expire_seconds: TTL in seconds (None = no expiration)

        Returns:
            True if stored successfully
        """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Retrieve value by key.

        Args:
            key: Cache key

        Returns:
            Value if exists and not expired, None otherwise
        """

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete key from cache.

        Returns:
            True if key was deleted, False if key didn't exist
        """

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if key exists and is not expired."""

    @abstractmethod
    async def ping(self) -> bool:
        """
        Check if cache server is reachable.

        Returns:
            True if server responds
        """

    @abstractmethod
    async def set_if_absent(
        self,
        key: str,
        value: str,
        expire_seconds: Optional[int] = None,
    ) -> bool:
        """
        Store value only if key does not exist (SET NX EX).

        Returns:
            True if stored, False if key already existed
        """

    @abstractmethod
    async def get_and_delete(self, key: str) -> Optional[str]:
        """
        Atomically read and remove key (GETDEL).

        Returns:
            Previous value, or None if key did not exist
        """

    @abstractmethod
    async def delete_if_equals(self, key: str, expected: str) -> bool:
        """
        Delete key only while it still holds expected value.

        Returns:
            True if key was deleted
        """

    @abstractmethod
    async def increment(self, key: str, expire_seconds: int) -> Tuple[int, int]:
        """
        Atomically increment counter, starting its TTL on first increment.

        The TTL is never extended by later increments, so the window
        resets only when the key expires.

        Args:
            key: Counter key
            expire_seconds: Window length applied when counter is created

        Returns:
            Tuple of (count after increment, seconds until key expires)
        """
