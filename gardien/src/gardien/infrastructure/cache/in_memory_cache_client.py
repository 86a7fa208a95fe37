"""
In-memory cache client.

Single-process stand-in for Redis used by tests and local development
(REDIS_ENABLED=false). No method awaits between reading and writing
state, so each call is atomic with respect to other coroutines.
"""

import math
import time
from typing import Callable, Dict, Optional, Tuple

from gardien.infrastructure.cache.i_cache_client import ICacheClient


class InMemoryCacheClient(ICacheClient):
    """Dictionary-backed ICacheClient with lazy TTL expiry."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Initialize store.

        Args:
            clock: Seconds source, injectable so tests can move time
        """
        self._clock = clock
        self._data: Dict[str, Tuple[str, Optional[float]]] = {}

    async def connect(self) -> None:
        """Nothing to connect."""

    async def disconnect(self) -> None:
        """Drop all keys."""
        self._data.clear()

    def _expires_at(self, expire_seconds: Optional[int]) -> Optional[float]:
        if not expire_seconds:
            return None
        return self._clock() + expire_seconds

    def _read(self, key: str) -> Optional[str]:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._data[key]
            return None
        return value

    async def set(
        self,
        key: str,
        value: str,
        expire_seconds: Optional[int] = None,
    ) -> bool:
        self._data[key] = (value, self._expires_at(expire_seconds))
        return True

    async def get(self, key: str) -> Optional[str]:
        return self._read(key)

    async def delete(self, key: str) -> bool:
        existed = self._read(key) is not None
        self._data.pop(key, None)
        return existed

    async def exists(self, key: str) -> bool:
        return self._read(key) is not None

    async def ping(self) -> bool:
        return True

    async def set_if_absent(
        self,
        key: str,
        value: str,
        expire_seconds: Optional[int] = None,
    ) -> bool:
        if self._read(key) is not None:
            return False
        self._data[key] = (value, self._expires_at(expire_seconds))
        return True

    async def get_and_delete(self, key: str) -> Optional[str]:
        value = self._read(key)
        self._data.pop(key, None)
        return value

    async def delete_if_equals(self, key: str, expected: str) -> bool:
        if self._read(key) != expected:
            return False
        del self._data[key]
        return True

    async def increment(self, key: str, expire_seconds: int) -> Tuple[int, int]:
        current = self._read(key)
        if current is None:
            expires_at = self._expires_at(expire_seconds)
            count = 1
        else:
            expires_at = self._data[key][1]
            count = int(current) + 1

        self._data[key] = (str(count), expires_at)

        if expires_at is None:
            return count, expire_seconds
        return count, max(0, math.ceil(expires_at - self._clock()))

    def ttl(self, key: str) -> Optional[float]:
        """Seconds left on key, None if missing or persistent."""
        if self._read(key) is None:
            return None
        expires_at = self._data[key][1]
        if expires_at is None:
            return None
        return expires_at - self._clock()
