"""Redis cache client implementation."""

import asyncio
from typing import Any, Awaitable, Optional, Tuple

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from gardien.domain.exceptions import StoreUnavailableError
from gardien.infrastructure.cache.i_cache_client import ICacheClient
from gardien.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

# KEYS[1] = key, ARGV[1] = expected value
COMPARE_AND_DELETE_SCRIPT = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
end
return 0
"""


class RedisCacheClient(ICacheClient):
    """
    Redis cache client using async redis library.

    Every command is bounded by a timeout. Timeouts and connection errors
    surface as StoreUnavailableError and are never retried here.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        password: Optional[str] = None,
        timeout: float = 2.0,
    ):
        """
        Initialize Redis client configuration.

        Args:
            host: Redis server host
            port: Redis server port
            db: Redis database number (0-15)
            password: Redis password (None if no auth)
            timeout: Per-command timeout in seconds
        """
        self.host = host
        self.port = port
        self.db = db
        self.password = password if password else None
        self.timeout = timeout
        self._client: Optional[aioredis.Redis] = None

    async def connect(self) -> None:
        """Establish connection to Redis server."""
        if self._client is not None:
            return

        self._client = aioredis.from_url(
            f"redis://{self.host}:{self.port}/{self.db}",
            password=self.password,
            encoding="utf-8",
            decode_responses=True,
            socket_timeout=self.timeout,
            socket_connect_timeout=self.timeout,
        )

    async def disconnect(self) -> None:
        """Close connection to Redis server."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _run(self, operation: str, awaitable: Awaitable[Any]) -> Any:
        """Await a Redis call under the store timeout."""
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Redis {operation} timed out after {self.timeout}s")
            raise StoreUnavailableError("redis", reason="timeout")
        except (RedisError, OSError) as e:
            logger.warning(f"Redis {operation} failed: {e}")
            raise StoreUnavailableError("redis", reason=str(e))

    async def _redis(self) -> aioredis.Redis:
        if self._client is None:
            await self.connect()
        return self._client

    async def set(
        self,
        key: str,
        value: str,
        expire_seconds: Optional[int] = None,
    ) -> bool:
        """Store value with optional expiration."""
        client = await self._redis()
        await self._run("set", client.set(key, value, ex=expire_seconds or None))
        return True

    async def get(self, key: str) -> Optional[str]:
        """Retrieve value by key."""
        client = await self._redis()
        return await self._run("get", client.get(key))

    async def delete(self, key: str) -> bool:
        """Delete key from cache."""
        client = await self._redis()
        result = await self._run("delete", client.delete(key))
        return result > 0

    async def exists(self, key: str) -> bool:
        """Check if key exists."""
        client = await self._redis()
        result = await self._run("exists", client.exists(key))
        return result > 0

    async def ping(self) -> bool:
        """
        Check if Redis server is reachable.

        Returns:
            True if server responds
        """
        try:
            client = await self._redis()
            await self._run("ping", client.ping())
            return True
        except StoreUnavailableError:
            return False

    async def set_if_absent(
        self,
        key: str,
        value: str,
        expire_seconds: Optional[int] = None,
    ) -> bool:
        """Store value only if key is absent (SET NX EX)."""
        client = await self._redis()
        result = await self._run(
            "set_if_absent",
            client.set(key, value, ex=expire_seconds or None, nx=True),
        )
        return bool(result)

    async def get_and_delete(self, key: str) -> Optional[str]:
        """Atomically read and remove key (GETDEL, Redis >= 6.2)."""
        client = await self._redis()
        return await self._run("get_and_delete", client.getdel(key))

    async def delete_if_equals(self, key: str, expected: str) -> bool:
        """Delete key only while it holds expected value (Lua)."""
        client = await self._redis()
        result = await self._run(
            "delete_if_equals",
            client.eval(COMPARE_AND_DELETE_SCRIPT, 1, key, expected),
        )
        return int(result) > 0

    async def increment(self, key: str, expire_seconds: int) -> Tuple[int, int]:
        """
        Increment counter inside MULTI/EXEC.

        EXPIRE NX (Redis >= 7) sets the window only on the first increment.
        """
        client = await self._redis()

        async def _transaction() -> list:
            async with client.pipeline(transaction=True) as pipe:
                pipe.incr(key)
                pipe.expire(key, expire_seconds, nx=True)
                pipe.ttl(key)
                return await pipe.execute()

        count, _, ttl = await self._run("increment", _transaction())
        if ttl is None or ttl < 0:
            ttl = expire_seconds
        return int(count), int(ttl)
