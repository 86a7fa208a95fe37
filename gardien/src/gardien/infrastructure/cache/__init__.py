"""Key-value store clients and store-backed repositories."""

from gardien.infrastructure.cache.cache_binding_registry import CacheBindingRegistry
from gardien.infrastructure.cache.challenge_store import RedisChallengeStore
from gardien.infrastructure.cache.i_cache_client import ICacheClient
from gardien.infrastructure.cache.in_memory_cache_client import InMemoryCacheClient
from gardien.infrastructure.cache.redis_cache_client import RedisCacheClient

__all__ = [
    "ICacheClient",
    "RedisCacheClient",
    "InMemoryCacheClient",
    "RedisChallengeStore",
    "CacheBindingRegistry",
]
