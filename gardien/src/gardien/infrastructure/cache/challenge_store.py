"""
Challenge store backed by the shared key-value store.
"""

from typing import Optional

from gardien.domain.entities.verification_request import VerificationRequest
from gardien.domain.repositories.i_challenge_store import IChallengeStore
from gardien.infrastructure.cache.i_cache_client import ICacheClient
from gardien.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class RedisChallengeStore(IChallengeStore):
    """
    Stores verification requests under challenge:<nonce>.

    Expiry is delegated to the store TTL, so no sweeper is needed.
    """

    KEY_PREFIX = "challenge"

    def __init__(self, cache_client: ICacheClient):
        self.cache = cache_client

    def _make_key(self, nonce: str) -> str:
        return f"{self.KEY_PREFIX}:{nonce}"

    async def create(self, request: VerificationRequest, ttl_seconds: int) -> bool:
        return await self.cache.set_if_absent(
            self._make_key(request.nonce),
            request.to_json(),
            expire_seconds=ttl_seconds,
        )

    async def consume(self, nonce: str) -> Optional[VerificationRequest]:
        if not nonce:
            return None

        raw = await self.cache.get_and_delete(self._make_key(nonce))
        if raw is None:
            return None

        try:
            return VerificationRequest.from_json(raw)
        except ValueError as e:
            logger.warning(f"Discarded undecodable challenge: {e}")
            return None
