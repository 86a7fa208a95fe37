"""
Rate Limiter implementation.

Fixed-window counter on the shared key-value store, so the limit holds
across every service instance.
"""

from dataclasses import dataclass

from gardien.domain.exceptions import RateLimitExceededError
from gardien.domain.value_objects.platform import Platform
from gardien.infrastructure.cache.i_cache_client import ICacheClient
from gardien.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of one rate limit check."""

    allowed: bool
    count: int
    limit: int
    retry_after: int

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.count)


class RateLimiter:
    """
    Per (identity, platform) challenge limiter.

    Rejected attempts still count: the limit is "at most N starts per
    window", which keeps the store contract to one atomic increment.
    """

    def __init__(
        self,
        cache_client: ICacheClient,
        max_attempts: int = 5,
        window_seconds: int = 3600,
    ):
        """
        Initialize rate limiter.

        Args:
            cache_client: Shared key-value store
            max_attempts: Allowed attempts per window
            window_seconds: Window length in seconds
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be at least 1")

        self.cache = cache_client
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds

    def _make_key(self, identity_id: str, platform: Platform) -> str:
        """
        Make key for rate limit tracking.

        Args:
            identity_id: Platform user id
            platform: Chat platform

        Returns:
            Key string
        """
        return f"ratelimit:{identity_id}:{platform.value}"

    async def check(self, identity_id: str, platform: Platform) -> RateLimitDecision:
        """
        Count one attempt and decide whether it is allowed.

        Args:
            identity_id: Platform user id
            platform: Chat platform

        Returns:
            RateLimitDecision for this attempt
        """
        count, ttl = await self.cache.increment(
            self._make_key(identity_id, platform),
            self.window_seconds,
        )
        allowed = count <= self.max_attempts

        return RateLimitDecision(
            allowed=allowed,
            count=count,
            limit=self.max_attempts,
            retry_after=0 if allowed else ttl,
        )

    async def enforce(self, identity_id: str, platform: Platform) -> RateLimitDecision:
        """
        Check and raise when rejected.

        Raises:
            RateLimitExceededError: If attempt exceeds the window limit
        """
        decision = await self.check(identity_id, platform)
        if not decision.allowed:
            logger.warning(
                f"Rate limit exceeded for {platform.value} identity "
                f"({decision.count}/{decision.limit})"
            )
            raise RateLimitExceededError(retry_after=decision.retry_after)
        return decision

    async def reset(self, identity_id: str, platform: Platform) -> None:
        """
        Reset counter for identity.

        Args:
            identity_id: Platform user id
            platform: Chat platform
        """
        await self.cache.delete(self._make_key(identity_id, platform))
