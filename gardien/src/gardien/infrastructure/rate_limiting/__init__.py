"""Rate limiting."""

from gardien.infrastructure.rate_limiting.rate_limiter import (
    RateLimitDecision,
    RateLimiter,
)

__all__ = ["RateLimiter", "RateLimitDecision"]
