"""Per-client request throttling with Redis and in-memory backends.

Both backends implement the same sliding-window contract. The factory
prefers Redis when ``redis_url`` is configured so that several API
processes share one budget, and drops back to process-local buckets when
Redis cannot be reached.

Usage:
    limiter = await get_rate_limiter(settings)
    result = await limiter.is_allowed("api_requests:203.0.113.7", limit=100, window=60)
    if not result.allowed:
        ...  # respond 429 with result.retry_after
"""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol

import structlog

from businesshub.config.settings import Settings

logger = structlog.get_logger(__name__)


@dataclass
class RateLimitResult:
    """Outcome of a single rate limit check."""

    allowed: bool
    remaining: int
    reset_at: float
    retry_after: Optional[float] = None

    def headers(self, limit: int) -> dict[str, str]:
        """X-RateLimit-* headers describing this result."""
        return {
            "X-RateLimit-Limit": str(limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(int(self.reset_at)),
        }


class RateLimiter(Protocol):
    """Protocol for rate limiter backends."""

    async def is_allowed(
        self, identifier: str, limit: int, window: int
    ) -> RateLimitResult: ...

    async def get_status(
        self, identifier: str, limit: int, window: int
    ) -> RateLimitResult: ...

    async def reset(self, identifier: str) -> None: ...


@dataclass
class InMemoryRateLimiter:
    """
    Process-local sliding window limiter.

    State is lost on restart and is not shared between workers; used in
    development, tests and as the Redis fallback.
    """

    sweep_every: int = 1000
    _buckets: Dict[str, List[float]] = field(default_factory=dict)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _checks: int = 0

    def _live_hits(self, identifier: str, now: float, window: int) -> List[float]:
        hits = [t for t in self._buckets.get(identifier, []) if t > now - window]
        if hits:
            self._buckets[identifier] = hits
        else:
            self._buckets.pop(identifier, None)
        return hits

    def _sweep(self, now: float, window: int) -> None:
        """Drop every bucket with no hit inside the window."""
        for identifier in [k for k, hits in self._buckets.items() if not hits or hits[-1] <= now - window]:
            del self._buckets[identifier]

    @staticmethod
    def _build_result(hits: List[float], limit: int, window: int, now: float) -> RateLimitResult:
        remaining = max(0, limit - len(hits))
        reset_at = (min(hits) + window) if hits else now + window
        return RateLimitResult(
            allowed=remaining > 0,
            remaining=remaining,
            reset_at=reset_at,
            retry_after=max(0.0, reset_at - now) if remaining == 0 else None,
        )

    async def is_allowed(
        self,
        identifier: str,
        limit: int,
        window: int,
    ) -> RateLimitResult:
        """Consume one request from the identifier's budget if any is left."""
        async with self._lock:
            now = time.time()
            self._checks += 1
            if self._checks % self.sweep_every == 0:
                self._sweep(now, window)

            hits = self._live_hits(identifier, now, window)
            result = self._build_result(hits, limit, window, now)

            if not result.allowed:
                return result

            hits.append(now)
            self._buckets[identifier] = hits
            result.remaining -= 1
            return result

    async def get_status(
        self,
        identifier: str,
        limit: int,
        window: int,
    ) -> RateLimitResult:
        """Inspect the budget without consuming a request."""
        async with self._lock:
            now = time.time()
            hits = self._live_hits(identifier, now, window)
            return self._build_result(hits, limit, window, now)

    async def reset(self, identifier: str) -> None:
        """Forget every request recorded for the identifier."""
        async with self._lock:
            self._buckets.pop(identifier, None)


# Global rate limiter instance
_rate_limiter: Optional[RateLimiter] = None


async def get_rate_limiter(settings: Optional[Settings] = None) -> RateLimiter:
    """
    Get or create the process-wide rate limiter.

    Args:
        settings: Application settings (uses get_settings() if not provided)

    Returns:
        Redis-backed limiter when reachable, otherwise in-memory
    """
    global _rate_limiter

    if _rate_limiter is not None:
        return _rate_limiter

    if settings is None:
        from businesshub.config.settings import get_settings
        settings = get_settings()

    if settings.redis_url:
        try:
            from businesshub.core.redis_rate_limit import RedisRateLimiter

            redis_limiter = RedisRateLimiter(
                redis_url=settings.redis_url,
                key_prefix="businesshub:ratelimit",
            )
            await redis_limiter.connect()
            _rate_limiter = redis_limiter
            logger.info("rate_limiter_initialized", backend="redis")
            return _rate_limiter
        except Exception as e:
            logger.warning(
                "redis_rate_limiter_failed_fallback_to_memory",
                error=str(e),
            )

    _rate_limiter = InMemoryRateLimiter()
    logger.info("rate_limiter_initialized", backend="in_memory")
    return _rate_limiter


async def close_rate_limiter() -> None:
    """Disconnect the Redis backend (if any) and drop the global instance."""
    global _rate_limiter

    disconnect = getattr(_rate_limiter, "disconnect", None)
    if disconnect is not None:
        await disconnect()
    _rate_limiter = None


async def reset_rate_limiter() -> None:
    """Drop the global rate limiter without closing it (for testing)."""
    global _rate_limiter
    _rate_limiter = None
