"""Redis-backed sliding window rate limiter.

Each identifier owns a sorted set whose scores are request timestamps, so
every API worker pointed at the same Redis shares one budget per client.

Usage:
    limiter = RedisRateLimiter(redis_url="redis://localhost:6379/0")
    await limiter.connect()
    result = await limiter.is_allowed("api_requests:203.0.113.7", limit=100, window=60)
"""

import time
import uuid
from typing import Optional

import redis.asyncio as redis
import structlog

from businesshub.core.rate_limiter import RateLimitResult

logger = structlog.get_logger(__name__)


class RedisRateLimiter:
    """
    Sliding window limiter over Redis sorted sets.

    Args:
        redis_url: Redis connection URL
        key_prefix: Prefix for Redis keys
    """

    def __init__(
        self,
        redis_url: str,
        key_prefix: str = "businesshub:ratelimit",
    ):
        self._redis_url = redis_url
        self._key_prefix = key_prefix
        self._client: Optional[redis.Redis] = None
        self._connected = False

    async def connect(self) -> None:
        """Open the connection and verify it with PING."""
        if self._connected:
            return

        try:
            self._client = redis.from_url(
                self._redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            await self._client.ping()
            self._connected = True
            logger.info("redis_rate_limiter_connected")
        except Exception as e:
            logger.error("redis_rate_limiter_connection_failed", error=str(e))
            raise

    async def disconnect(self) -> None:
        """Close the Redis connection."""
        if self._client:
            await self._client.aclose()
            self._connected = False
            logger.info("redis_rate_limiter_disconnected")

    @property
    def is_connected(self) -> bool:
        return self._connected

    def _make_key(self, identifier: str) -> str:
        return f"{self._key_prefix}:{identifier}"

    def _require_connection(self) -> None:
        if not self._connected:
            raise RuntimeError("Rate limiter not connected. Call connect() first.")

    async def _window_state(self, key: str, now: float, window: int) -> tuple[int, float]:
        """Trim expired hits; return (hits in window, reset timestamp)."""
        pipe = self._client.pipeline()
        pipe.zremrangebyscore(key, 0, now - window)
        pipe.zcard(key)
        pipe.zrange(key, 0, 0, withscores=True)
        _, count, oldest = await pipe.execute()

        reset_at = (oldest[0][1] + window) if oldest else now + window
        return count, reset_at

    async def is_allowed(
        self,
        identifier: str,
        limit: int,
        window: int,
    ) -> RateLimitResult:
        """Consume one request from the identifier's budget if any is left."""
        self._require_connection()

        key = self._make_key(identifier)
        now = time.time()
        count, reset_at = await self._window_state(key, now, window)
        remaining = max(0, limit - count)

        if remaining == 0:
            return RateLimitResult(
                allowed=False,
                remaining=0,
                reset_at=reset_at,
                retry_after=max(0.0, reset_at - now),
            )

        pipe = self._client.pipeline()
        pipe.zadd(key, {f"{now}:{uuid.uuid4().hex[:8]}": now})
        pipe.expire(key, window + 60)
        await pipe.execute()

        return RateLimitResult(
            allowed=True,
            remaining=remaining - 1,
            reset_at=reset_at,
        )

    async def get_status(
        self,
        identifier: str,
        limit: int,
        window: int,
    ) -> RateLimitResult:
        """Inspect the budget without consuming a request."""
        self._require_connection()

        now = time.time()
        count, reset_at = await self._window_state(self._make_key(identifier), now, window)
        remaining = max(0, limit - count)

        return RateLimitResult(
            allowed=remaining > 0,
            remaining=remaining,
            reset_at=reset_at,
            retry_after=max(0.0, reset_at - now) if remaining == 0 else None,
        )

    async def reset(self, identifier: str) -> None:
        """Forget every request recorded for the identifier."""
        self._require_connection()
        await self._client.delete(self._make_key(identifier))
        logger.info("rate_limit_reset", identifier=identifier)
