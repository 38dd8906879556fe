"""Rate limiting middleware for FastAPI.

Throttles API requests per client IP using the configured rate limiter
(Redis-backed or in-memory fallback).

Usage:
    from businesshub.api.middleware import RateLimitMiddleware

    app.add_middleware(RateLimitMiddleware, settings=settings)

Health and documentation endpoints are never throttled.
"""

import structlog
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from businesshub.config.settings import Settings
from businesshub.core.rate_limiter import RateLimitResult, get_rate_limiter

logger = structlog.get_logger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Apply a per-client sliding window to every non-excluded request.

    Returns 429 with Retry-After when the budget is spent and adds
    X-RateLimit-* headers to every throttled-path response. If the limiter
    itself fails the request is let through.
    """

    EXCLUDED_PATHS = {
        "/",
        "/health",
        "/health/live",
        "/health/ready",
        "/docs",
        "/redoc",
        "/openapi.json",
    }

    def __init__(self, app: ASGIApp, settings: Settings):
        super().__init__(app)
        self.settings = settings
        self.limit = settings.rate_limit_requests
        self.window = settings.rate_limit_window_seconds
        self.trust_forwarded_for = settings.rate_limit_trust_forwarded_for

    def _get_client_identifier(self, request: Request) -> str:
        """Peer address, or the first X-Forwarded-For hop when the proxy is trusted."""
        forwarded = request.headers.get("X-Forwarded-For") if self.trust_forwarded_for else None
        if forwarded:
            client_ip = forwarded.split(",")[0].strip()
        else:
            client_ip = request.client.host if request.client else "unknown"

        return f"api_requests:{client_ip}"

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.EXCLUDED_PATHS or request.method == "OPTIONS":
            return await call_next(request)

        identifier = self._get_client_identifier(request)

        try:
            limiter = await get_rate_limiter(self.settings)
            result: RateLimitResult = await limiter.is_allowed(
                identifier=identifier,
                limit=self.limit,
                window=self.window,
            )
        except Exception as e:
            logger.error(
                "rate_limit_check_failed",
                error=str(e),
                client=identifier,
                message="Allowing request due to rate limit error",
            )
            return await call_next(request)

        if not result.allowed:
            logger.warning(
                "rate_limit_exceeded",
                client=identifier,
                path=request.url.path,
                retry_after=result.retry_after,
            )
            retry_after = result.retry_after if result.retry_after is not None else self.window
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={
                    "error": "rate_limit_exceeded",
                    "message": "Too many requests. Please slow down.",
                    "retry_after": round(retry_after, 1),
                },
                headers={
                    "Retry-After": str(max(1, int(retry_after))),
                    **result.headers(self.limit),
                },
            )

        response = await call_next(request)
        response.headers.update(result.headers(self.limit))
        return response
