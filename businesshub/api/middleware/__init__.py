"""Middleware package for BusinessHub API."""

from businesshub.api.middleware.rate_limit import RateLimitMiddleware

__all__ = ["RateLimitMiddleware"]
