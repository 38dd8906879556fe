"""
Core infrastructure modules for BusinessHub.

- exceptions: Domain exception hierarchy mapped to HTTP statuses
- security: Password hashing and JWT access tokens
- rate_limiter: Sliding window request throttling (Redis or in-memory)
- text: Slug, sanitizing and format helpers
"""

from businesshub.core.exceptions import (
    BusinessHubError,
    ValidationFailedError,
    AuthenticationError,
    PermissionDeniedError,
    NotFoundError,
    ConflictError,
    ConfigurationError,
    DatabaseUnavailableError,
)

__all__ = [
    "BusinessHubError",
    "ValidationFailedError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "ConflictError",
    "ConfigurationError",
    "DatabaseUnavailableError",
]
