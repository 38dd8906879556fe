"""
Core exception hierarchy for BusinessHub.

Services raise these instead of HTTP errors. Each class carries the HTTP
status the API layer renders it with, so a single exception handler maps
the whole hierarchy to an ErrorResponse.
"""

from typing import Any, Optional


# =============================================================================
# Base Exceptions
# =============================================================================


class BusinessHubError(Exception):
    """Base exception for all BusinessHub errors."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Request Errors
# =============================================================================


class ValidationFailedError(BusinessHubError):
    """Input failed a business rule (bad rating, short claim message, ...)."""

    status_code = 400
    error_code = "validation_error"


class AuthenticationError(BusinessHubError):
    """Missing, invalid or expired credentials."""

    status_code = 401
    error_code = "authentication_required"


class PermissionDeniedError(BusinessHubError):
    """Authenticated user is not allowed to perform the action."""

    status_code = 403
    error_code = "permission_denied"


class NotFoundError(BusinessHubError):
    """Requested resource does not exist."""

    status_code = 404
    error_code = "not_found"

    def __init__(self, resource: str, identifier: Any, details: Optional[dict[str, Any]] = None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found", {"id": identifier, **(details or {})})


class ConflictError(BusinessHubError):
    """Duplicate resource or a state transition that already happened."""

    status_code = 409
    error_code = "conflict"


# =============================================================================
# Infrastructure Errors
# =============================================================================


class ConfigurationError(BusinessHubError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, config_key: str, message: str):
        self.config_key = config_key
        super().__init__(f"Configuration error for '{config_key}': {message}")


class DatabaseUnavailableError(BusinessHubError):
    """Database could not be reached after retrying."""

    status_code = 503
    error_code = "database_unavailable"
