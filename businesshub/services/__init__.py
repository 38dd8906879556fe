"""
Domain services.

Plain functions that take a SQLAlchemy Session, enforce the directory's
rules and raise businesshub.core.exceptions errors. The API routes are thin
wrappers around them; scripts call them directly.
"""

from businesshub.services.bulk import BulkResult

__all__ = ["BulkResult"]
