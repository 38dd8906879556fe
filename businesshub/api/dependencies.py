"""FastAPI dependency injection providers.

Authentication dependencies resolve the bearer token to a User row:

- get_current_user: any logged-in, non-suspended account (401/403 otherwise)
- get_optional_user: same, but anonymous callers get None
- require_admin: admin accounts only

Tokens are verified with the app's own Settings (``Depends(get_settings)``
is overridden by ``create_app``), so an app built with custom settings
accepts the tokens it issues.
"""

from typing import Optional

import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from businesshub.config.settings import Settings, get_settings
from businesshub.core.exceptions import AuthenticationError, PermissionDeniedError
from businesshub.core.security import verify_token
from businesshub.db.database import get_db
from businesshub.models import User

logger = structlog.get_logger(__name__)

# auto_error=False so missing credentials surface as our 401 ErrorResponse
bearer_scheme = HTTPBearer(auto_error=False)


def _resolve_user(db: Session, token: str, settings: Settings) -> User:
    payload = verify_token(token, settings=settings)

    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid token payload")

    user = db.get(User, user_id)
    if user is None:
        raise AuthenticationError("User not found")
    return user


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    """
    Get the authenticated user.

    Raises:
        AuthenticationError: No or invalid bearer token
        PermissionDeniedError: The account is suspended
    """
    if credentials is None:
        raise AuthenticationError("Authentication required")

    user = _resolve_user(db, credentials.credentials, settings)
    if user.is_suspended:
        logger.warning("suspended_user_request", user_id=user.id)
        raise PermissionDeniedError("Account is suspended")
    return user


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Optional[User]:
    """Authenticated user if a valid token was sent, otherwise None."""
    if credentials is None:
        return None
    try:
        user = _resolve_user(db, credentials.credentials, settings)
    except AuthenticationError:
        return None
    return None if user.is_suspended else user


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Only let admin accounts through."""
    if not user.is_admin:
        raise PermissionDeniedError("Admin access required")
    return user
