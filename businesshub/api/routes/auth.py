"""Authentication endpoints: register, login, logout and the caller's own profile."""

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from businesshub.api.dependencies import get_current_user
from businesshub.api.models import (
    AuthResponse,
    ChangePasswordRequest,
    ErrorResponse,
    LoginRequest,
    MessageResponse,
    ProfileUpdate,
    RegisterRequest,
    UserResponse,
)
from businesshub.config.settings import Settings, get_settings
from businesshub.core.security import create_access_token
from businesshub.db.database import get_db
from businesshub.models import User
from businesshub.services import users as user_service

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def _auth_response(user: User, settings: Settings) -> AuthResponse:
    token = create_access_token({"sub": user.id, "role": user.role}, settings=settings)
    return AuthResponse(user=UserResponse.model_validate(user), access_token=token)


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=201,
    summary="Create an account",
    responses={400: {"model": ErrorResponse, "description": "Invalid data or email already registered"}},
)
def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    """Register and receive an access token straight away."""
    user = user_service.register_user(
        db,
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
        admin_emails=settings.admin_emails,
    )
    return _auth_response(user, settings)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log in",
    responses={
        401: {"model": ErrorResponse, "description": "Invalid email or password"},
        403: {"model": ErrorResponse, "description": "Account suspended"},
    },
)
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    user = user_service.authenticate(db, payload.email, payload.password)
    return _auth_response(user, settings)


@router.post("/logout", response_model=MessageResponse, summary="Log out")
def logout() -> MessageResponse:
    """Tokens are stateless; the client discards its token."""
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/user",
    response_model=UserResponse,
    summary="Current user",
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
def current_user(user: User = Depends(get_current_user)) -> User:
    return user


@router.patch("/user", response_model=UserResponse, summary="Update own profile")
def update_current_user(
    payload: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> User:
    return user_service.update_profile(db, user, payload.model_dump(exclude_unset=True))


@router.patch("/change-password", response_model=MessageResponse, summary="Change own password")
def change_password(
    payload: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    user_service.change_password(db, user, payload.current_password, payload.new_password)
    return MessageResponse(message="Password updated successfully")
