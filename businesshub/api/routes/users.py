"""Admin user management endpoints."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from businesshub.api.dependencies import require_admin
from businesshub.api.models import (
    AdminUserCreate,
    AdminUserUpdate,
    AssignBusinessesRequest,
    BulkResultResponse,
    ErrorResponse,
    MessageResponse,
    PasswordResetRequest,
    UserMassActionRequest,
    UserResponse,
)
from businesshub.api.responses import bulk_response
from businesshub.db.database import get_db
from businesshub.models import User
from businesshub.services import users as user_service

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/admin/users", tags=["Admin Users"])


@router.get("", response_model=list[UserResponse], summary="List users")
def list_users(
    role: Optional[str] = Query(None, description="admin, user, business_owner or suspended"),
    search: Optional[str] = Query(None, description="Matches email or name"),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> list[User]:
    return user_service.list_users(db, role=role, search=search)


@router.post(
    "",
    response_model=UserResponse,
    status_code=201,
    summary="Create a user",
    responses={400: {"model": ErrorResponse, "description": "Invalid data or email taken"}},
)
def create_user(
    payload: AdminUserCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> User:
    return user_service.create_user(
        db,
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
        role=payload.role,
    )


@router.patch(
    "/mass-action",
    response_model=BulkResultResponse,
    summary="Suspend, activate or delete many users",
    responses={
        207: {"model": BulkResultResponse, "description": "Some users failed"},
        400: {"model": ErrorResponse, "description": "Would remove every admin"},
    },
)
def mass_action(
    payload: UserMassActionRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return bulk_response(user_service.mass_action(db, payload.user_ids, payload.action, admin.id))


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="User by ID",
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
def get_user(
    user_id: str,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> User:
    return user_service.get_user(db, user_id)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update a user",
    responses={
        400: {"model": ErrorResponse, "description": "Would demote the last admin"},
        409: {"model": ErrorResponse, "description": "Email already in use"},
    },
)
def update_user(
    user_id: str,
    payload: AdminUserUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> User:
    return user_service.update_user(db, user_id, payload.model_dump(exclude_unset=True))


@router.delete(
    "/{user_id}",
    status_code=204,
    summary="Delete a user",
    responses={400: {"model": ErrorResponse, "description": "Last admin"}},
)
def delete_user(
    user_id: str,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Response:
    user_service.delete_user(db, user_id)
    return Response(status_code=204)


@router.patch("/{user_id}/password", response_model=MessageResponse, summary="Reset a user's password")
def reset_password(
    user_id: str,
    payload: PasswordResetRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> MessageResponse:
    user_service.reset_password(db, user_id, payload.new_password)
    return MessageResponse(message="Password reset successfully")


@router.patch(
    "/{user_id}/assign-businesses",
    response_model=BulkResultResponse,
    summary="Hand businesses to a user",
    responses={207: {"model": BulkResultResponse, "description": "Some businesses failed"}},
)
def assign_businesses(
    user_id: str,
    payload: AssignBusinessesRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return bulk_response(user_service.assign_businesses(db, user_id, payload.business_ids))
