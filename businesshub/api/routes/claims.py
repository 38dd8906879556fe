"""Ownership claim and featured-listing request endpoints."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from businesshub.api.dependencies import get_current_user, require_admin
from businesshub.api.models import (
    ClaimCreate,
    ClaimResponse,
    DecisionRequest,
    ErrorResponse,
    FeaturedRequestCreate,
    FeaturedRequestResponse,
)
from businesshub.core.exceptions import PermissionDeniedError
from businesshub.db.database import get_db
from businesshub.models import FeaturedRequest, OwnershipClaim, User
from businesshub.services import claims as claim_service

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Claims"])


# =============================================================================
# Ownership claims
# =============================================================================


@router.post(
    "/ownership-claims",
    response_model=ClaimResponse,
    status_code=201,
    summary="Claim a business",
    description="The message must explain the claim in at least 50 characters.",
    responses={
        400: {"model": ErrorResponse, "description": "Message too short"},
        404: {"model": ErrorResponse, "description": "Business not found"},
        409: {"model": ErrorResponse, "description": "Claim already pending or approved"},
    },
)
def submit_claim(
    payload: ClaimCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> OwnershipClaim:
    return claim_service.submit_claim(db, user, payload.business_id, payload.message)


@router.get("/my-ownership-claims", response_model=list[ClaimResponse], summary="My claims")
def my_claims(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[OwnershipClaim]:
    return claim_service.list_user_claims(db, user.id)


@router.get("/admin/ownership-claims", response_model=list[ClaimResponse], summary="All claims")
def admin_list_claims(
    status: Optional[str] = Query(None, description="pending, approved or rejected"),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> list[OwnershipClaim]:
    return claim_service.list_claims(db, status=status)


@router.patch(
    "/admin/ownership-claims/{claim_id}",
    response_model=ClaimResponse,
    summary="Approve or reject a claim",
    description="Approval transfers the business to the claimant.",
    responses={
        400: {"model": ErrorResponse, "description": "Rejection without a reason"},
        409: {"model": ErrorResponse, "description": "Claim already decided"},
    },
)
def review_claim(
    claim_id: int,
    payload: DecisionRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> OwnershipClaim:
    return claim_service.review_claim(db, claim_id, payload.status, admin, payload.admin_message)


@router.put(
    "/admin/ownership-claims/{claim_id}/revert",
    response_model=ClaimResponse,
    summary="Revert a claim",
    description="Marks the claim rejected and removes any ownership it granted.",
)
def revert_claim(
    claim_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> OwnershipClaim:
    return claim_service.revert_claim(db, claim_id, admin)


@router.delete("/admin/ownership-claims/{claim_id}", status_code=204, summary="Delete a claim")
def delete_claim(
    claim_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Response:
    claim_service.delete_claim(db, claim_id)
    return Response(status_code=204)


# =============================================================================
# Featured requests
# =============================================================================


@router.post(
    "/featured-requests",
    response_model=FeaturedRequestResponse,
    status_code=201,
    summary="Ask for a featured listing",
    responses={
        400: {"model": ErrorResponse, "description": "Already featured"},
        403: {"model": ErrorResponse, "description": "Not the owner"},
        409: {"model": ErrorResponse, "description": "Request already pending"},
    },
)
def request_featured(
    payload: FeaturedRequestCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> FeaturedRequest:
    return claim_service.request_featured(db, user, payload.business_id, payload.message)


@router.get(
    "/featured-requests/user/{user_id}",
    response_model=list[FeaturedRequestResponse],
    summary="Featured requests by user",
    responses={403: {"model": ErrorResponse, "description": "Not your requests"}},
)
def user_featured_requests(
    user_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[FeaturedRequest]:
    if user.id != user_id and not user.is_admin:
        raise PermissionDeniedError("You can only view your own featured requests")
    return claim_service.list_user_featured_requests(db, user_id)


@router.get("/admin/featured-requests", response_model=list[FeaturedRequestResponse], summary="All featured requests")
def admin_list_featured_requests(
    status: Optional[str] = Query(None),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> list[FeaturedRequest]:
    return claim_service.list_featured_requests(db, status=status)


@router.patch(
    "/admin/featured-requests/{request_id}",
    response_model=FeaturedRequestResponse,
    summary="Approve or reject a featured request",
    responses={409: {"model": ErrorResponse, "description": "Request already decided"}},
)
def review_featured_request(
    request_id: int,
    payload: DecisionRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> FeaturedRequest:
    return claim_service.review_featured_request(db, request_id, payload.status, admin, payload.admin_message)
