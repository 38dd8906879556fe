"""Review submission and moderation endpoints."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from businesshub.api.dependencies import get_current_user, require_admin
from businesshub.api.models import (
    BulkResultResponse,
    ErrorResponse,
    PublicReviewCreate,
    ReviewMassActionRequest,
    ReviewModerationRequest,
    ReviewResponse,
    UserReviewCreate,
)
from businesshub.api.responses import bulk_response
from businesshub.db.database import get_db
from businesshub.models import ModerationStatus, Review, User
from businesshub.services import reviews as review_service

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Reviews"])


@router.get(
    "/businesses/{placeid}/reviews",
    response_model=list[ReviewResponse],
    summary="Approved reviews for a business",
    responses={404: {"model": ErrorResponse, "description": "Business not found"}},
)
def business_reviews(placeid: str, db: Session = Depends(get_db)) -> list[Review]:
    return review_service.list_approved(db, placeid)


@router.post(
    "/businesses/{placeid}/reviews",
    response_model=ReviewResponse,
    status_code=201,
    summary="Submit a public review",
    description="Anonymous review; held as pending until an admin approves it.",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid review"},
        404: {"model": ErrorResponse, "description": "Business not found"},
    },
)
def submit_public_review(
    placeid: str,
    payload: PublicReviewCreate,
    db: Session = Depends(get_db),
) -> Review:
    return review_service.create_review(
        db,
        business_id=placeid,
        rating=payload.rating,
        content=payload.content,
        title=payload.title,
        author_name=payload.author_name,
        author_email=payload.author_email,
    )


@router.post(
    "/reviews",
    response_model=ReviewResponse,
    status_code=201,
    summary="Submit a review as the logged-in user",
)
def submit_user_review(
    payload: UserReviewCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Review:
    return review_service.create_review(
        db,
        business_id=payload.business_id,
        rating=payload.rating,
        content=payload.content,
        title=payload.title,
        user=user,
    )


# =============================================================================
# Admin moderation
# =============================================================================


@router.get("/admin/reviews", response_model=list[ReviewResponse], summary="All reviews")
def admin_list_reviews(
    status: Optional[str] = Query(None, description="pending, approved or rejected"),
    business_id: Optional[str] = Query(None),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> list[Review]:
    return review_service.list_reviews(db, status=status, business_id=business_id)


@router.get("/admin/reviews/pending", response_model=list[ReviewResponse], summary="Reviews awaiting moderation")
def admin_pending_reviews(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> list[Review]:
    return review_service.list_reviews(db, status=ModerationStatus.PENDING.value)


@router.patch(
    "/admin/reviews/mass-action",
    response_model=BulkResultResponse,
    summary="Approve, reject or delete many reviews",
    responses={207: {"model": BulkResultResponse, "description": "Some reviews failed"}},
)
def admin_mass_action(
    payload: ReviewMassActionRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    result = review_service.mass_action(db, payload.review_ids, payload.action, admin)
    return bulk_response(result)


@router.patch(
    "/admin/reviews/{review_id}/approve",
    response_model=ReviewResponse,
    summary="Approve a review",
    responses={404: {"model": ErrorResponse, "description": "Review not found"}},
)
def approve_review(
    review_id: int,
    payload: Optional[ReviewModerationRequest] = None,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Review:
    notes = payload.admin_notes if payload else None
    return review_service.moderate_review(db, review_id, ModerationStatus.APPROVED.value, admin, notes)


@router.patch(
    "/admin/reviews/{review_id}/reject",
    response_model=ReviewResponse,
    summary="Reject a review",
    responses={404: {"model": ErrorResponse, "description": "Review not found"}},
)
def reject_review(
    review_id: int,
    payload: Optional[ReviewModerationRequest] = None,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Review:
    notes = payload.admin_notes if payload else None
    return review_service.moderate_review(db, review_id, ModerationStatus.REJECTED.value, admin, notes)


@router.delete("/admin/reviews/{review_id}", status_code=204, summary="Delete a review")
def delete_review(
    review_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Response:
    review_service.delete_review(db, review_id)
    return Response(status_code=204)
