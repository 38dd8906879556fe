"""
Ownership claims and featured-listing requests.

Both follow pending -> approved | rejected. Approving a claim hands the
business to the claimant; approving a featured request flags the business
as featured. Decisions are final unless an admin reverts a claim.
"""

from typing import Optional

import structlog
from sqlalchemy.orm import Session

from businesshub.core.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationFailedError,
)
from businesshub.core.text import sanitize_text
from businesshub.db.database import utcnow
from businesshub.models import FeaturedRequest, ModerationStatus, OwnershipClaim, User, UserRole
from businesshub.services.businesses import get_business

logger = structlog.get_logger(__name__)

MIN_CLAIM_MESSAGE = 50
MIN_REJECTION_MESSAGE = 10
DECISIONS = (ModerationStatus.APPROVED.value, ModerationStatus.REJECTED.value)


def _check_decision(status: str) -> None:
    if status not in DECISIONS:
        raise ValidationFailedError("Status must be 'approved' or 'rejected'")


# =============================================================================
# Ownership claims
# =============================================================================


def submit_claim(db: Session, user: User, business_id: str, message: str) -> OwnershipClaim:
    """
    Raises:
        ValidationFailedError: Message shorter than MIN_CLAIM_MESSAGE characters
        NotFoundError: Unknown business
        ConflictError: The user already has a pending or approved claim for it
    """
    message = sanitize_text(message) or ""
    if len(message) < MIN_CLAIM_MESSAGE:
        raise ValidationFailedError(
            f"Claim message must be at least {MIN_CLAIM_MESSAGE} characters long"
        )

    business = get_business(db, business_id)
    if business.owner_id == user.id:
        raise ConflictError("You already own this business")

    existing = (
        db.query(OwnershipClaim)
        .filter(
            OwnershipClaim.business_id == business.placeid,
            OwnershipClaim.user_id == user.id,
            OwnershipClaim.status.in_(
                [ModerationStatus.PENDING.value, ModerationStatus.APPROVED.value]
            ),
        )
        .first()
    )
    if existing is not None:
        raise ConflictError(
            f"You already have a {existing.status} claim for this business",
            {"claim_id": existing.id},
        )

    claim = OwnershipClaim(
        business_id=business.placeid,
        user_id=user.id,
        message=message,
        status=ModerationStatus.PENDING.value,
    )
    db.add(claim)
    db.commit()
    db.refresh(claim)

    logger.info("ownership_claim_submitted", claim_id=claim.id, business_id=business.placeid, user_id=user.id)
    return claim


def get_claim(db: Session, claim_id: int) -> OwnershipClaim:
    claim = db.get(OwnershipClaim, claim_id)
    if claim is None:
        raise NotFoundError("Ownership claim", claim_id)
    return claim


def list_user_claims(db: Session, user_id: str) -> list[OwnershipClaim]:
    return (
        db.query(OwnershipClaim)
        .filter(OwnershipClaim.user_id == user_id)
        .order_by(OwnershipClaim.created_at.desc())
        .all()
    )


def list_claims(db: Session, status: Optional[str] = None) -> list[OwnershipClaim]:
    query = db.query(OwnershipClaim)
    if status:
        query = query.filter(OwnershipClaim.status == status)
    return query.order_by(OwnershipClaim.created_at.desc()).all()


def review_claim(
    db: Session,
    claim_id: int,
    status: str,
    admin: User,
    admin_message: Optional[str] = None,
) -> OwnershipClaim:
    """
    Approve or reject a pending claim.

    Approval transfers ownership (promoting a plain user to business_owner)
    and rejects competing pending claims, all in one commit. Rejection
    requires an admin_message of at least MIN_REJECTION_MESSAGE characters.
    """
    _check_decision(status)
    claim = get_claim(db, claim_id)
    if claim.status != ModerationStatus.PENDING.value:
        raise ConflictError(f"Claim has already been {claim.status}", {"claim_id": claim_id})

    admin_message = sanitize_text(admin_message) or None
    if status == ModerationStatus.REJECTED.value and len(admin_message or "") < MIN_REJECTION_MESSAGE:
        raise ValidationFailedError(
            f"A rejection message of at least {MIN_REJECTION_MESSAGE} characters is required"
        )

    claim.status = status
    claim.admin_message = admin_message
    claim.reviewed_by = admin.id
    claim.reviewed_at = utcnow()

    if status == ModerationStatus.APPROVED.value:
        business = claim.business
        business.owner_id = claim.user_id
        if claim.user.role == UserRole.USER.value:
            claim.user.role = UserRole.BUSINESS_OWNER.value

        competing = (
            db.query(OwnershipClaim)
            .filter(
                OwnershipClaim.business_id == business.placeid,
                OwnershipClaim.id != claim.id,
                OwnershipClaim.status == ModerationStatus.PENDING.value,
            )
            .all()
        )
        for other in competing:
            other.status = ModerationStatus.REJECTED.value
            other.admin_message = "Another ownership claim for this business was approved"
            other.reviewed_by = admin.id
            other.reviewed_at = utcnow()

    db.commit()
    db.refresh(claim)

    logger.info("ownership_claim_reviewed", claim_id=claim_id, status=status, by=admin.id)
    return claim


def revert_claim(db: Session, claim_id: int, admin: User) -> OwnershipClaim:
    """Mark a claim rejected, removing ownership if it had been transferred."""
    claim = get_claim(db, claim_id)
    if claim.status == ModerationStatus.APPROVED.value and claim.business.owner_id == claim.user_id:
        claim.business.owner_id = None

    claim.status = ModerationStatus.REJECTED.value
    claim.reviewed_by = admin.id
    claim.reviewed_at = utcnow()
    db.commit()
    db.refresh(claim)

    logger.info("ownership_claim_reverted", claim_id=claim_id, by=admin.id)
    return claim


def delete_claim(db: Session, claim_id: int) -> None:
    claim = get_claim(db, claim_id)
    db.delete(claim)
    db.commit()
    logger.info("ownership_claim_deleted", claim_id=claim_id)


# =============================================================================
# Featured requests
# =============================================================================


def request_featured(
    db: Session,
    user: User,
    business_id: str,
    message: Optional[str] = None,
) -> FeaturedRequest:
    """
    Raises:
        PermissionDeniedError: Caller does not own the business
        ValidationFailedError: Business is already featured
        ConflictError: A pending request already exists
    """
    business = get_business(db, business_id)
    if business.owner_id != user.id:
        raise PermissionDeniedError("Only the business owner can request a featured listing")
    if business.featured:
        raise ValidationFailedError("Business is already featured")

    pending = (
        db.query(FeaturedRequest)
        .filter(
            FeaturedRequest.business_id == business.placeid,
            FeaturedRequest.user_id == user.id,
            FeaturedRequest.status == ModerationStatus.PENDING.value,
        )
        .first()
    )
    if pending is not None:
        raise ConflictError("A featured request for this business is already pending", {"request_id": pending.id})

    request = FeaturedRequest(
        business_id=business.placeid,
        user_id=user.id,
        message=sanitize_text(message) or None,
        status=ModerationStatus.PENDING.value,
    )
    db.add(request)
    db.commit()
    db.refresh(request)

    logger.info("featured_request_submitted", request_id=request.id, business_id=business.placeid)
    return request


def get_featured_request(db: Session, request_id: int) -> FeaturedRequest:
    request = db.get(FeaturedRequest, request_id)
    if request is None:
        raise NotFoundError("Featured request", request_id)
    return request


def list_user_featured_requests(db: Session, user_id: str) -> list[FeaturedRequest]:
    return (
        db.query(FeaturedRequest)
        .filter(FeaturedRequest.user_id == user_id)
        .order_by(FeaturedRequest.created_at.desc())
        .all()
    )


def list_featured_requests(db: Session, status: Optional[str] = None) -> list[FeaturedRequest]:
    query = db.query(FeaturedRequest)
    if status:
        query = query.filter(FeaturedRequest.status == status)
    return query.order_by(FeaturedRequest.created_at.desc()).all()


def review_featured_request(
    db: Session,
    request_id: int,
    status: str,
    admin: User,
    admin_message: Optional[str] = None,
) -> FeaturedRequest:
    _check_decision(status)
    request = get_featured_request(db, request_id)
    if request.status != ModerationStatus.PENDING.value:
        raise ConflictError(f"Request has already been {request.status}", {"request_id": request_id})

    request.status = status
    request.admin_message = sanitize_text(admin_message) or None
    request.reviewed_by = admin.id
    request.reviewed_at = utcnow()
    if status == ModerationStatus.APPROVED.value:
        request.business.featured = True

    db.commit()
    db.refresh(request)

    logger.info("featured_request_reviewed", request_id=request_id, status=status, by=admin.id)
    return request
