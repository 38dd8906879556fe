"""
Reviews and moderation.

Every approve, reject or delete recalculates the business's
average_rating and total_reviews from its approved reviews.
"""

from typing import Optional

import structlog
from sqlalchemy import func
from sqlalchemy.orm import Session

from businesshub.core.exceptions import NotFoundError, ValidationFailedError
from businesshub.core.text import is_valid_email, sanitize_text
from businesshub.db.database import utcnow
from businesshub.models import Business, ModerationStatus, Review, User
from businesshub.services.bulk import BulkResult
from businesshub.services.businesses import get_business

logger = structlog.get_logger(__name__)

MAX_TITLE_LENGTH = 255
MAX_CONTENT_LENGTH = 2000
MAX_MASS_ACTION = 50
REVIEW_ACTIONS = ("approve", "reject", "delete")


def recalculate_rating(db: Session, business: Business) -> None:
    """Set average_rating (2 decimals, 0 when none) and total_reviews from approved reviews."""
    average, total = (
        db.query(func.avg(Review.rating), func.count(Review.id))
        .filter(
            Review.business_id == business.placeid,
            Review.status == ModerationStatus.APPROVED.value,
        )
        .one()
    )
    business.average_rating = round(float(average), 2) if total else 0.0
    business.total_reviews = total


def get_review(db: Session, review_id: int) -> Review:
    review = db.get(Review, review_id)
    if review is None:
        raise NotFoundError("Review", review_id)
    return review


def list_approved(db: Session, business_id: str) -> list[Review]:
    get_business(db, business_id)
    return (
        db.query(Review)
        .filter(
            Review.business_id == business_id,
            Review.status == ModerationStatus.APPROVED.value,
        )
        .order_by(Review.created_at.desc())
        .all()
    )


def create_review(
    db: Session,
    business_id: str,
    rating: int,
    content: str,
    title: Optional[str] = None,
    author_name: Optional[str] = None,
    author_email: Optional[str] = None,
    user: Optional[User] = None,
) -> Review:
    """
    Submit a review; it stays pending until an admin approves it.

    Anonymous reviews must carry author_name and a valid author_email. A
    logged-in user's name and email fill in when not given.
    """
    business = get_business(db, business_id)

    if not isinstance(rating, int) or isinstance(rating, bool) or not 1 <= rating <= 5:
        raise ValidationFailedError("Rating must be an integer between 1 and 5")

    content = sanitize_text(content) or ""
    title = sanitize_text(title) or None
    if not content:
        raise ValidationFailedError("Review content is required")
    if len(content) > MAX_CONTENT_LENGTH:
        raise ValidationFailedError(f"Review content must be at most {MAX_CONTENT_LENGTH} characters")
    if title and len(title) > MAX_TITLE_LENGTH:
        raise ValidationFailedError(f"Review title must be at most {MAX_TITLE_LENGTH} characters")

    author_name = sanitize_text(author_name) or (user.full_name if user else None)
    author_email = (author_email or (user.email if user else "") or "").strip().lower()
    if user is None:
        if not author_name:
            raise ValidationFailedError("Author name is required")
        if not is_valid_email(author_email):
            raise ValidationFailedError("A valid author email is required")

    review = Review(
        business_id=business.placeid,
        user_id=user.id if user else None,
        author_name=author_name,
        author_email=author_email or None,
        rating=rating,
        title=title,
        content=content,
        status=ModerationStatus.PENDING.value,
    )
    db.add(review)
    db.commit()
    db.refresh(review)

    logger.info("review_submitted", review_id=review.id, business_id=business.placeid, rating=rating)
    return review


def list_reviews(db: Session, status: Optional[str] = None, business_id: Optional[str] = None) -> list[Review]:
    query = db.query(Review)
    if status:
        query = query.filter(Review.status == status)
    if business_id:
        query = query.filter(Review.business_id == business_id)
    return query.order_by(Review.created_at.desc()).all()


def _apply_decision(review: Review, status: str, admin: User, notes: Optional[str]) -> None:
    review.status = status
    review.reviewed_by = admin.id
    review.reviewed_at = utcnow()
    if notes is not None:
        review.admin_notes = notes


def moderate_review(
    db: Session,
    review_id: int,
    status: str,
    admin: User,
    notes: Optional[str] = None,
) -> Review:
    if status not in (ModerationStatus.APPROVED.value, ModerationStatus.REJECTED.value):
        raise ValidationFailedError("Status must be 'approved' or 'rejected'")

    review = get_review(db, review_id)
    _apply_decision(review, status, admin, notes)
    db.flush()
    recalculate_rating(db, review.business)
    db.commit()
    db.refresh(review)

    logger.info("review_moderated", review_id=review_id, status=status, by=admin.id)
    return review


def delete_review(db: Session, review_id: int) -> None:
    review = get_review(db, review_id)
    business = review.business
    db.delete(review)
    db.flush()
    recalculate_rating(db, business)
    db.commit()
    logger.info("review_deleted", review_id=review_id)


def mass_action(db: Session, review_ids: list[int], action: str, admin: User) -> BulkResult:
    """Approve, reject or delete up to MAX_MASS_ACTION reviews in one call."""
    if action not in REVIEW_ACTIONS:
        raise ValidationFailedError(f"Invalid action '{action}'", {"allowed": list(REVIEW_ACTIONS)})
    if not review_ids:
        raise ValidationFailedError("review_ids must be a non-empty list")
    if len(review_ids) > MAX_MASS_ACTION:
        raise ValidationFailedError(f"Cannot process more than {MAX_MASS_ACTION} reviews at once")
    if any(not isinstance(i, int) or isinstance(i, bool) or i <= 0 for i in review_ids):
        raise ValidationFailedError("Review IDs must be positive integers")

    result = BulkResult()
    touched: dict[str, Business] = {}
    for review_id in review_ids:
        review = db.get(Review, review_id)
        if review is None:
            result.add_failure(review_id, "Review not found")
            continue
        touched[review.business_id] = review.business
        if action == "delete":
            db.delete(review)
        else:
            status = ModerationStatus.APPROVED.value if action == "approve" else ModerationStatus.REJECTED.value
            _apply_decision(review, status, admin, None)
        result.add_success()

    db.flush()
    for business in touched.values():
        recalculate_rating(db, business)
    db.commit()

    logger.info("reviews_mass_action", action=action, success=result.success, failed=result.failed)
    return result
