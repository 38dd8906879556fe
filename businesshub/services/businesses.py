"""
Business listings: public browsing, owner edits and admin moderation.

Public queries only ever return approved listings. Edits and deletes are
allowed for the listing's owner or an admin.
"""

import uuid
from typing import Any, Optional

import structlog
from sqlalchemy import func, or_, true
from sqlalchemy.orm import Query, Session

from businesshub.core.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationFailedError,
)
from businesshub.core.text import sanitize_text, slugify
from businesshub.models import (
    Business,
    BusinessStatus,
    Category,
    Lead,
    ModerationStatus,
    OwnershipClaim,
    Review,
    User,
    FeaturedRequest,
)
from businesshub.services.bulk import BulkResult

logger = structlog.get_logger(__name__)

MAX_BULK_DELETE = 100
MAX_SEARCH_RESULTS = 50
EDITABLE_FIELDS = (
    "title", "subtitle", "description", "address", "city", "state", "country",
    "phone", "email", "website", "hours", "latitude", "longitude", "images",
    "logo", "faqs", "meta_title", "meta_description", "category_id",
)
ADMIN_ONLY_FIELDS = ("featured", "verified", "status", "owner_id", "slug")
SANITIZED_FIELDS = ("title", "subtitle", "description", "address", "city", "state", "country")


def get_business(db: Session, placeid: str) -> Business:
    business = db.get(Business, placeid)
    if business is None:
        raise NotFoundError("Business", placeid)
    return business


def ensure_can_manage(business: Business, user: User) -> None:
    """Raise unless the user owns the business or is an admin."""
    if user.is_admin or business.owner_id == user.id:
        return
    raise PermissionDeniedError(
        "You do not have permission to manage this business",
        {"business_id": business.placeid},
    )


def unique_slug(db: Session, title: str, exclude_placeid: Optional[str] = None) -> str:
    """Slug from the title, suffixed -2, -3, ... until unused."""
    base = slugify(title) or "business"
    candidate = base
    suffix = 2
    while True:
        query = db.query(Business.placeid).filter(Business.slug == candidate)
        if exclude_placeid is not None:
            query = query.filter(Business.placeid != exclude_placeid)
        if query.first() is None:
            return candidate
        candidate = f"{base}-{suffix}"
        suffix += 1


# =============================================================================
# Public queries
# =============================================================================


def _approved(db: Session) -> Query:
    return db.query(Business).filter(Business.status == BusinessStatus.APPROVED.value)


def _apply_search(query: Query, search: str) -> Query:
    pattern = f"%{search.strip()}%"
    return query.outerjoin(Category, Business.category_id == Category.id).filter(
        or_(
            Business.title.ilike(pattern),
            Business.description.ilike(pattern),
            Category.name.ilike(pattern),
        )
    )


def list_businesses(
    db: Session,
    category_id: Optional[int] = None,
    category_slug: Optional[str] = None,
    search: Optional[str] = None,
    city: Optional[str] = None,
    featured: Optional[bool] = None,
    limit: int = 20,
    offset: int = 0,
) -> tuple[list[Business], int]:
    """Approved businesses matching every given filter, newest first, plus the total."""
    query = _approved(db)

    if category_id is not None:
        query = query.filter(Business.category_id == category_id)
    if category_slug:
        category = db.query(Category).filter(Category.slug == category_slug).first()
        if category is None:
            return [], 0
        query = query.filter(Business.category_id == category.id)
    if city:
        query = query.filter(func.lower(Business.city) == city.strip().lower())
    if featured is not None:
        query = query.filter(Business.featured == featured)
    if search:
        query = _apply_search(query, search)

    total = query.count()
    items = (
        query.order_by(Business.created_at.desc(), Business.placeid)
        .offset(offset)
        .limit(limit)
        .all()
    )
    return items, total


def get_featured(db: Session, limit: int = 6) -> list[Business]:
    return (
        _approved(db)
        .filter(Business.featured.is_(true()))
        .order_by(Business.average_rating.desc(), Business.created_at.desc())
        .limit(limit)
        .all()
    )


def get_random(db: Session, limit: int = 9) -> list[Business]:
    return _approved(db).order_by(func.random()).limit(limit).all()


def search_businesses(db: Session, q: Optional[str], location: Optional[str] = None) -> list[Business]:
    if not q or not q.strip():
        raise ValidationFailedError("Search query is required")

    query = _apply_search(_approved(db), q)
    if location:
        pattern = f"%{location.strip()}%"
        query = query.filter(
            or_(
                Business.city.ilike(pattern),
                Business.state.ilike(pattern),
                Business.address.ilike(pattern),
            )
        )
    return query.order_by(Business.average_rating.desc()).limit(MAX_SEARCH_RESULTS).all()


def get_by_slug(db: Session, slug: str) -> Business:
    business = _approved(db).filter(Business.slug == slug).first()
    if business is None:
        raise NotFoundError("Business", slug)
    return business


def list_by_category_slug(db: Session, slug: str) -> tuple[Category, list[Business]]:
    category = db.query(Category).filter(Category.slug == slug).first()
    if category is None:
        raise NotFoundError("Category", slug)
    businesses = (
        _approved(db)
        .filter(Business.category_id == category.id)
        .order_by(Business.featured.desc(), Business.average_rating.desc())
        .all()
    )
    return category, businesses


def list_user_businesses(db: Session, user_id: str) -> list[Business]:
    return (
        db.query(Business)
        .filter(Business.owner_id == user_id)
        .order_by(Business.created_at.desc())
        .all()
    )


# =============================================================================
# Create / update / delete
# =============================================================================


def _clean(data: dict[str, Any]) -> dict[str, Any]:
    cleaned = dict(data)
    for field in SANITIZED_FIELDS:
        if isinstance(cleaned.get(field), str):
            cleaned[field] = sanitize_text(cleaned[field])
    return cleaned


def _check_category(db: Session, category_id: Optional[int]) -> None:
    if category_id is not None and db.get(Category, category_id) is None:
        raise ValidationFailedError("Unknown category", {"category_id": category_id})


def create_business(
    db: Session,
    data: dict[str, Any],
    owner: Optional[User] = None,
    status: str = BusinessStatus.PENDING.value,
    submitted_by: Optional[str] = None,
) -> Business:
    """
    Create a listing. The slug is derived from the title and made unique;
    placeid is generated unless supplied.
    """
    data = _clean(data)
    if not data.get("title"):
        raise ValidationFailedError("Title is required")
    _check_category(db, data.get("category_id"))

    placeid = data.get("placeid") or f"bh_{uuid.uuid4().hex[:20]}"
    if db.get(Business, placeid) is not None:
        raise ValidationFailedError("A business with this placeid already exists", {"placeid": placeid})

    business = Business(
        placeid=placeid,
        slug=unique_slug(db, data["title"]),
        status=status,
        owner_id=owner.id if owner else data.get("owner_id"),
        submitted_by=submitted_by or (owner.id if owner else None),
        featured=bool(data.get("featured", False)),
        verified=bool(data.get("verified", False)),
        images=list(data.get("images") or []),
        faqs=list(data.get("faqs") or []),
    )
    for field in EDITABLE_FIELDS:
        if field in ("images", "faqs"):
            continue
        if data.get(field) is not None:
            setattr(business, field, data[field])

    db.add(business)
    db.commit()
    db.refresh(business)

    logger.info("business_created", placeid=business.placeid, status=status)
    return business


def update_business(db: Session, placeid: str, data: dict[str, Any], user: User) -> Business:
    business = get_business(db, placeid)
    ensure_can_manage(business, user)

    data = _clean(data)
    if "category_id" in data:
        _check_category(db, data["category_id"])

    status = data.get("status")
    if status is not None and status not in {s.value for s in BusinessStatus}:
        raise ValidationFailedError("Invalid status", {"status": status})

    slug = data.get("slug")
    if slug and user.is_admin and slug != business.slug:
        clash = db.query(Business).filter(Business.slug == slug, Business.placeid != placeid).first()
        if clash is not None:
            raise ConflictError("Slug already in use", {"slug": slug})

    allowed = EDITABLE_FIELDS + (ADMIN_ONLY_FIELDS if user.is_admin else ())
    for field in allowed:
        if field in data and data[field] is not None:
            setattr(business, field, data[field])

    if data.get("title") and "slug" not in data:
        business.slug = unique_slug(db, business.title, exclude_placeid=business.placeid)

    db.commit()
    db.refresh(business)
    logger.info("business_updated", placeid=placeid, by=user.id)
    return business


def delete_business(db: Session, placeid: str, user: User) -> None:
    business = get_business(db, placeid)
    ensure_can_manage(business, user)
    db.delete(business)
    db.commit()
    logger.info("business_deleted", placeid=placeid, by=user.id)


# =============================================================================
# Admin operations
# =============================================================================


def list_admin(
    db: Session,
    status: Optional[str] = None,
    search: Optional[str] = None,
    limit: int = 100,
    offset: int = 0,
) -> tuple[list[Business], int]:
    query = db.query(Business)
    if status:
        query = query.filter(Business.status == status)
    if search:
        query = _apply_search(query, search)
    total = query.count()
    items = query.order_by(Business.created_at.desc()).offset(offset).limit(limit).all()
    return items, total


def bulk_delete(db: Session, business_ids: list[str]) -> dict[str, Any]:
    """
    Delete exactly the requested businesses (and their dependent records).

    Returns:
        {message, deleted_count, total_requested, errors}
    """
    if not isinstance(business_ids, list) or not business_ids:
        raise ValidationFailedError("business_ids must be a non-empty array")
    if len(business_ids) > MAX_BULK_DELETE:
        raise ValidationFailedError(f"Cannot delete more than {MAX_BULK_DELETE} businesses at once")
    invalid = [i for i in business_ids if not isinstance(i, str) or not i.strip()]
    if invalid:
        raise ValidationFailedError("All business IDs must be non-empty strings")

    deleted = 0
    errors: list[str] = []
    for placeid in dict.fromkeys(business_ids):
        business = db.get(Business, placeid)
        if business is None:
            errors.append(f"Business {placeid} not found")
            continue
        db.delete(business)
        deleted += 1
    db.commit()

    total = len(business_ids)
    if not errors:
        message = f"Successfully deleted all {deleted} business(es)"
    elif deleted == 0:
        message = f"Failed to delete any businesses. {len(errors)} error(s) occurred"
    else:
        message = (
            f"Partially successful: {deleted} of {total} business(es) deleted. "
            f"{len(errors)} error(s) occurred"
        )

    logger.info("businesses_bulk_deleted", deleted=deleted, requested=total, errors=len(errors))
    return {
        "message": message,
        "deleted_count": deleted,
        "total_requested": total,
        "errors": errors,
    }


def mass_update_category(db: Session, business_ids: list[str], category_id: int) -> BulkResult:
    if not business_ids:
        raise ValidationFailedError("business_ids must be a non-empty list")
    if db.get(Category, category_id) is None:
        raise NotFoundError("Category", category_id)

    result = BulkResult()
    for placeid in business_ids:
        business = db.get(Business, placeid)
        if business is None:
            result.add_failure(placeid, "Business not found")
            continue
        business.category_id = category_id
        result.add_success()

    db.commit()
    logger.info("businesses_category_changed", category_id=category_id, updated=result.success)
    return result


def remove_photos(db: Session, placeid: str, photo_urls: list[str]) -> Business:
    """Remove the given URLs from the image list; unknown URLs are an error."""
    business = get_business(db, placeid)
    images = list(business.images or [])
    missing = [url for url in photo_urls if url not in images]
    if missing:
        raise NotFoundError("Photo", missing[0], {"missing": missing})

    business.images = [url for url in images if url not in set(photo_urls)]
    if business.logo in photo_urls:
        business.logo = None
    db.commit()
    db.refresh(business)

    logger.info("business_photos_removed", placeid=placeid, removed=len(photo_urls))
    return business


def replace_faqs(db: Session, placeid: str, faqs: list[dict[str, str]]) -> Business:
    business = get_business(db, placeid)
    for faq in faqs:
        if not faq.get("question") or not faq.get("answer"):
            raise ValidationFailedError("Each FAQ needs a question and an answer")
    business.faqs = [
        {"question": sanitize_text(f["question"]), "answer": sanitize_text(f["answer"])}
        for f in faqs
    ]
    db.commit()
    db.refresh(business)
    logger.info("business_faqs_replaced", placeid=placeid, count=len(faqs))
    return business


def set_featured(db: Session, placeid: str, featured: bool) -> Business:
    business = get_business(db, placeid)
    business.featured = featured
    db.commit()
    db.refresh(business)
    logger.info("business_featured_set", placeid=placeid, featured=featured)
    return business


def list_submissions(db: Session, status: str = BusinessStatus.PENDING.value) -> list[Business]:
    return (
        db.query(Business)
        .filter(Business.status == status)
        .order_by(Business.created_at.desc())
        .all()
    )


def review_submission(db: Session, placeid: str, status: str) -> Business:
    if status not in (BusinessStatus.APPROVED.value, BusinessStatus.REJECTED.value):
        raise ValidationFailedError("Status must be 'approved' or 'rejected'")
    business = get_business(db, placeid)
    business.status = status
    db.commit()
    db.refresh(business)
    logger.info("business_submission_reviewed", placeid=placeid, status=status)
    return business


def dashboard_stats(db: Session) -> dict[str, int]:
    """Counters for the admin dashboard."""
    def count(model, *criteria) -> int:
        return db.query(func.count()).select_from(model).filter(*criteria).scalar()

    return {
        "total_businesses": count(Business),
        "approved_businesses": count(Business, Business.status == BusinessStatus.APPROVED.value),
        "pending_businesses": count(Business, Business.status == BusinessStatus.PENDING.value),
        "featured_businesses": count(Business, Business.featured.is_(true())),
        "total_users": count(User),
        "total_categories": count(Category),
        "total_reviews": count(Review),
        "pending_reviews": count(Review, Review.status == ModerationStatus.PENDING.value),
        "total_leads": count(Lead),
        "pending_claims": count(OwnershipClaim, OwnershipClaim.status == ModerationStatus.PENDING.value),
        "pending_featured_requests": count(
            FeaturedRequest, FeaturedRequest.status == ModerationStatus.PENDING.value
        ),
    }
