"""CMS pages: drafts, publishing and public lookup by slug."""

from typing import Any, Optional

import structlog
from sqlalchemy.orm import Session

from businesshub.core.exceptions import ConflictError, NotFoundError, ValidationFailedError
from businesshub.core.text import is_valid_slug, slugify
from businesshub.db.database import utcnow
from businesshub.models import Page, PageStatus, User

logger = structlog.get_logger(__name__)

PAGE_FIELDS = ("title", "slug", "content", "seo_title", "seo_description", "status")
PAGE_STATUSES = tuple(s.value for s in PageStatus)


def _validate(db: Session, data: dict[str, Any], exclude_id: Optional[int] = None) -> None:
    if "title" in data and not (data["title"] or "").strip():
        raise ValidationFailedError("Page title is required")
    if "slug" in data:
        if not is_valid_slug(data["slug"] or ""):
            raise ValidationFailedError("Slug may only contain lowercase letters, numbers and dashes")
        query = db.query(Page).filter(Page.slug == data["slug"])
        if exclude_id is not None:
            query = query.filter(Page.id != exclude_id)
        if query.first() is not None:
            raise ConflictError("A page with this slug already exists", {"slug": data["slug"]})
    if "status" in data and data["status"] not in PAGE_STATUSES:
        raise ValidationFailedError(f"Invalid page status '{data['status']}'")


def get_page(db: Session, page_id: int) -> Page:
    page = db.get(Page, page_id)
    if page is None:
        raise NotFoundError("Page", page_id)
    return page


def get_published_page(db: Session, slug: str) -> Page:
    page = (
        db.query(Page)
        .filter(Page.slug == slug, Page.status == PageStatus.PUBLISHED.value)
        .first()
    )
    if page is None:
        raise NotFoundError("Page", slug)
    return page


def list_pages(db: Session, status: Optional[str] = None) -> list[Page]:
    query = db.query(Page)
    if status:
        query = query.filter(Page.status == status)
    return query.order_by(Page.updated_at.desc()).all()


def create_page(db: Session, data: dict[str, Any], author: Optional[User] = None) -> Page:
    data = {k: v for k, v in data.items() if v is not None}
    if not data.get("title"):
        raise ValidationFailedError("Page title is required")
    data.setdefault("slug", slugify(data["title"]))
    data.setdefault("status", PageStatus.DRAFT.value)
    _validate(db, data)

    page = Page(author_id=author.id if author else None)
    for field in PAGE_FIELDS:
        if field in data:
            setattr(page, field, data[field])
    if page.status == PageStatus.PUBLISHED.value:
        page.published_at = utcnow()

    db.add(page)
    db.commit()
    db.refresh(page)
    logger.info("page_created", page_id=page.id, slug=page.slug)
    return page


def update_page(db: Session, page_id: int, data: dict[str, Any]) -> Page:
    page = get_page(db, page_id)
    data = {k: v for k, v in data.items() if v is not None}
    _validate(db, data, exclude_id=page.id)

    was_published = page.status == PageStatus.PUBLISHED.value
    for field in PAGE_FIELDS:
        if field in data:
            setattr(page, field, data[field])
    if page.status == PageStatus.PUBLISHED.value and not was_published:
        page.published_at = utcnow()

    db.commit()
    db.refresh(page)
    logger.info("page_updated", page_id=page_id)
    return page


def delete_page(db: Session, page_id: int) -> None:
    page = get_page(db, page_id)
    db.delete(page)
    db.commit()
    logger.info("page_deleted", page_id=page_id)


def publish_page(db: Session, page_id: int) -> Page:
    page = get_page(db, page_id)
    if page.status == PageStatus.PUBLISHED.value:
        raise ValidationFailedError("Page is already published")
    page.status = PageStatus.PUBLISHED.value
    page.published_at = utcnow()
    db.commit()
    db.refresh(page)
    logger.info("page_published", page_id=page_id)
    return page


def unpublish_page(db: Session, page_id: int) -> Page:
    page = get_page(db, page_id)
    if page.status == PageStatus.DRAFT.value:
        raise ValidationFailedError("Page is already a draft")
    page.status = PageStatus.DRAFT.value
    db.commit()
    db.refresh(page)
    logger.info("page_unpublished", page_id=page_id)
    return page
