"""Service catalogue and the services each business offers."""

from typing import Any, Optional

import structlog
from sqlalchemy.orm import Session

from businesshub.core.exceptions import ConflictError, NotFoundError, ValidationFailedError
from businesshub.core.text import is_valid_slug, sanitize_text, slugify
from businesshub.models import BusinessService, Service, User
from businesshub.services.businesses import ensure_can_manage, get_business

logger = structlog.get_logger(__name__)

SERVICE_FIELDS = (
    "name", "slug", "description", "category", "seo_title", "seo_description", "content", "is_active",
)


def _check_slug(db: Session, slug: str, exclude_id: Optional[int] = None) -> None:
    if not is_valid_slug(slug):
        raise ValidationFailedError("Slug may only contain lowercase letters, numbers and dashes")
    query = db.query(Service).filter(Service.slug == slug)
    if exclude_id is not None:
        query = query.filter(Service.id != exclude_id)
    if query.first() is not None:
        raise ConflictError("A service with this slug already exists", {"slug": slug})


def list_services(db: Session, active_only: bool = False) -> list[Service]:
    """Services, newest first."""
    query = db.query(Service)
    if active_only:
        query = query.filter(Service.is_active.is_(True))
    return query.order_by(Service.created_at.desc(), Service.id.desc()).all()


def get_service(db: Session, service_id: int) -> Service:
    service = db.get(Service, service_id)
    if service is None:
        raise NotFoundError("Service", service_id)
    return service


def get_active_service(db: Session, slug: str) -> Service:
    service = db.query(Service).filter(Service.slug == slug, Service.is_active.is_(True)).first()
    if service is None:
        raise NotFoundError("Service", slug)
    return service


def create_service(db: Session, data: dict[str, Any]) -> Service:
    data = {k: v for k, v in data.items() if v is not None}
    name = sanitize_text(data.get("name"))
    if not name:
        raise ValidationFailedError("Service name is required")
    data["name"] = name
    data.setdefault("slug", slugify(name))
    if not data["slug"]:
        raise ValidationFailedError("A slug is required when the name has no letters or digits")
    _check_slug(db, data["slug"])

    service = Service()
    for field in SERVICE_FIELDS:
        if field in data:
            setattr(service, field, data[field])
    db.add(service)
    db.commit()
    db.refresh(service)
    logger.info("service_created", service_id=service.id, slug=service.slug)
    return service


def update_service(db: Session, service_id: int, data: dict[str, Any]) -> Service:
    service = get_service(db, service_id)
    data = {k: v for k, v in data.items() if v is not None}
    if "name" in data:
        data["name"] = sanitize_text(data["name"])
        if not data["name"]:
            raise ValidationFailedError("Service name is required")
    if "slug" in data:
        _check_slug(db, data["slug"], exclude_id=service.id)

    for field in SERVICE_FIELDS:
        if field in data:
            setattr(service, field, data[field])
    db.commit()
    db.refresh(service)
    logger.info("service_updated", service_id=service_id)
    return service


def delete_service(db: Session, service_id: int) -> None:
    """Delete the service together with every business link to it."""
    service = get_service(db, service_id)
    links = len(service.business_links)
    db.delete(service)
    db.commit()
    logger.info("service_deleted", service_id=service_id, links_removed=links)


def business_services(db: Session, placeid: str) -> list[Service]:
    """Active services the business actively offers, by name."""
    get_business(db, placeid)
    return (
        db.query(Service)
        .join(BusinessService, BusinessService.service_id == Service.id)
        .filter(
            BusinessService.business_id == placeid,
            BusinessService.is_active.is_(True),
            Service.is_active.is_(True),
        )
        .order_by(Service.name)
        .all()
    )


def add_business_service(db: Session, placeid: str, service_id: int, user: User) -> BusinessService:
    business = get_business(db, placeid)
    ensure_can_manage(business, user)
    get_service(db, service_id)

    exists = (
        db.query(BusinessService)
        .filter(BusinessService.business_id == placeid, BusinessService.service_id == service_id)
        .first()
    )
    if exists is not None:
        raise ConflictError("Business already offers this service", {"service_id": service_id})

    link = BusinessService(business_id=placeid, service_id=service_id)
    db.add(link)
    db.commit()
    db.refresh(link)
    logger.info("business_service_added", placeid=placeid, service_id=service_id, by=user.id)
    return link


def remove_business_service(db: Session, placeid: str, service_id: int, user: User) -> None:
    business = get_business(db, placeid)
    ensure_can_manage(business, user)

    link = (
        db.query(BusinessService)
        .filter(BusinessService.business_id == placeid, BusinessService.service_id == service_id)
        .first()
    )
    if link is None:
        raise NotFoundError("Business service", service_id)
    db.delete(link)
    db.commit()
    logger.info("business_service_removed", placeid=placeid, service_id=service_id, by=user.id)
