"""
Leads: contact-form messages sent to a business.

Visibility: an owner sees the leads of the businesses they own; an admin
handles the leads of unclaimed businesses (and sees everything from the
admin endpoints).
"""

from typing import Optional

import structlog
from sqlalchemy.orm import Query, Session

from businesshub.core.exceptions import NotFoundError, PermissionDeniedError, ValidationFailedError
from businesshub.core.text import is_valid_email, is_valid_phone, sanitize_text
from businesshub.models import Business, Lead, LeadStatus, User
from businesshub.services.bulk import BulkResult
from businesshub.services.businesses import ensure_can_manage, get_business

logger = structlog.get_logger(__name__)

LEAD_STATUSES = tuple(s.value for s in LeadStatus)


def _check_status(status: str) -> None:
    if status not in LEAD_STATUSES:
        raise ValidationFailedError(f"Invalid lead status '{status}'", {"allowed": list(LEAD_STATUSES)})


def create_lead(
    db: Session,
    business_id: str,
    sender_name: str,
    sender_email: str,
    message: str,
    sender_phone: Optional[str] = None,
) -> Lead:
    sender_name = sanitize_text(sender_name)
    message = sanitize_text(message)
    sender_email = (sender_email or "").strip().lower()

    if not business_id or not sender_name or not sender_email or not message:
        raise ValidationFailedError("business_id, sender_name, sender_email and message are required")
    if not is_valid_email(sender_email):
        raise ValidationFailedError("Invalid email address", {"sender_email": sender_email})
    if sender_phone and not is_valid_phone(sender_phone):
        raise ValidationFailedError("Invalid phone number", {"sender_phone": sender_phone})

    business = get_business(db, business_id)

    lead = Lead(
        business_id=business.placeid,
        sender_name=sender_name,
        sender_email=sender_email,
        sender_phone=sender_phone or None,
        message=message,
        status=LeadStatus.NEW.value,
    )
    db.add(lead)
    db.commit()
    db.refresh(lead)

    logger.info("lead_created", lead_id=lead.id, business_id=business.placeid)
    return lead


def _visible_to(db: Session, user: User) -> Query:
    query = db.query(Lead).join(Business, Lead.business_id == Business.placeid)
    if user.is_admin:
        return query.filter(Business.owner_id.is_(None))
    return query.filter(Business.owner_id == user.id)


def _can_access(lead: Lead, user: User) -> bool:
    owner_id = lead.business.owner_id
    if user.is_admin:
        return owner_id is None
    return owner_id == user.id


def list_leads(db: Session, user: User, status: Optional[str] = None) -> list[Lead]:
    query = _visible_to(db, user)
    if status:
        _check_status(status)
        query = query.filter(Lead.status == status)
    return query.order_by(Lead.created_at.desc()).all()


def get_lead(db: Session, lead_id: int) -> Lead:
    lead = db.get(Lead, lead_id)
    if lead is None:
        raise NotFoundError("Lead", lead_id)
    return lead


def get_lead_for_user(db: Session, lead_id: int, user: User) -> Lead:
    lead = get_lead(db, lead_id)
    if not _can_access(lead, user):
        raise PermissionDeniedError("You do not have access to this lead", {"lead_id": lead_id})
    return lead


def update_status(db: Session, lead_id: int, status: str, user: Optional[User] = None) -> Lead:
    """Move a lead through the pipeline. Without a user the call is admin-scoped."""
    _check_status(status)
    lead = get_lead_for_user(db, lead_id, user) if user is not None else get_lead(db, lead_id)
    lead.status = status
    db.commit()
    db.refresh(lead)
    logger.info("lead_status_updated", lead_id=lead_id, status=status)
    return lead


def delete_lead(db: Session, lead_id: int, user: Optional[User] = None) -> None:
    lead = get_lead_for_user(db, lead_id, user) if user is not None else get_lead(db, lead_id)
    db.delete(lead)
    db.commit()
    logger.info("lead_deleted", lead_id=lead_id)


def list_business_leads(db: Session, business_id: str, user: User) -> list[Lead]:
    business = get_business(db, business_id)
    ensure_can_manage(business, user)
    return (
        db.query(Lead)
        .filter(Lead.business_id == business.placeid)
        .order_by(Lead.created_at.desc())
        .all()
    )


def list_all(db: Session, status: Optional[str] = None) -> list[Lead]:
    query = db.query(Lead)
    if status:
        _check_status(status)
        query = query.filter(Lead.status == status)
    return query.order_by(Lead.created_at.desc()).all()


def bulk_delete(db: Session, lead_ids: list[int]) -> BulkResult:
    if not lead_ids:
        raise ValidationFailedError("lead_ids must be a non-empty list")

    result = BulkResult()
    for lead_id in lead_ids:
        lead = db.get(Lead, lead_id)
        if lead is None:
            result.add_failure(lead_id, "Lead not found")
            continue
        db.delete(lead)
        result.add_success()
    db.commit()

    logger.info("leads_bulk_deleted", deleted=result.success, failed=result.failed)
    return result


def mass_update_status(db: Session, lead_ids: list[int], status: str) -> BulkResult:
    _check_status(status)
    if not lead_ids:
        raise ValidationFailedError("lead_ids must be a non-empty list")

    result = BulkResult()
    for lead_id in lead_ids:
        lead = db.get(Lead, lead_id)
        if lead is None:
            result.add_failure(lead_id, "Lead not found")
            continue
        lead.status = status
        result.add_success()
    db.commit()

    logger.info("leads_mass_status", status=status, updated=result.success, failed=result.failed)
    return result
