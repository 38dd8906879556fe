"""Lead (contact form) endpoints.

Owners see leads for their own businesses; admins see leads for businesses
nobody has claimed. The /admin/leads routes give admins the full set.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from businesshub.api.dependencies import get_current_user, require_admin
from businesshub.api.models import (
    BulkResultResponse,
    ErrorResponse,
    LeadBulkDeleteRequest,
    LeadCreate,
    LeadCreatedResponse,
    LeadMassStatusRequest,
    LeadResponse,
    LeadStatusUpdate,
)
from businesshub.api.responses import bulk_response
from businesshub.db.database import get_db
from businesshub.models import Lead, User
from businesshub.services import leads as lead_service

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Leads"])


@router.post(
    "/leads",
    response_model=LeadCreatedResponse,
    status_code=201,
    summary="Contact a business",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid contact details"},
        404: {"model": ErrorResponse, "description": "Business not found"},
    },
)
def create_lead(payload: LeadCreate, db: Session = Depends(get_db)) -> LeadCreatedResponse:
    lead = lead_service.create_lead(
        db,
        business_id=payload.business_id,
        sender_name=payload.sender_name,
        sender_email=payload.sender_email,
        message=payload.message,
        sender_phone=payload.sender_phone,
    )
    return LeadCreatedResponse(message="Your message has been sent", lead_id=lead.id)


@router.get("/leads", response_model=list[LeadResponse], summary="Leads visible to me")
def list_leads(
    status: Optional[str] = Query(None, description="new, contacted, converted or closed"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[Lead]:
    return lead_service.list_leads(db, user, status=status)


@router.get(
    "/leads/{lead_id}",
    response_model=LeadResponse,
    summary="Lead by ID",
    responses={403: {"model": ErrorResponse, "description": "Not your lead"}},
)
def get_lead(
    lead_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Lead:
    return lead_service.get_lead_for_user(db, lead_id, user)


@router.patch("/leads/{lead_id}/status", response_model=LeadResponse, summary="Update lead status")
def update_lead_status(
    lead_id: int,
    payload: LeadStatusUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Lead:
    return lead_service.update_status(db, lead_id, payload.status, user)


@router.delete("/leads/{lead_id}", status_code=204, summary="Delete a lead")
def delete_lead(
    lead_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Response:
    lead_service.delete_lead(db, lead_id, user)
    return Response(status_code=204)


@router.get(
    "/businesses/{placeid}/leads",
    response_model=list[LeadResponse],
    summary="Leads for one business",
    responses={403: {"model": ErrorResponse, "description": "Not the owner"}},
)
def business_leads(
    placeid: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[Lead]:
    return lead_service.list_business_leads(db, placeid, user)


# =============================================================================
# Admin
# =============================================================================


@router.get("/admin/leads", response_model=list[LeadResponse], summary="All leads")
def admin_list_leads(
    status: Optional[str] = Query(None),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> list[Lead]:
    return lead_service.list_all(db, status=status)


@router.post(
    "/admin/leads/bulk-delete",
    response_model=BulkResultResponse,
    summary="Delete many leads",
    responses={207: {"model": BulkResultResponse, "description": "Some leads failed"}},
)
def admin_bulk_delete_leads(
    payload: LeadBulkDeleteRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return bulk_response(lead_service.bulk_delete(db, payload.lead_ids))


@router.patch(
    "/admin/leads/mass-status",
    response_model=BulkResultResponse,
    summary="Set the status of many leads",
    responses={207: {"model": BulkResultResponse, "description": "Some leads failed"}},
)
def admin_mass_status(
    payload: LeadMassStatusRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return bulk_response(lead_service.mass_update_status(db, payload.lead_ids, payload.status))


@router.patch("/admin/leads/{lead_id}/status", response_model=LeadResponse, summary="Update any lead's status")
def admin_update_lead_status(
    lead_id: int,
    payload: LeadStatusUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Lead:
    return lead_service.update_status(db, lead_id, payload.status)


@router.delete("/admin/leads/{lead_id}", status_code=204, summary="Delete any lead")
def admin_delete_lead(
    lead_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Response:
    lead_service.delete_lead(db, lead_id)
    return Response(status_code=204)
