"""Service catalogue endpoints and the services offered by each business."""

import structlog
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from businesshub.api.dependencies import get_current_user, require_admin
from businesshub.api.models import (
    BusinessServiceCreate,
    BusinessServiceResponse,
    ErrorResponse,
    ServiceCreate,
    ServiceResponse,
    ServiceUpdate,
)
from businesshub.db.database import get_db
from businesshub.models import BusinessService, Service, User
from businesshub.services import catalog

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Services"])


@router.get("/services", response_model=list[ServiceResponse], summary="Active services")
def list_services(db: Session = Depends(get_db)) -> list[Service]:
    return catalog.list_services(db, active_only=True)


@router.get(
    "/services/{slug}",
    response_model=ServiceResponse,
    summary="Active service by slug",
    responses={404: {"model": ErrorResponse, "description": "Service not found"}},
)
def get_service(slug: str, db: Session = Depends(get_db)) -> Service:
    return catalog.get_active_service(db, slug)


@router.get(
    "/businesses/{placeid}/services",
    response_model=list[ServiceResponse],
    summary="Services a business offers",
    responses={404: {"model": ErrorResponse, "description": "Business not found"}},
)
def business_services(placeid: str, db: Session = Depends(get_db)) -> list[Service]:
    return catalog.business_services(db, placeid)


@router.post(
    "/businesses/{placeid}/services",
    response_model=BusinessServiceResponse,
    status_code=201,
    summary="Add a service to a business",
    description="Owner or admin only.",
    responses={409: {"model": ErrorResponse, "description": "Business already offers the service"}},
)
def add_business_service(
    placeid: str,
    payload: BusinessServiceCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> BusinessService:
    return catalog.add_business_service(db, placeid, payload.service_id, user)


@router.delete(
    "/businesses/{placeid}/services/{service_id}",
    status_code=204,
    summary="Remove a service from a business",
    responses={404: {"model": ErrorResponse, "description": "Business does not offer the service"}},
)
def remove_business_service(
    placeid: str,
    service_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Response:
    catalog.remove_business_service(db, placeid, service_id, user)
    return Response(status_code=204)


@router.get("/admin/services", response_model=list[ServiceResponse], summary="All services, newest first")
def admin_list_services(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> list[Service]:
    return catalog.list_services(db)


@router.post(
    "/admin/services",
    response_model=ServiceResponse,
    status_code=201,
    summary="Create a service",
    responses={409: {"model": ErrorResponse, "description": "Slug already in use"}},
)
def admin_create_service(
    payload: ServiceCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Service:
    return catalog.create_service(db, payload.model_dump())


@router.put(
    "/admin/services/{service_id}",
    response_model=ServiceResponse,
    summary="Update a service",
    responses={404: {"model": ErrorResponse, "description": "Service not found"}},
)
def admin_update_service(
    service_id: int,
    payload: ServiceUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Service:
    return catalog.update_service(db, service_id, payload.model_dump(exclude_unset=True))


@router.delete(
    "/admin/services/{service_id}",
    status_code=204,
    summary="Delete a service and its business links",
)
def admin_delete_service(
    service_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Response:
    catalog.delete_service(db, service_id)
    return Response(status_code=204)
