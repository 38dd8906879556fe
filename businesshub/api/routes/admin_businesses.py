"""Admin business management: CRUD across all statuses, bulk tools, submissions and stats."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from businesshub.api.dependencies import require_admin
from businesshub.api.models import (
    AdminBusinessCreate,
    AdminBusinessUpdate,
    BulkDeleteRequest,
    BulkDeleteResponse,
    BulkPhotoDeleteRequest,
    BulkResultResponse,
    BusinessListResponse,
    BusinessResponse,
    ErrorResponse,
    FaqReplaceRequest,
    FeaturedToggleRequest,
    MassCategoryRequest,
    PhotoDeleteRequest,
    StatsResponse,
    SubmissionReviewRequest,
)
from businesshub.api.responses import bulk_response
from businesshub.db.database import get_db
from businesshub.models import Business, User
from businesshub.services import businesses as business_service

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Admin"])


@router.get("/admin/businesses", response_model=BusinessListResponse, summary="All businesses")
def admin_list_businesses(
    status: Optional[str] = Query(None, description="pending, approved or rejected"),
    search: Optional[str] = Query(None),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> BusinessListResponse:
    items, total = business_service.list_admin(db, status=status, search=search, limit=limit, offset=offset)
    return BusinessListResponse(
        businesses=[BusinessResponse.model_validate(b) for b in items],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.post(
    "/admin/businesses",
    response_model=BusinessResponse,
    status_code=201,
    summary="Create a business",
)
def admin_create_business(
    payload: AdminBusinessCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Business:
    data = payload.model_dump(exclude_none=True)
    status = data.pop("status")
    return business_service.create_business(db, data, status=status, submitted_by=admin.id)


@router.post(
    "/admin/businesses/bulk-delete",
    response_model=BulkDeleteResponse,
    summary="Delete many businesses",
    description="Deletes exactly the listed IDs (1-100). Unknown IDs are reported in errors.",
    responses={
        207: {"model": BulkDeleteResponse, "description": "Some IDs could not be deleted"},
        400: {"model": ErrorResponse, "description": "Empty, oversized or malformed ID list"},
    },
)
def admin_bulk_delete(
    payload: BulkDeleteRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    logger.info("bulk_delete_requested", count=len(payload.business_ids), by=admin.id)
    result = business_service.bulk_delete(db, payload.business_ids)
    status_code = 207 if result["errors"] else 200
    return JSONResponse(status_code=status_code, content=result)


@router.patch(
    "/admin/businesses/mass-category",
    response_model=BulkResultResponse,
    summary="Move many businesses to one category",
    responses={207: {"model": BulkResultResponse, "description": "Some businesses failed"}},
)
def admin_mass_category(
    payload: MassCategoryRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return bulk_response(business_service.mass_update_category(db, payload.business_ids, payload.category_id))


@router.put(
    "/admin/businesses/{placeid}",
    response_model=BusinessResponse,
    summary="Update any business",
    responses={404: {"model": ErrorResponse, "description": "Business not found"}},
)
def admin_update_business(
    placeid: str,
    payload: AdminBusinessUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Business:
    return business_service.update_business(db, placeid, payload.model_dump(exclude_unset=True), admin)


@router.delete("/admin/businesses/{placeid}", status_code=204, summary="Delete any business")
def admin_delete_business(
    placeid: str,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Response:
    business_service.delete_business(db, placeid, admin)
    return Response(status_code=204)


@router.patch("/admin/businesses/{placeid}/featured", response_model=BusinessResponse, summary="Set the featured flag")
def admin_set_featured(
    placeid: str,
    payload: FeaturedToggleRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Business:
    return business_service.set_featured(db, placeid, payload.featured)


@router.delete(
    "/admin/businesses/{placeid}/photos",
    response_model=BusinessResponse,
    summary="Remove one photo",
    responses={404: {"model": ErrorResponse, "description": "Business or photo not found"}},
)
def admin_delete_photo(
    placeid: str,
    payload: PhotoDeleteRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Business:
    return business_service.remove_photos(db, placeid, [payload.photo_url])


@router.delete(
    "/admin/businesses/{placeid}/photos/bulk",
    response_model=BusinessResponse,
    summary="Remove several photos",
    responses={404: {"model": ErrorResponse, "description": "Business or photo not found"}},
)
def admin_delete_photos(
    placeid: str,
    payload: BulkPhotoDeleteRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Business:
    return business_service.remove_photos(db, placeid, payload.photo_urls)


@router.put("/admin/businesses/{placeid}/faqs", response_model=BusinessResponse, summary="Replace FAQs")
def admin_replace_faqs(
    placeid: str,
    payload: FaqReplaceRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Business:
    return business_service.replace_faqs(db, placeid, [faq.model_dump() for faq in payload.faqs])


# =============================================================================
# Submissions and dashboard
# =============================================================================


@router.get("/admin/submissions", response_model=list[BusinessResponse], summary="Submitted businesses")
def admin_list_submissions(
    status: str = Query("pending", description="pending, approved or rejected"),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> list[Business]:
    return business_service.list_submissions(db, status=status)


@router.patch(
    "/admin/submissions/{placeid}",
    response_model=BusinessResponse,
    summary="Approve or reject a submission",
)
def admin_review_submission(
    placeid: str,
    payload: SubmissionReviewRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Business:
    return business_service.review_submission(db, placeid, payload.status)


@router.get("/admin/stats", response_model=StatsResponse, summary="Dashboard counters")
def admin_stats(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> dict:
    return business_service.dashboard_stats(db)
