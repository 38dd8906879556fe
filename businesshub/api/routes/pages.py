"""CMS page endpoints."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from businesshub.api.dependencies import require_admin
from businesshub.api.models import ErrorResponse, PageCreate, PageResponse, PageUpdate
from businesshub.db.database import get_db
from businesshub.models import Page, PageStatus, User
from businesshub.services import pages as page_service

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Pages"])


@router.get("/pages", response_model=list[PageResponse], summary="Published pages")
def list_published_pages(db: Session = Depends(get_db)) -> list[Page]:
    return page_service.list_pages(db, status=PageStatus.PUBLISHED.value)


@router.get(
    "/pages/{slug}",
    response_model=PageResponse,
    summary="Published page by slug",
    responses={404: {"model": ErrorResponse, "description": "No published page with this slug"}},
)
def get_published_page(slug: str, db: Session = Depends(get_db)) -> Page:
    return page_service.get_published_page(db, slug)


@router.get("/admin/pages", response_model=list[PageResponse], summary="All pages")
def admin_list_pages(
    status: Optional[str] = Query(None, description="draft or published"),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> list[Page]:
    return page_service.list_pages(db, status=status)


@router.get("/admin/pages/{page_id}", response_model=PageResponse, summary="Page by ID")
def admin_get_page(
    page_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Page:
    return page_service.get_page(db, page_id)


@router.post(
    "/admin/pages",
    response_model=PageResponse,
    status_code=201,
    summary="Create a page",
    responses={409: {"model": ErrorResponse, "description": "Slug already in use"}},
)
def admin_create_page(
    payload: PageCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Page:
    return page_service.create_page(db, payload.model_dump(), author=admin)


@router.put("/admin/pages/{page_id}", response_model=PageResponse, summary="Update a page")
def admin_update_page(
    page_id: int,
    payload: PageUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Page:
    return page_service.update_page(db, page_id, payload.model_dump(exclude_unset=True))


@router.delete("/admin/pages/{page_id}", status_code=204, summary="Delete a page")
def admin_delete_page(
    page_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Response:
    page_service.delete_page(db, page_id)
    return Response(status_code=204)


@router.post(
    "/admin/pages/{page_id}/publish",
    response_model=PageResponse,
    summary="Publish a page",
    responses={400: {"model": ErrorResponse, "description": "Already published"}},
)
def admin_publish_page(
    page_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Page:
    return page_service.publish_page(db, page_id)


@router.post(
    "/admin/pages/{page_id}/unpublish",
    response_model=PageResponse,
    summary="Unpublish a page",
    responses={400: {"model": ErrorResponse, "description": "Already a draft"}},
)
def admin_unpublish_page(
    page_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Page:
    return page_service.unpublish_page(db, page_id)
