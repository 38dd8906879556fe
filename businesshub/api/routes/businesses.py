"""Public business endpoints plus owner create/edit/delete.

Fixed paths (/featured, /random, /search, /slug/..., /category/...) are
declared before /businesses/{placeid} so they are matched first.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from businesshub.api.dependencies import get_current_user
from businesshub.api.models import (
    BusinessCreate,
    BusinessListResponse,
    BusinessResponse,
    BusinessUpdate,
    CategoryBusinessesResponse,
    CategoryResponse,
    ErrorResponse,
)
from businesshub.db.database import get_db
from businesshub.models import Business, User
from businesshub.services import businesses as business_service

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Businesses"])


@router.get(
    "/businesses",
    response_model=BusinessListResponse,
    summary="List businesses",
    description="Approved businesses, newest first, narrowed by any combination of filters.",
)
def list_businesses(
    category_id: Optional[int] = Query(None, description="Category ID"),
    category: Optional[str] = Query(None, description="Category slug"),
    search: Optional[str] = Query(None, description="Matches title, description or category name"),
    city: Optional[str] = Query(None, description="City name (case-insensitive)"),
    featured: Optional[bool] = Query(None, description="Only featured / non-featured"),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
) -> BusinessListResponse:
    items, total = business_service.list_businesses(
        db,
        category_id=category_id,
        category_slug=category,
        search=search,
        city=city,
        featured=featured,
        limit=limit,
        offset=offset,
    )
    return BusinessListResponse(
        businesses=[BusinessResponse.model_validate(b) for b in items],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/businesses/featured", response_model=list[BusinessResponse], summary="Featured businesses")
def featured_businesses(
    limit: int = Query(6, ge=1, le=50),
    db: Session = Depends(get_db),
) -> list[Business]:
    return business_service.get_featured(db, limit=limit)


@router.get("/businesses/random", response_model=list[BusinessResponse], summary="Random businesses")
def random_businesses(
    limit: int = Query(9, ge=1, le=50),
    db: Session = Depends(get_db),
) -> list[Business]:
    return business_service.get_random(db, limit=limit)


@router.get(
    "/businesses/search",
    response_model=list[BusinessResponse],
    summary="Search businesses",
    responses={400: {"model": ErrorResponse, "description": "Missing search query"}},
)
def search_businesses(
    q: Optional[str] = Query(None, description="Search text"),
    location: Optional[str] = Query(None, description="City, state or address fragment"),
    db: Session = Depends(get_db),
) -> list[Business]:
    return business_service.search_businesses(db, q, location)


@router.get(
    "/businesses/slug/{slug}",
    response_model=BusinessResponse,
    summary="Business by slug",
    responses={404: {"model": ErrorResponse, "description": "Business not found"}},
)
def get_business_by_slug(slug: str, db: Session = Depends(get_db)) -> Business:
    return business_service.get_by_slug(db, slug)


@router.get(
    "/businesses/category/{slug}",
    response_model=CategoryBusinessesResponse,
    summary="Businesses in a category",
    responses={404: {"model": ErrorResponse, "description": "Category not found"}},
)
def businesses_by_category(slug: str, db: Session = Depends(get_db)) -> CategoryBusinessesResponse:
    category, items = business_service.list_by_category_slug(db, slug)
    return CategoryBusinessesResponse(
        category=CategoryResponse.model_validate(category),
        businesses=[BusinessResponse.model_validate(b) for b in items],
    )


@router.get(
    "/businesses/{placeid}",
    response_model=BusinessResponse,
    summary="Business by ID",
    responses={404: {"model": ErrorResponse, "description": "Business not found"}},
)
def get_business(placeid: str, db: Session = Depends(get_db)) -> Business:
    return business_service.get_business(db, placeid)


@router.post(
    "/businesses",
    response_model=BusinessResponse,
    status_code=201,
    summary="Submit a business",
    description="Submitted listings start as pending and are owned by the submitter.",
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
def create_business(
    payload: BusinessCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Business:
    logger.info("creating_business", title=payload.title, user_id=user.id)
    return business_service.create_business(db, payload.model_dump(exclude_none=True), owner=user)


@router.patch(
    "/businesses/{placeid}",
    response_model=BusinessResponse,
    summary="Update a business",
    responses={403: {"model": ErrorResponse, "description": "Not the owner"}},
)
def update_business(
    placeid: str,
    payload: BusinessUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Business:
    return business_service.update_business(db, placeid, payload.model_dump(exclude_unset=True), user)


@router.delete(
    "/businesses/{placeid}",
    status_code=204,
    summary="Delete a business",
    responses={403: {"model": ErrorResponse, "description": "Not the owner"}},
)
def delete_business(
    placeid: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Response:
    business_service.delete_business(db, placeid, user)
    return Response(status_code=204)


@router.get("/my-businesses", response_model=list[BusinessResponse], summary="Businesses I own")
def my_businesses(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[Business]:
    return business_service.list_user_businesses(db, user.id)
