"""Category and city endpoints, public listing plus admin management."""

import structlog
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from businesshub.api.dependencies import require_admin
from businesshub.api.models import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    CityCreate,
    CityResponse,
    CityUpdate,
    CityUpdateResponse,
    ErrorResponse,
)
from businesshub.db.database import get_db
from businesshub.models import Category, City, User
from businesshub.services import categories as category_service

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Categories"])


# =============================================================================
# Categories
# =============================================================================


@router.get("/categories", response_model=list[CategoryResponse], summary="List categories")
def list_categories(db: Session = Depends(get_db)) -> list[dict]:
    """All categories with the number of approved businesses in each."""
    return category_service.list_categories(db)


@router.get(
    "/categories/{slug}",
    response_model=CategoryResponse,
    summary="Category by slug",
    responses={404: {"model": ErrorResponse, "description": "Category not found"}},
)
def get_category(slug: str, db: Session = Depends(get_db)) -> dict:
    return category_service.get_category_with_count(db, slug)


@router.get("/admin/categories", response_model=list[CategoryResponse], summary="List categories (admin)")
def admin_list_categories(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> list[dict]:
    return category_service.list_categories(db)


@router.post(
    "/admin/categories",
    response_model=CategoryResponse,
    status_code=201,
    summary="Create a category",
    responses={409: {"model": ErrorResponse, "description": "Name or slug already taken"}},
)
def create_category(
    payload: CategoryCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Category:
    return category_service.create_category(db, payload.model_dump(exclude_none=True))


@router.patch(
    "/admin/categories/{category_id}",
    response_model=CategoryResponse,
    summary="Update a category",
    responses={
        404: {"model": ErrorResponse, "description": "Category not found"},
        409: {"model": ErrorResponse, "description": "Name or slug already taken"},
    },
)
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Category:
    return category_service.update_category(db, category_id, payload.model_dump(exclude_unset=True))


@router.delete(
    "/admin/categories/{category_id}",
    status_code=204,
    summary="Delete a category",
    responses={409: {"model": ErrorResponse, "description": "Category still has businesses"}},
)
def delete_category(
    category_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Response:
    category_service.delete_category(db, category_id)
    return Response(status_code=204)


# =============================================================================
# Cities
# =============================================================================


@router.get("/cities", response_model=list[CityResponse], summary="List cities")
def list_cities(db: Session = Depends(get_db)) -> list[dict]:
    """Cities that have approved businesses, busiest first."""
    return category_service.list_cities(db)


@router.get("/admin/cities", response_model=list[CityResponse], summary="List cities (admin)")
def admin_list_cities(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> list[dict]:
    return category_service.list_cities(db, include_empty=True)


@router.post(
    "/admin/cities",
    response_model=CityResponse,
    status_code=201,
    summary="Register a city",
    responses={409: {"model": ErrorResponse, "description": "City already exists"}},
)
def create_city(
    payload: CityCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> CityResponse:
    city: City = category_service.create_city(db, payload.name, payload.description)
    return CityResponse(name=city.name, slug=city.slug, description=city.description)


@router.put(
    "/admin/cities/{name}",
    response_model=CityUpdateResponse,
    summary="Rename or describe a city",
    description="A rename is applied to every business in the city.",
    responses={404: {"model": ErrorResponse, "description": "Unknown city"}},
)
def update_city(
    name: str,
    payload: CityUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> dict:
    return category_service.update_city(db, name, payload.name, payload.description)


@router.delete(
    "/admin/cities/{name}",
    status_code=204,
    summary="Delete a city",
    responses={409: {"model": ErrorResponse, "description": "City still has businesses"}},
)
def delete_city(
    name: str,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Response:
    category_service.delete_city(db, name)
    return Response(status_code=204)
