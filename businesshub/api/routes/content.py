"""Translatable content string endpoints."""

from typing import Optional

import structlog
from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from businesshub.api.dependencies import require_admin
from businesshub.api.models import (
    ContentStatsResponse,
    ContentStringBulkRequest,
    ContentStringBulkResponse,
    ContentStringCreate,
    ContentStringResponse,
    ContentStringUpdate,
    ContentValuesResponse,
    ErrorResponse,
    MessageResponse,
)
from businesshub.db.database import get_db
from businesshub.models import ContentString, User
from businesshub.services import content_strings as content_service

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Content"])


@router.get(
    "/content/strings",
    summary="Content strings for a language",
    description="Every string as a key/text map; missing translations fall back to the default value.",
)
def public_strings(
    language: str = Query(content_service.DEFAULT_LANGUAGE, min_length=2, max_length=10),
    category: Optional[str] = Query(None),
    db: Session = Depends(get_db),
) -> dict[str, str]:
    return content_service.strings_map(db, language=language, category=category)


@router.get("/admin/content/strings", response_model=list[ContentStringResponse], summary="All content strings")
def admin_list_strings(
    category: Optional[str] = Query(None),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> list[ContentString]:
    return content_service.list_strings(db, category=category)


@router.post(
    "/admin/content/strings",
    response_model=ContentStringResponse,
    status_code=201,
    summary="Create a content string",
    responses={409: {"model": ErrorResponse, "description": "Key already exists"}},
)
def admin_create_string(
    payload: ContentStringCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ContentString:
    return content_service.create_string(db, payload.model_dump())


@router.put(
    "/admin/content/strings",
    response_model=ContentValuesResponse,
    summary="Set many default values",
    description="Body is a {string_key: default_value} map; unknown keys are reported in `missing`.",
)
def admin_update_values(
    values: dict[str, str] = Body(...),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> dict:
    return content_service.update_values(db, values)


@router.post(
    "/admin/content/strings/bulk",
    response_model=ContentStringBulkResponse,
    summary="Create or update many content strings",
)
def admin_bulk_import(
    payload: ContentStringBulkRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> dict:
    saved = content_service.bulk_upsert(db, [item.model_dump() for item in payload.strings])
    return {"success": True, "imported": len(saved), "strings": saved}


@router.put(
    "/admin/content/strings/{key}",
    response_model=ContentStringResponse,
    summary="Update a content string",
    responses={404: {"model": ErrorResponse, "description": "Content string not found"}},
)
def admin_update_string(
    key: str,
    payload: ContentStringUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ContentString:
    return content_service.update_string(db, key, payload.model_dump(exclude_unset=True))


@router.delete(
    "/admin/content/strings/{key}",
    response_model=MessageResponse,
    summary="Delete a content string",
    responses={404: {"model": ErrorResponse, "description": "Content string not found"}},
)
def admin_delete_string(
    key: str,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> MessageResponse:
    content_service.delete_string(db, key)
    return MessageResponse(message="Content string deleted successfully")


@router.get("/admin/content/categories", response_model=list[str], summary="Content string categories")
def admin_categories(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> list[str]:
    return content_service.list_categories(db)


@router.get("/admin/content/stats", response_model=ContentStatsResponse, summary="Content string statistics")
def admin_stats(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> dict:
    return content_service.stats(db)
