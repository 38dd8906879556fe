"""Site settings endpoints."""

from typing import Any, Optional

import structlog
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from businesshub.api.dependencies import require_admin
from businesshub.api.models import (
    ErrorResponse,
    SiteSettingBulkRequest,
    SiteSettingPatch,
    SiteSettingResponse,
    SiteSettingUpsert,
)
from businesshub.db.database import get_db
from businesshub.models import SiteSetting, User
from businesshub.services import site_settings as settings_service

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Site Settings"])


@router.get("/site-settings", summary="Public site settings", description="Every setting as a key/value map.")
def public_settings(db: Session = Depends(get_db)) -> dict[str, Any]:
    return settings_service.settings_map(db)


@router.get("/admin/site-settings", response_model=list[SiteSettingResponse], summary="All settings")
def admin_list_settings(
    category: Optional[str] = Query(None),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> list[SiteSetting]:
    return settings_service.list_settings(db, category=category)


@router.put("/admin/site-settings", response_model=list[SiteSettingResponse], summary="Save many settings")
def admin_bulk_upsert(
    payload: SiteSettingBulkRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> list[SiteSetting]:
    return settings_service.bulk_upsert(db, [item.model_dump() for item in payload.settings])


@router.get(
    "/admin/site-settings/{key}",
    response_model=SiteSettingResponse,
    summary="Setting by key",
    responses={404: {"model": ErrorResponse, "description": "Setting not found"}},
)
def admin_get_setting(
    key: str,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> SiteSetting:
    return settings_service.get_setting(db, key)


@router.put("/admin/site-settings/{key}", response_model=SiteSettingResponse, summary="Create or replace a setting")
def admin_upsert_setting(
    key: str,
    payload: SiteSettingUpsert,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> SiteSetting:
    return settings_service.upsert_setting(
        db, key, payload.value, description=payload.description, category=payload.category
    )


@router.patch(
    "/admin/site-settings/{key}",
    response_model=SiteSettingResponse,
    summary="Update part of a setting",
    responses={404: {"model": ErrorResponse, "description": "Setting not found"}},
)
def admin_patch_setting(
    key: str,
    payload: SiteSettingPatch,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> SiteSetting:
    return settings_service.update_setting(db, key, payload.model_dump(exclude_unset=True))


@router.delete("/admin/site-settings/{key}", status_code=204, summary="Delete a setting")
def admin_delete_setting(
    key: str,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Response:
    settings_service.delete_setting(db, key)
    return Response(status_code=204)
