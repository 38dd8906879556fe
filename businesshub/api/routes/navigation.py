"""Menu item and social media link endpoints."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from businesshub.api.dependencies import require_admin
from businesshub.api.models import (
    BulkResultResponse,
    ErrorResponse,
    MenuBulkActionRequest,
    MenuItemCreate,
    MenuItemResponse,
    MenuItemUpdate,
    MenuReorderRequest,
    MoveRequest,
    SocialBulkActionRequest,
    SocialBulkUpdateRequest,
    SocialLinkCreate,
    SocialLinkResponse,
    SocialLinkUpdate,
    SocialReorderRequest,
)
from businesshub.api.responses import bulk_response
from businesshub.db.database import get_db
from businesshub.models import MenuItem, SocialMediaLink, User
from businesshub.services import navigation as nav_service

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Navigation"])

_EDGE_RESPONSE = {400: {"model": ErrorResponse, "description": "Already at the edge"}}


# =============================================================================
# Menu items
# =============================================================================


@router.get("/menu-items", response_model=list[MenuItemResponse], summary="Active menu items")
def list_menu_items(
    position: Optional[str] = Query(None, description="header, footer or sidebar"),
    db: Session = Depends(get_db),
) -> list[MenuItem]:
    return nav_service.list_menu_items(db, position=position, active_only=True)


@router.get("/menu-items/{position}", response_model=list[MenuItemResponse], summary="Active menu items in a position")
def list_menu_position(position: str, db: Session = Depends(get_db)) -> list[MenuItem]:
    return nav_service.list_menu_items(db, position=position, active_only=True)


@router.get("/admin/menu-items", response_model=list[MenuItemResponse], summary="All menu items")
def admin_list_menu_items(
    position: Optional[str] = Query(None),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> list[MenuItem]:
    return nav_service.list_menu_items(db, position=position)


@router.post("/admin/menu-items", response_model=MenuItemResponse, status_code=201, summary="Create a menu item")
def admin_create_menu_item(
    payload: MenuItemCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> MenuItem:
    return nav_service.create_menu_item(db, payload.model_dump())


@router.post("/admin/menu-items/reorder", response_model=list[MenuItemResponse], summary="Reorder a menu")
def admin_reorder_menu(
    payload: MenuReorderRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> list[MenuItem]:
    return nav_service.reorder_menu(db, payload.position, payload.ordered_ids)


@router.post(
    "/admin/menu-items/bulk-action",
    response_model=BulkResultResponse,
    summary="Activate, deactivate or delete many menu items",
    responses={207: {"model": BulkResultResponse, "description": "Some items failed"}},
)
def admin_bulk_menu_action(
    payload: MenuBulkActionRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return bulk_response(nav_service.bulk_menu_action(db, payload.menu_item_ids, payload.action))


@router.put("/admin/menu-items/{item_id}", response_model=MenuItemResponse, summary="Update a menu item")
def admin_update_menu_item(
    item_id: int,
    payload: MenuItemUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> MenuItem:
    return nav_service.update_menu_item(db, item_id, payload.model_dump(exclude_unset=True))


@router.delete("/admin/menu-items/{item_id}", status_code=204, summary="Delete a menu item")
def admin_delete_menu_item(
    item_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Response:
    nav_service.delete_menu_item(db, item_id)
    return Response(status_code=204)


@router.patch("/admin/menu-items/{item_id}/toggle", response_model=MenuItemResponse, summary="Toggle a menu item")
def admin_toggle_menu_item(
    item_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> MenuItem:
    return nav_service.toggle_menu_item(db, item_id)


@router.put(
    "/admin/menu-items/{item_id}/move",
    response_model=MenuItemResponse,
    summary="Move a menu item up or down",
    responses=_EDGE_RESPONSE,
)
def admin_move_menu_item(
    item_id: int,
    payload: MoveRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> MenuItem:
    return nav_service.move_menu_item(db, item_id, payload.direction)


# =============================================================================
# Social media links
# =============================================================================


@router.get("/social-media", response_model=list[SocialLinkResponse], summary="Social media links")
def list_social_links(
    active: bool = Query(True, description="Only active links"),
    db: Session = Depends(get_db),
) -> list[SocialMediaLink]:
    return nav_service.list_social_links(db, active_only=active)


@router.get("/admin/social-media", response_model=list[SocialLinkResponse], summary="All social media links")
def admin_list_social_links(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> list[SocialMediaLink]:
    return nav_service.list_social_links(db)


@router.post(
    "/admin/social-media",
    response_model=SocialLinkResponse,
    status_code=201,
    summary="Create a social media link",
    responses={409: {"model": ErrorResponse, "description": "Platform already linked"}},
)
def admin_create_social_link(
    payload: SocialLinkCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> SocialMediaLink:
    return nav_service.create_social_link(db, payload.model_dump())


@router.post("/admin/social-media/reorder", response_model=list[SocialLinkResponse], summary="Reorder social links")
def admin_reorder_social_links(
    payload: SocialReorderRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> list[SocialMediaLink]:
    return nav_service.reorder_social_links(db, payload.ordered_ids)


@router.post(
    "/admin/social-media/bulk-action",
    response_model=BulkResultResponse,
    summary="Activate, deactivate or delete many social links",
    responses={207: {"model": BulkResultResponse, "description": "Some links failed"}},
)
def admin_bulk_social_action(
    payload: SocialBulkActionRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return bulk_response(nav_service.bulk_social_action(db, payload.link_ids, payload.action))


@router.put(
    "/admin/social-media/bulk-update",
    response_model=BulkResultResponse,
    summary="Update many social links",
    responses={207: {"model": BulkResultResponse, "description": "Some links failed"}},
)
def admin_bulk_update_social_links(
    payload: SocialBulkUpdateRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    updates = [item.model_dump(exclude_unset=True) for item in payload.updates]
    return bulk_response(nav_service.bulk_update_social_links(db, updates))


@router.put("/admin/social-media/{link_id}", response_model=SocialLinkResponse, summary="Update a social link")
def admin_update_social_link(
    link_id: int,
    payload: SocialLinkUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> SocialMediaLink:
    return nav_service.update_social_link(db, link_id, payload.model_dump(exclude_unset=True))


@router.delete("/admin/social-media/{link_id}", status_code=204, summary="Delete a social link")
def admin_delete_social_link(
    link_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Response:
    nav_service.delete_social_link(db, link_id)
    return Response(status_code=204)


@router.patch("/admin/social-media/{link_id}/toggle", response_model=SocialLinkResponse, summary="Toggle a social link")
def admin_toggle_social_link(
    link_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> SocialMediaLink:
    return nav_service.toggle_social_link(db, link_id)


@router.put(
    "/admin/social-media/{link_id}/move",
    response_model=SocialLinkResponse,
    summary="Move a social link up or down",
    responses=_EDGE_RESPONSE,
)
def admin_move_social_link(
    link_id: int,
    payload: MoveRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> SocialMediaLink:
    return nav_service.move_social_link(db, link_id, payload.direction)
