"""
Navigation: menu items and social media links.

Both are ordered lists kept contiguous: menu items per position (order
1..n), social links globally (sort_order 0..n-1). Creating appends at the
end, deleting closes the gap, and move/reorder rewrite the sequence.
"""

from typing import Any, Optional

import structlog
from sqlalchemy import func, true
from sqlalchemy.orm import Session

from businesshub.core.exceptions import ConflictError, NotFoundError, ValidationFailedError
from businesshub.core.text import is_valid_url, sanitize_text
from businesshub.models import MenuItem, MenuPosition, SocialMediaLink, SocialPlatform
from businesshub.services.bulk import BulkResult

logger = structlog.get_logger(__name__)

MENU_POSITIONS = tuple(p.value for p in MenuPosition)
MENU_FIELDS = ("name", "url", "position", "target", "is_active")
SOCIAL_PLATFORMS = tuple(p.value for p in SocialPlatform)
SOCIAL_FIELDS = ("platform", "url", "display_name", "icon_class", "sort_order", "is_active")
BULK_ACTIONS = ("activate", "deactivate", "delete")
DIRECTIONS = ("up", "down")


def _check_direction(direction: str) -> None:
    if direction not in DIRECTIONS:
        raise ValidationFailedError("Direction must be 'up' or 'down'")


def _check_bulk_action(action: str) -> None:
    if action not in BULK_ACTIONS:
        raise ValidationFailedError(f"Invalid action '{action}'", {"allowed": list(BULK_ACTIONS)})


def _swap(items: list, index: int, direction: str, attr: str) -> None:
    """Swap the ordering attribute of items[index] with its neighbour."""
    target = index - 1 if direction == "up" else index + 1
    if target < 0 or target >= len(items):
        raise ValidationFailedError(f"Cannot move item {direction}")
    first, second = items[index], items[target]
    first_value, second_value = getattr(first, attr), getattr(second, attr)
    setattr(first, attr, second_value)
    setattr(second, attr, first_value)


def _apply_sequence(items: list, ordered_ids: list[int], attr: str, start: int) -> None:
    by_id = {item.id: item for item in items}
    if sorted(ordered_ids) != sorted(by_id) or len(set(ordered_ids)) != len(ordered_ids):
        raise ValidationFailedError("ordered_ids must list every item exactly once")
    for offset, item_id in enumerate(ordered_ids):
        setattr(by_id[item_id], attr, start + offset)


# =============================================================================
# Menu items
# =============================================================================


def _check_position(position: str) -> None:
    if position not in MENU_POSITIONS:
        raise ValidationFailedError(f"Invalid menu position '{position}'", {"allowed": list(MENU_POSITIONS)})


def _menu_in_position(db: Session, position: str) -> list[MenuItem]:
    return (
        db.query(MenuItem)
        .filter(MenuItem.position == position)
        .order_by(MenuItem.order, MenuItem.id)
        .all()
    )


def _renumber_menu(db: Session, position: str) -> None:
    db.flush()
    for index, item in enumerate(_menu_in_position(db, position), start=1):
        item.order = index


def get_menu_item(db: Session, item_id: int) -> MenuItem:
    item = db.get(MenuItem, item_id)
    if item is None:
        raise NotFoundError("Menu item", item_id)
    return item


def list_menu_items(db: Session, position: Optional[str] = None, active_only: bool = False) -> list[MenuItem]:
    query = db.query(MenuItem)
    if position:
        _check_position(position)
        query = query.filter(MenuItem.position == position)
    if active_only:
        query = query.filter(MenuItem.is_active.is_(true()))
    return query.order_by(MenuItem.position, MenuItem.order, MenuItem.id).all()


def create_menu_item(db: Session, data: dict[str, Any]) -> MenuItem:
    name = sanitize_text(data.get("name"))
    url = (data.get("url") or "").strip()
    position = data.get("position") or MenuPosition.HEADER.value
    if not name or not url:
        raise ValidationFailedError("Menu item name and url are required")
    _check_position(position)

    max_order = (
        db.query(func.max(MenuItem.order)).filter(MenuItem.position == position).scalar()
    )
    item = MenuItem(
        name=name,
        url=url,
        position=position,
        order=(max_order or 0) + 1,
        target=data.get("target") or "_self",
        is_active=data.get("is_active", True),
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info("menu_item_created", item_id=item.id, position=position, order=item.order)
    return item


def update_menu_item(db: Session, item_id: int, data: dict[str, Any]) -> MenuItem:
    """Update fields; moving to another position appends at its end."""
    item = get_menu_item(db, item_id)
    old_position = item.position

    new_position = data.get("position")
    if new_position is not None:
        _check_position(new_position)

    for field in MENU_FIELDS:
        if field in data and data[field] is not None:
            value = sanitize_text(data[field]) if field == "name" else data[field]
            setattr(item, field, value)

    if new_position is not None and new_position != old_position:
        max_order = (
            db.query(func.max(MenuItem.order))
            .filter(MenuItem.position == new_position, MenuItem.id != item.id)
            .scalar()
        )
        item.order = (max_order or 0) + 1
        _renumber_menu(db, old_position)

    db.commit()
    db.refresh(item)
    logger.info("menu_item_updated", item_id=item_id)
    return item


def delete_menu_item(db: Session, item_id: int) -> None:
    item = get_menu_item(db, item_id)
    position = item.position
    db.delete(item)
    _renumber_menu(db, position)
    db.commit()
    logger.info("menu_item_deleted", item_id=item_id)


def toggle_menu_item(db: Session, item_id: int) -> MenuItem:
    item = get_menu_item(db, item_id)
    item.is_active = not item.is_active
    db.commit()
    db.refresh(item)
    logger.info("menu_item_toggled", item_id=item_id, is_active=item.is_active)
    return item


def move_menu_item(db: Session, item_id: int, direction: str) -> MenuItem:
    _check_direction(direction)
    item = get_menu_item(db, item_id)
    _renumber_menu(db, item.position)
    siblings = _menu_in_position(db, item.position)
    _swap(siblings, siblings.index(item), direction, "order")
    db.commit()
    db.refresh(item)
    logger.info("menu_item_moved", item_id=item_id, direction=direction, order=item.order)
    return item


def reorder_menu(db: Session, position: str, ordered_ids: list[int]) -> list[MenuItem]:
    _check_position(position)
    items = _menu_in_position(db, position)
    _apply_sequence(items, ordered_ids, "order", start=1)
    db.commit()
    logger.info("menu_reordered", position=position, count=len(ordered_ids))
    return _menu_in_position(db, position)


def bulk_menu_action(db: Session, item_ids: list[int], action: str) -> BulkResult:
    _check_bulk_action(action)
    if not item_ids:
        raise ValidationFailedError("menu_item_ids must be a non-empty list")

    result = BulkResult()
    affected_positions = set()
    for item_id in item_ids:
        item = db.get(MenuItem, item_id)
        if item is None:
            result.add_failure(item_id, "Menu item not found")
            continue
        if action == "delete":
            affected_positions.add(item.position)
            db.delete(item)
        else:
            item.is_active = action == "activate"
        result.add_success()

    for position in affected_positions:
        _renumber_menu(db, position)
    db.commit()

    logger.info("menu_items_bulk_action", action=action, success=result.success, failed=result.failed)
    return result


# =============================================================================
# Social media links
# =============================================================================


def _ordered_links(db: Session) -> list[SocialMediaLink]:
    return db.query(SocialMediaLink).order_by(SocialMediaLink.sort_order, SocialMediaLink.id).all()


def _renumber_links(db: Session) -> None:
    db.flush()
    for index, link in enumerate(_ordered_links(db)):
        link.sort_order = index


def _validate_link(db: Session, data: dict[str, Any], exclude_id: Optional[int] = None) -> None:
    if "platform" in data:
        if data["platform"] not in SOCIAL_PLATFORMS:
            raise ValidationFailedError(
                f"Unsupported platform '{data['platform']}'", {"allowed": list(SOCIAL_PLATFORMS)}
            )
        query = db.query(SocialMediaLink).filter(SocialMediaLink.platform == data["platform"])
        if exclude_id is not None:
            query = query.filter(SocialMediaLink.id != exclude_id)
        if query.first() is not None:
            raise ConflictError("A link for this platform already exists", {"platform": data["platform"]})
    if "url" in data and not is_valid_url(data["url"]):
        raise ValidationFailedError("Invalid URL", {"url": data["url"]})
    for field in ("display_name", "icon_class"):
        if field in data and not (data[field] or "").strip():
            raise ValidationFailedError(f"{field} is required")
    if "sort_order" in data and (not isinstance(data["sort_order"], int) or data["sort_order"] < 0):
        raise ValidationFailedError("sort_order must be a non-negative integer")


def get_social_link(db: Session, link_id: int) -> SocialMediaLink:
    link = db.get(SocialMediaLink, link_id)
    if link is None:
        raise NotFoundError("Social media link", link_id)
    return link


def list_social_links(db: Session, active_only: bool = False) -> list[SocialMediaLink]:
    query = db.query(SocialMediaLink)
    if active_only:
        query = query.filter(SocialMediaLink.is_active.is_(true()))
    return query.order_by(SocialMediaLink.sort_order, SocialMediaLink.id).all()


def create_social_link(db: Session, data: dict[str, Any]) -> SocialMediaLink:
    data = {k: v for k, v in data.items() if v is not None}
    for field in ("platform", "url", "display_name", "icon_class"):
        if not data.get(field):
            raise ValidationFailedError(f"{field} is required")
    if "sort_order" not in data:
        max_order = db.query(func.max(SocialMediaLink.sort_order)).scalar()
        data["sort_order"] = 0 if max_order is None else max_order + 1
    _validate_link(db, data)

    link = SocialMediaLink(**{f: data[f] for f in SOCIAL_FIELDS if f in data})
    db.add(link)
    db.commit()
    db.refresh(link)
    logger.info("social_link_created", link_id=link.id, platform=link.platform)
    return link


def update_social_link(db: Session, link_id: int, data: dict[str, Any]) -> SocialMediaLink:
    link = get_social_link(db, link_id)
    data = {k: v for k, v in data.items() if v is not None}
    _validate_link(db, data, exclude_id=link.id)

    for field in SOCIAL_FIELDS:
        if field in data:
            setattr(link, field, data[field])

    db.commit()
    db.refresh(link)
    logger.info("social_link_updated", link_id=link_id)
    return link


def delete_social_link(db: Session, link_id: int) -> None:
    link = get_social_link(db, link_id)
    db.delete(link)
    _renumber_links(db)
    db.commit()
    logger.info("social_link_deleted", link_id=link_id)


def toggle_social_link(db: Session, link_id: int) -> SocialMediaLink:
    link = get_social_link(db, link_id)
    link.is_active = not link.is_active
    db.commit()
    db.refresh(link)
    logger.info("social_link_toggled", link_id=link_id, is_active=link.is_active)
    return link


def move_social_link(db: Session, link_id: int, direction: str) -> SocialMediaLink:
    _check_direction(direction)
    link = get_social_link(db, link_id)
    _renumber_links(db)
    links = _ordered_links(db)
    _swap(links, links.index(link), direction, "sort_order")
    db.commit()
    db.refresh(link)
    logger.info("social_link_moved", link_id=link_id, direction=direction)
    return link


def reorder_social_links(db: Session, ordered_ids: list[int]) -> list[SocialMediaLink]:
    _apply_sequence(_ordered_links(db), ordered_ids, "sort_order", start=0)
    db.commit()
    logger.info("social_links_reordered", count=len(ordered_ids))
    return _ordered_links(db)


def bulk_social_action(db: Session, link_ids: list[int], action: str) -> BulkResult:
    _check_bulk_action(action)
    if not link_ids:
        raise ValidationFailedError("link_ids must be a non-empty list")

    result = BulkResult()
    deleted = False
    for link_id in link_ids:
        link = db.get(SocialMediaLink, link_id)
        if link is None:
            result.add_failure(link_id, "Social media link not found")
            continue
        if action == "delete":
            db.delete(link)
            deleted = True
        else:
            link.is_active = action == "activate"
        result.add_success()

    if deleted:
        _renumber_links(db)
    db.commit()

    logger.info("social_links_bulk_action", action=action, success=result.success, failed=result.failed)
    return result


def bulk_update_social_links(db: Session, updates: list[dict[str, Any]]) -> BulkResult:
    """Apply a list of partial updates, each carrying the link's id."""
    if not updates:
        raise ValidationFailedError("updates must be a non-empty list")

    result = BulkResult()
    for update in updates:
        link_id = update.get("id")
        link = db.get(SocialMediaLink, link_id) if link_id is not None else None
        if link is None:
            result.add_failure(link_id, "Social media link not found")
            continue
        changes = {k: v for k, v in update.items() if k in SOCIAL_FIELDS and v is not None}
        try:
            _validate_link(db, changes, exclude_id=link.id)
        except (ValidationFailedError, ConflictError) as e:
            result.add_failure(link_id, e.message)
            continue
        for field, value in changes.items():
            setattr(link, field, value)
        result.add_success()

    db.commit()
    logger.info("social_links_bulk_updated", success=result.success, failed=result.failed)
    return result
