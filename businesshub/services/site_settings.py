"""Key/value site settings with JSON values, grouped by category."""

from typing import Any, Optional

import structlog
from sqlalchemy.orm import Session

from businesshub.core.exceptions import NotFoundError, ValidationFailedError
from businesshub.models import SiteSetting

logger = structlog.get_logger(__name__)

DEFAULT_CATEGORY = "general"


def list_settings(db: Session, category: Optional[str] = None) -> list[SiteSetting]:
    query = db.query(SiteSetting)
    if category:
        query = query.filter(SiteSetting.category == category)
    return query.order_by(SiteSetting.category, SiteSetting.key).all()


def settings_map(db: Session) -> dict[str, Any]:
    """Every setting as {key: value}."""
    return {setting.key: setting.value for setting in list_settings(db)}


def get_setting(db: Session, key: str) -> SiteSetting:
    setting = db.query(SiteSetting).filter(SiteSetting.key == key).first()
    if setting is None:
        raise NotFoundError("Setting", key)
    return setting


def upsert_setting(
    db: Session,
    key: str,
    value: Any,
    description: Optional[str] = None,
    category: Optional[str] = None,
    commit: bool = True,
) -> SiteSetting:
    """Create the setting or overwrite its value (and description/category when given)."""
    key = (key or "").strip()
    if not key:
        raise ValidationFailedError("Setting key is required")

    setting = db.query(SiteSetting).filter(SiteSetting.key == key).first()
    created = setting is None
    if created:
        setting = SiteSetting(key=key, category=category or DEFAULT_CATEGORY)
        db.add(setting)

    setting.value = value
    if description is not None:
        setting.description = description
    if category is not None:
        setting.category = category

    if commit:
        db.commit()
        db.refresh(setting)
    else:
        db.flush()
    logger.info("site_setting_saved", key=key, created=created)
    return setting


def update_setting(db: Session, key: str, data: dict[str, Any]) -> SiteSetting:
    """Partial update of an existing setting."""
    setting = get_setting(db, key)
    if "value" in data:
        setting.value = data["value"]
    for field in ("description", "category"):
        if data.get(field) is not None:
            setattr(setting, field, data[field])
    db.commit()
    db.refresh(setting)
    logger.info("site_setting_updated", key=key)
    return setting


def bulk_upsert(db: Session, settings: list[dict[str, Any]]) -> list[SiteSetting]:
    saved = [
        upsert_setting(
            db,
            item.get("key"),
            item.get("value"),
            description=item.get("description"),
            category=item.get("category"),
            commit=False,
        )
        for item in settings
    ]
    db.commit()
    for setting in saved:
        db.refresh(setting)
    return saved


def delete_setting(db: Session, key: str) -> None:
    setting = get_setting(db, key)
    db.delete(setting)
    db.commit()
    logger.info("site_setting_deleted", key=key)
