"""
Translatable UI strings.

Each string has a dotted key (``header.navigation.home``), a default value
and optional per-language translations. Public lookups fall back to the
default value when a language has no translation.
"""

from datetime import timedelta
from typing import Any, Optional

import structlog
from sqlalchemy import func
from sqlalchemy.orm import Session

from businesshub.core.exceptions import ConflictError, NotFoundError, ValidationFailedError
from businesshub.db.database import utcnow
from businesshub.models import ContentString

logger = structlog.get_logger(__name__)

DEFAULT_LANGUAGE = "en"
RECENT_DAYS = 7
STRING_FIELDS = ("default_value", "translations", "category", "description", "is_html")


def _check_translations(translations: Any) -> None:
    if translations is None:
        return
    if not isinstance(translations, dict) or not all(
        isinstance(lang, str) and isinstance(text, str) for lang, text in translations.items()
    ):
        raise ValidationFailedError("translations must map language codes to text")


def strings_map(db: Session, language: str = DEFAULT_LANGUAGE, category: Optional[str] = None) -> dict[str, str]:
    """Every string as {key: text in language}, optionally limited to one category."""
    query = db.query(ContentString)
    if category:
        query = query.filter(ContentString.category == category)
    return {s.string_key: s.translate(language) for s in query.all()}


def list_strings(db: Session, category: Optional[str] = None) -> list[ContentString]:
    query = db.query(ContentString)
    if category:
        query = query.filter(ContentString.category == category)
    return query.order_by(ContentString.category, ContentString.string_key).all()


def get_string(db: Session, key: str) -> ContentString:
    string = db.query(ContentString).filter(ContentString.string_key == key).first()
    if string is None:
        raise NotFoundError("Content string", key)
    return string


def create_string(db: Session, data: dict[str, Any]) -> ContentString:
    key = (data.get("string_key") or "").strip()
    if not key:
        raise ValidationFailedError("string_key is required")
    if not data.get("default_value"):
        raise ValidationFailedError("default_value is required")
    if not (data.get("category") or "").strip():
        raise ValidationFailedError("category is required")
    _check_translations(data.get("translations"))

    if db.query(ContentString).filter(ContentString.string_key == key).first() is not None:
        raise ConflictError("Content string key already exists", {"string_key": key})

    string = ContentString(string_key=key, translations={})
    for field in STRING_FIELDS:
        if data.get(field) is not None:
            setattr(string, field, data[field])
    db.add(string)
    db.commit()
    db.refresh(string)
    logger.info("content_string_created", key=key)
    return string


def update_string(db: Session, key: str, data: dict[str, Any]) -> ContentString:
    string = get_string(db, key)
    if "default_value" in data and not data["default_value"]:
        raise ValidationFailedError("default_value cannot be empty")
    _check_translations(data.get("translations"))

    for field in STRING_FIELDS:
        if data.get(field) is not None:
            setattr(string, field, data[field])
    db.commit()
    db.refresh(string)
    logger.info("content_string_updated", key=key)
    return string


def delete_string(db: Session, key: str) -> None:
    string = get_string(db, key)
    db.delete(string)
    db.commit()
    logger.info("content_string_deleted", key=key)


def update_values(db: Session, values: dict[str, str]) -> dict[str, Any]:
    """
    Set the default value of many strings at once.

    Keys with no matching string are reported in ``missing`` and left alone.
    """
    if not values:
        raise ValidationFailedError("No content strings to update")

    strings = {
        s.string_key: s
        for s in db.query(ContentString).filter(ContentString.string_key.in_(list(values))).all()
    }
    missing = [key for key in values if key not in strings]
    for key, string in strings.items():
        if not values[key]:
            raise ValidationFailedError("default_value cannot be empty", {"string_key": key})
        string.default_value = values[key]
    db.commit()

    logger.info("content_strings_values_updated", updated=len(strings), missing=len(missing))
    return {
        "success": True,
        "updated": len(strings),
        "missing": missing,
        "message": f"Successfully updated {len(strings)} content strings",
    }


def bulk_upsert(db: Session, strings: list[dict[str, Any]]) -> list[ContentString]:
    """Create each string or overwrite the fields it provides when the key exists."""
    for item in strings:
        if not (item.get("string_key") or "").strip():
            raise ValidationFailedError("string_key is required")
        _check_translations(item.get("translations"))

    saved = []
    for item in strings:
        key = (item.get("string_key") or "").strip()
        existing = db.query(ContentString).filter(ContentString.string_key == key).first()
        if existing is None:
            saved.append(create_string(db, item))
        else:
            saved.append(update_string(db, key, item))
    logger.info("content_strings_imported", count=len(saved))
    return saved


def list_categories(db: Session) -> list[str]:
    rows = db.query(ContentString.category).distinct().order_by(ContentString.category).all()
    return [category for (category,) in rows]


def stats(db: Session) -> dict[str, Any]:
    """Totals, per-category counts and how many strings changed in the last week."""
    per_category = (
        db.query(ContentString.category, func.count(ContentString.id))
        .group_by(ContentString.category)
        .order_by(ContentString.category)
        .all()
    )
    since = utcnow() - timedelta(days=RECENT_DAYS)
    recent = db.query(func.count(ContentString.id)).filter(ContentString.updated_at >= since).scalar()
    return {
        "total_strings": sum(count for _, count in per_category),
        "categories_count": len(per_category),
        "recent_updates": recent,
        "categories": [{"category": category, "count": count} for category, count in per_category],
    }
