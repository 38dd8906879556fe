"""
Categories and cities.

Category counts include approved businesses only. Cities are derived from
Business.city; the City table only adds descriptions and lets admins
register a city before any listing exists.
"""

from typing import Any, Optional

import structlog
from sqlalchemy import func
from sqlalchemy.orm import Session

from businesshub.core.exceptions import ConflictError, NotFoundError, ValidationFailedError
from businesshub.core.text import is_valid_slug, sanitize_text, slugify
from businesshub.models import Business, BusinessStatus, Category, City

logger = structlog.get_logger(__name__)

CATEGORY_FIELDS = ("name", "slug", "description", "icon", "color", "page_title")


# =============================================================================
# Categories
# =============================================================================


def _approved_counts(db: Session) -> dict[int, int]:
    rows = (
        db.query(Business.category_id, func.count(Business.placeid))
        .filter(Business.status == BusinessStatus.APPROVED.value)
        .group_by(Business.category_id)
        .all()
    )
    return {category_id: count for category_id, count in rows if category_id is not None}


def _category_dict(category: Category, business_count: int) -> dict[str, Any]:
    return {
        "id": category.id,
        "name": category.name,
        "slug": category.slug,
        "description": category.description,
        "icon": category.icon,
        "color": category.color,
        "page_title": category.page_title,
        "business_count": business_count,
    }


def list_categories(db: Session) -> list[dict[str, Any]]:
    """All categories by name, each with its approved business_count."""
    counts = _approved_counts(db)
    return [
        _category_dict(category, counts.get(category.id, 0))
        for category in db.query(Category).order_by(Category.name).all()
    ]


def get_category_with_count(db: Session, slug: str) -> dict[str, Any]:
    """One category by slug with its approved business_count."""
    category = get_category_by_slug(db, slug)
    count = (
        db.query(func.count(Business.placeid))
        .filter(Business.category_id == category.id, Business.status == BusinessStatus.APPROVED.value)
        .scalar()
    )
    return _category_dict(category, count)


def get_category(db: Session, category_id: int) -> Category:
    category = db.get(Category, category_id)
    if category is None:
        raise NotFoundError("Category", category_id)
    return category


def get_category_by_slug(db: Session, slug: str) -> Category:
    category = db.query(Category).filter(Category.slug == slug).first()
    if category is None:
        raise NotFoundError("Category", slug)
    return category


def _ensure_unique(db: Session, name: str, slug: str, exclude_id: Optional[int] = None) -> None:
    query = db.query(Category).filter((Category.name == name) | (Category.slug == slug))
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    if query.first() is not None:
        raise ConflictError("A category with this name or slug already exists")


def create_category(db: Session, data: dict[str, Any]) -> Category:
    name = sanitize_text(data.get("name"))
    if not name:
        raise ValidationFailedError("Category name is required")
    slug = data.get("slug") or slugify(name)
    if not is_valid_slug(slug):
        raise ValidationFailedError("Slug may only contain lowercase letters, numbers and dashes")

    _ensure_unique(db, name, slug)

    category = Category(
        name=name,
        slug=slug,
        description=data.get("description"),
        icon=data.get("icon"),
        color=data.get("color"),
        page_title=data.get("page_title"),
    )
    db.add(category)
    db.commit()
    db.refresh(category)

    logger.info("category_created", category_id=category.id, slug=slug)
    return category


def update_category(db: Session, category_id: int, data: dict[str, Any]) -> Category:
    category = get_category(db, category_id)

    name = sanitize_text(data["name"]) if data.get("name") else category.name
    slug = data.get("slug") or category.slug
    if not is_valid_slug(slug):
        raise ValidationFailedError("Slug may only contain lowercase letters, numbers and dashes")
    _ensure_unique(db, name, slug, exclude_id=category.id)

    for field in CATEGORY_FIELDS:
        if field in data and data[field] is not None:
            setattr(category, field, data[field])
    category.name = name
    category.slug = slug

    db.commit()
    db.refresh(category)
    logger.info("category_updated", category_id=category.id)
    return category


def delete_category(db: Session, category_id: int) -> None:
    category = get_category(db, category_id)
    in_use = db.query(func.count(Business.placeid)).filter(Business.category_id == category.id).scalar()
    if in_use:
        raise ConflictError(
            "Cannot delete a category that still has businesses",
            {"business_count": in_use},
        )
    db.delete(category)
    db.commit()
    logger.info("category_deleted", category_id=category_id)


def get_or_create_category(db: Session, name: str) -> Category:
    """
    Resolve a category by name (case-insensitive) or by the slug the name
    would get, creating it when neither matches. Names without any ASCII
    letters or digits get a generated ``category-N`` slug.
    """
    name = name.strip()
    category = db.query(Category).filter(func.lower(Category.name) == name.lower()).first()
    if category is not None:
        return category

    slug = slugify(name)
    if slug:
        category = db.query(Category).filter(Category.slug == slug).first()
        if category is not None:
            return category
    else:
        slug = _generated_slug(db)
    return create_category(db, {"name": name, "slug": slug})


def _generated_slug(db: Session) -> str:
    suffix = db.query(func.count(Category.id)).scalar() + 1
    while db.query(Category.id).filter(Category.slug == f"category-{suffix}").first() is not None:
        suffix += 1
    return f"category-{suffix}"


# =============================================================================
# Cities
# =============================================================================


def _city_descriptions(db: Session) -> dict[str, City]:
    return {city.name: city for city in db.query(City).all()}


def list_cities(db: Session, include_empty: bool = False) -> list[dict[str, Any]]:
    """
    Cities with their approved business_count, busiest first then by name.

    Admins pass include_empty=True to also see registered cities with no
    approved listings.
    """
    rows = (
        db.query(Business.city, func.count(Business.placeid).label("business_count"))
        .filter(
            Business.status == BusinessStatus.APPROVED.value,
            Business.city.isnot(None),
            Business.city != "",
        )
        .group_by(Business.city)
        .all()
    )
    known = _city_descriptions(db)
    counts = {name: count for name, count in rows}

    names = set(counts)
    if include_empty:
        names |= set(known)

    cities = []
    for name in names:
        city = known.get(name)
        cities.append({
            "name": name,
            "slug": city.slug if city else slugify(name),
            "description": city.description if city else None,
            "business_count": counts.get(name, 0),
        })

    cities.sort(key=lambda c: (-c["business_count"], c["name"]))
    return cities


def create_city(db: Session, name: str, description: Optional[str] = None) -> City:
    name = sanitize_text(name)
    if not name:
        raise ValidationFailedError("City name is required")
    if db.query(City).filter(City.name == name).first() is not None:
        raise ConflictError("City already exists", {"name": name})

    city = City(name=name, slug=slugify(name), description=description)
    db.add(city)
    db.commit()
    db.refresh(city)
    logger.info("city_created", name=name)
    return city


def update_city(
    db: Session,
    name: str,
    new_name: Optional[str] = None,
    description: Optional[str] = None,
) -> dict[str, Any]:
    """
    Rename a city across every business that references it and/or update its
    description.

    Raises:
        NotFoundError: Neither a City row nor any business uses the name
        ConflictError: Another City row already has new_name
    """
    city = db.query(City).filter(City.name == name).first()
    businesses = db.query(Business).filter(Business.city == name).all()
    if city is None and not businesses:
        raise NotFoundError("City", name)

    new_name = sanitize_text(new_name) if new_name else name
    if new_name != name:
        clash = db.query(City).filter(City.name == new_name).first()
        if clash is not None:
            raise ConflictError("City already exists", {"name": new_name})

    if city is None:
        city = City(name=new_name, slug=slugify(new_name))
        db.add(city)
    else:
        city.name = new_name
        city.slug = slugify(new_name)
    if description is not None:
        city.description = description

    for business in businesses:
        business.city = new_name

    db.commit()
    logger.info("city_updated", name=name, new_name=new_name, businesses_updated=len(businesses))
    return {
        "name": city.name,
        "slug": city.slug,
        "description": city.description,
        "businesses_updated": len(businesses),
    }


def delete_city(db: Session, name: str) -> None:
    in_use = db.query(func.count(Business.placeid)).filter(Business.city == name).scalar()
    if in_use:
        raise ConflictError(
            "Cannot delete a city that still has businesses",
            {"business_count": in_use},
        )
    city = db.query(City).filter(City.name == name).first()
    if city is None:
        raise NotFoundError("City", name)
    db.delete(city)
    db.commit()
    logger.info("city_deleted", name=name)
