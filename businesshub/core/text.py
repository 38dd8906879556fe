"""Text helpers shared by the services: slugs, input sanitizing and format checks."""

import re
from typing import Optional
from urllib.parse import urlparse

from email_validator import EmailNotValidError, validate_email

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")
PHONE_PATTERN = re.compile(r"^\+?[\d\s\-().]{7,20}$")

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")
_HTML_TAG = re.compile(r"<[^>]*>")
_JS_SCHEME = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"\bon\w+\s*=", re.IGNORECASE)


def slugify(value: str) -> str:
    """Lowercase, collapse non-alphanumerics to '-', trim leading/trailing dashes."""
    return _NON_SLUG_CHARS.sub("-", value.lower()).strip("-")


def is_valid_slug(value: str) -> bool:
    return bool(value) and bool(SLUG_PATTERN.match(value))


def sanitize_text(value: Optional[str]) -> Optional[str]:
    """Strip HTML tags, javascript: URLs and inline event handlers."""
    if value is None:
        return None
    cleaned = _HTML_TAG.sub("", value)
    cleaned = _JS_SCHEME.sub("", cleaned)
    cleaned = _EVENT_HANDLER.sub("", cleaned)
    return cleaned.strip()


def is_valid_email(value: Optional[str]) -> bool:
    if not value:
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_valid_url(value: Optional[str]) -> bool:
    if not value:
        return False
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def is_valid_phone(value: Optional[str]) -> bool:
    return bool(value) and bool(PHONE_PATTERN.match(value))
