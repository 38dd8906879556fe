"""
CSV import of businesses.

Headers are lower-cased and trimmed; empty cells become None. Each row
needs ``title`` and ``placeid``; a placeid may appear only once per file.
Rows that fail validation are reported and skipped, valid rows are written.
Imported businesses are published immediately (status approved).
"""

import csv
import io
import json
from dataclasses import dataclass, field
from typing import Any, Optional

import structlog
from sqlalchemy.orm import Session

from businesshub.core.exceptions import BusinessHubError, ConflictError, ValidationFailedError
from businesshub.core.text import is_valid_email, is_valid_phone, is_valid_url
from businesshub.models import Business, BusinessStatus
from businesshub.services import businesses as business_service
from businesshub.services.categories import get_or_create_category

logger = structlog.get_logger(__name__)

REQUIRED_COLUMNS = ("title", "placeid")
TEXT_COLUMNS = (
    "title", "subtitle", "description", "address", "city", "state", "country",
    "phone", "email", "website", "logo", "meta_title", "meta_description",
)
BOOLEAN_COLUMNS = ("featured", "verified")
IMPORT_SOURCE = "csv-import"
PREVIEW_ROWS = 5


@dataclass
class ImportIssue:
    """A problem with one cell (row numbers count the header as row 1)"""
    row: int
    field: str
    value: Any
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"row": self.row, "field": self.field, "value": self.value, "message": self.message}


@dataclass
class ImportOptions:
    update_duplicates: bool = False
    skip_duplicates: bool = False
    validate_only: bool = False


@dataclass
class ImportResult:
    success: bool = True
    total_rows: int = 0
    created: int = 0
    updated: int = 0
    duplicates_skipped: int = 0
    errors: list[ImportIssue] = field(default_factory=list)
    warnings: list[ImportIssue] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "total_rows": self.total_rows,
            "created": self.created,
            "updated": self.updated,
            "duplicates_skipped": self.duplicates_skipped,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
        }


def parse_csv(content: bytes | str) -> tuple[list[str], list[dict[str, Optional[str]]]]:
    """
    Decode and parse CSV content.

    Returns:
        (normalized headers, rows as {header: value-or-None})

    Raises:
        ValidationFailedError: Undecodable file, no header row or missing required columns
    """
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ValidationFailedError("CSV file must be UTF-8 encoded") from e

    reader = csv.reader(io.StringIO(content))
    try:
        raw_headers = next(reader)
    except StopIteration:
        raise ValidationFailedError("CSV file is empty")

    headers = [h.strip().lower() for h in raw_headers]
    missing = [c for c in REQUIRED_COLUMNS if c not in headers]
    if missing:
        raise ValidationFailedError(
            f"Missing required column(s): {', '.join(missing)}", {"headers": headers}
        )

    rows = []
    for values in reader:
        if not any(v.strip() for v in values):
            continue
        row = {}
        for header, value in zip(headers, values):
            value = value.strip()
            row[header] = value if value else None
        rows.append(row)
    return headers, rows


def preview(content: bytes | str, limit: int = PREVIEW_ROWS) -> dict[str, Any]:
    headers, rows = parse_csv(content)
    return {"headers": headers, "rows": rows[:limit], "total_rows": len(rows)}


def _parse_bool(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    lowered = value.lower()
    if lowered in ("true", "1", "yes", "y"):
        return True
    if lowered in ("false", "0", "no", "n"):
        return False
    raise ValueError(value)


def _row_to_data(row: dict[str, Optional[str]], row_number: int, result: ImportResult) -> Optional[dict[str, Any]]:
    """Convert a CSV row into business fields, recording issues. None when the row is invalid."""
    errors_before = len(result.errors)
    data: dict[str, Any] = {"placeid": row.get("placeid")}

    for column in REQUIRED_COLUMNS:
        if not row.get(column):
            result.errors.append(ImportIssue(row_number, column, row.get(column), f"{column} is required"))

    for column in TEXT_COLUMNS:
        if row.get(column) is not None:
            data[column] = row[column]

    if data.get("email") and not is_valid_email(data["email"]):
        result.errors.append(ImportIssue(row_number, "email", data["email"], "Invalid email address"))
    if data.get("website") and not is_valid_url(data["website"]):
        result.errors.append(ImportIssue(row_number, "website", data["website"], "Invalid URL"))
    if data.get("phone") and not is_valid_phone(data["phone"]):
        result.warnings.append(ImportIssue(row_number, "phone", data["phone"], "Unusual phone number format"))

    for column in ("latitude", "longitude"):
        if row.get(column) is not None:
            try:
                data[column] = float(row[column])
            except ValueError:
                result.errors.append(ImportIssue(row_number, column, row[column], "Must be a number"))

    for column in BOOLEAN_COLUMNS:
        try:
            parsed = _parse_bool(row.get(column))
        except ValueError:
            result.errors.append(ImportIssue(row_number, column, row[column], "Must be true or false"))
            continue
        if parsed is not None:
            data[column] = parsed

    if row.get("images"):
        data["images"] = [url.strip() for url in row["images"].split("|") if url.strip()]

    if row.get("hours"):
        try:
            data["hours"] = json.loads(row["hours"])
        except json.JSONDecodeError:
            result.warnings.append(ImportIssue(row_number, "hours", row["hours"], "Ignored: not valid JSON"))

    if row.get("category"):
        data["category"] = row["category"]
    elif row.get("categoryname"):
        data["category"] = row["categoryname"]

    return data if len(result.errors) == errors_before else None


def validate_rows(rows: list[dict[str, Optional[str]]]) -> tuple[ImportResult, list[tuple[int, dict[str, Any]]]]:
    """Check every row; returns the issues and the (row number, data) pairs that passed."""
    result = ImportResult(total_rows=len(rows))
    valid: list[tuple[int, dict[str, Any]]] = []
    seen: dict[str, int] = {}

    for index, row in enumerate(rows):
        row_number = index + 2
        data = _row_to_data(row, row_number, result)

        placeid = row.get("placeid")
        if placeid:
            if placeid in seen:
                result.errors.append(ImportIssue(
                    row_number, "placeid", placeid, f"Duplicate placeid (first seen on row {seen[placeid]})"
                ))
                continue
            seen[placeid] = row_number

        if data is not None:
            valid.append((row_number, data))

    result.success = not result.errors
    return result, valid


def validate_csv(content: bytes | str) -> ImportResult:
    _, rows = parse_csv(content)
    result, _ = validate_rows(rows)
    return result


def _write_row(db: Session, data: dict[str, Any], options: ImportOptions, result: ImportResult) -> None:
    """Create or update one validated row, counting the outcome on result."""
    existing = db.get(Business, data["placeid"])
    if existing is None:
        business_service.create_business(
            db,
            data,
            status=BusinessStatus.APPROVED.value,
            submitted_by=IMPORT_SOURCE,
        )
        result.created += 1
    elif options.update_duplicates:
        for key, value in data.items():
            if key != "placeid":
                setattr(existing, key, value)
        if data.get("title"):
            existing.slug = business_service.unique_slug(db, existing.title, exclude_placeid=existing.placeid)
        db.commit()
        result.updated += 1
    elif options.skip_duplicates:
        result.duplicates_skipped += 1
    else:
        raise ConflictError("Business already exists")


def import_businesses(db: Session, content: bytes | str, options: Optional[ImportOptions] = None) -> ImportResult:
    """
    Validate and write businesses from CSV content.

    An existing placeid is updated with update_duplicates, counted and skipped
    with skip_duplicates, and reported as an error otherwise. validate_only
    stops after validation without touching the database.
    """
    options = options or ImportOptions()
    _, rows = parse_csv(content)
    result, valid = validate_rows(rows)

    if options.validate_only:
        logger.info("csv_import_validated", rows=len(rows), errors=len(result.errors))
        return result

    for row_number, data in valid:
        category_name = data.pop("category", None)
        if category_name:
            try:
                data["category_id"] = get_or_create_category(db, category_name).id
            except BusinessHubError as e:
                db.rollback()
                result.errors.append(ImportIssue(row_number, "category", category_name, e.message))
                continue

        try:
            _write_row(db, data, options, result)
        except BusinessHubError as e:
            db.rollback()
            result.errors.append(ImportIssue(row_number, "placeid", data["placeid"], e.message))

    result.success = not result.errors
    logger.info(
        "csv_import_completed",
        rows=len(rows),
        created=result.created,
        updated=result.updated,
        skipped=result.duplicates_skipped,
        errors=len(result.errors),
    )
    return result
