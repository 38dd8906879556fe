"""CSV business import endpoints (admin only).

All three take a multipart upload in the ``file`` field.
"""

import structlog
from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from businesshub.api.dependencies import require_admin
from businesshub.api.models import ErrorResponse, ImportPreviewResponse, ImportResultResponse
from businesshub.core.exceptions import ValidationFailedError
from businesshub.db.database import get_db
from businesshub.models import User
from businesshub.services import csv_import

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/admin/import", tags=["Import"])

MAX_UPLOAD_BYTES = 10 * 1024 * 1024

_BAD_FILE = {400: {"model": ErrorResponse, "description": "Not a readable CSV file"}}


async def _read_upload(file: UploadFile) -> bytes:
    if file.filename and not file.filename.lower().endswith(".csv"):
        raise ValidationFailedError("Only .csv files are accepted", {"filename": file.filename})
    content = await file.read()
    if not content:
        raise ValidationFailedError("Uploaded file is empty")
    if len(content) > MAX_UPLOAD_BYTES:
        raise ValidationFailedError(f"File exceeds the {MAX_UPLOAD_BYTES // (1024 * 1024)} MB limit")
    return content


@router.post("/preview", response_model=ImportPreviewResponse, summary="Preview a CSV file", responses=_BAD_FILE)
async def preview_import(
    file: UploadFile = File(..., description="CSV file"),
    admin: User = Depends(require_admin),
) -> dict:
    content = await _read_upload(file)
    return csv_import.preview(content)


@router.post(
    "/validate",
    response_model=ImportResultResponse,
    summary="Validate a CSV file without importing",
    responses=_BAD_FILE,
)
async def validate_import(
    file: UploadFile = File(..., description="CSV file"),
    admin: User = Depends(require_admin),
) -> dict:
    content = await _read_upload(file)
    return csv_import.validate_csv(content).to_dict()


@router.post(
    "",
    response_model=ImportResultResponse,
    summary="Import businesses from CSV",
    description=(
        "Valid rows are written as approved businesses; invalid rows are reported and skipped. "
        "Existing placeids are updated, skipped or reported depending on the options."
    ),
    responses=_BAD_FILE,
)
async def run_import(
    file: UploadFile = File(..., description="CSV file"),
    update_duplicates: bool = Form(False),
    skip_duplicates: bool = Form(False),
    validate_only: bool = Form(False),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> dict:
    content = await _read_upload(file)
    options = csv_import.ImportOptions(
        update_duplicates=update_duplicates,
        skip_duplicates=skip_duplicates,
        validate_only=validate_only,
    )
    logger.info("csv_import_started", filename=file.filename, by=admin.id, validate_only=validate_only)
    result = await run_in_threadpool(csv_import.import_businesses, db, content, options)
    return result.to_dict()
