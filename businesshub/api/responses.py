"""Response helpers shared by the routers."""

from fastapi.responses import JSONResponse

from businesshub.services.bulk import BulkResult


def bulk_response(result: BulkResult) -> JSONResponse:
    """200 when every item succeeded, 207 Multi-Status when any failed."""
    return JSONResponse(status_code=result.status_code, content=result.to_dict())
