"""Health check endpoints for the BusinessHub API.

Reports database connectivity and the rate limiter backend.
"""

from datetime import datetime, timezone
import time
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import text
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from businesshub import __version__
from businesshub.api.models import HealthCheckResponse, HealthStatus
from businesshub.config.settings import Settings
from businesshub.db.database import get_db

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Health"])

# Track server start time for uptime calculation
_server_start_time: Optional[float] = None


def set_server_start_time() -> None:
    """Set the server start time. Called on application startup."""
    global _server_start_time
    _server_start_time = time.time()


def get_uptime_seconds() -> Optional[float]:
    """Get server uptime in seconds."""
    if _server_start_time is None:
        return None
    return time.time() - _server_start_time


def check_database_health(db: Session) -> HealthStatus:
    """Run SELECT 1 on the request session."""
    start_time = time.time()
    try:
        db.execute(text("SELECT 1"))
        latency = (time.time() - start_time) * 1000

        return HealthStatus(
            status="healthy",
            latency_ms=round(latency, 2),
            message="Database reachable",
        )
    except Exception as e:
        latency = (time.time() - start_time) * 1000
        logger.error("database_health_check_failed", error=str(e))
        return HealthStatus(
            status="unhealthy",
            latency_ms=round(latency, 2),
            message=f"Database connection failed: {str(e)[:100]}",
        )


async def check_rate_limiter_health(settings: Optional[Settings] = None) -> HealthStatus:
    """Report which rate limiter backend is active."""
    from businesshub.core.rate_limiter import get_rate_limiter

    try:
        limiter = await get_rate_limiter(settings)
    except Exception as e:
        logger.error("rate_limiter_health_check_failed", error=str(e))
        return HealthStatus(status="degraded", message=f"Rate limiter unavailable: {str(e)[:100]}")

    backend = "redis" if getattr(limiter, "is_connected", False) else "in_memory"
    return HealthStatus(status="healthy", message=f"Rate limiter backend: {backend}")


@router.get(
    "/health",
    response_model=HealthCheckResponse,
    summary="Health Check",
    description="Check the health status of the API and its dependencies.",
)
async def health_check(request: Request, db: Session = Depends(get_db)) -> HealthCheckResponse:
    """
    Perform a health check of all system components.

    Returns the status of:
    - database (SQLAlchemy engine)
    - rate limiter (Redis or in-memory)
    """
    services = {
        "database": await run_in_threadpool(check_database_health, db),
        "rate_limiter": await check_rate_limiter_health(request.app.state.settings),
    }

    statuses = [s.status for s in services.values()]
    if all(s == "healthy" for s in statuses):
        overall_status = "healthy"
    elif any(s == "unhealthy" for s in statuses):
        overall_status = "unhealthy"
    else:
        overall_status = "degraded"

    return HealthCheckResponse(
        status=overall_status,
        version=__version__,
        timestamp=datetime.now(timezone.utc),
        services=services,
        uptime_seconds=get_uptime_seconds(),
    )


@router.get(
    "/health/live",
    summary="Liveness Check",
    description="Simple liveness check for container orchestration.",
)
async def liveness() -> dict:
    """Returns 200 while the process is serving requests."""
    return {"status": "alive", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get(
    "/health/ready",
    summary="Readiness Check",
    description="Check if the service is ready to accept traffic.",
)
def readiness(db: Session = Depends(get_db)) -> dict:
    """Returns 200 only if the database is reachable, 503 otherwise."""
    database_status = check_database_health(db)

    if database_status.status == "unhealthy":
        raise HTTPException(
            status_code=503,
            detail="Service not ready: database unavailable",
        )

    return {"status": "ready", "timestamp": datetime.now(timezone.utc).isoformat()}
