"""BusinessHub API - Main FastAPI Application.

This module provides the FastAPI application for the BusinessHub directory.
It includes:
- CORS and rate limiting middleware
- Domain exception mapping to ErrorResponse bodies
- Health endpoints at the root, everything else under /api
- Schema creation and bootstrap admin on startup

Usage:
    # Run with uvicorn
    uvicorn businesshub.api.main:app --reload

    # Or run directly
    python -m businesshub.api.main
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

import structlog
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from businesshub import __version__
from businesshub.api.middleware import RateLimitMiddleware
from businesshub.api.models import ErrorResponse, ValidationErrorDetail, ValidationErrorResponse
from businesshub.api.routes import (
    admin_businesses_router,
    auth_router,
    businesses_router,
    categories_router,
    claims_router,
    content_router,
    health_router,
    imports_router,
    leads_router,
    navigation_router,
    pages_router,
    reviews_router,
    services_router,
    site_settings_router,
    users_router,
)
from businesshub.api.routes.health import set_server_start_time
from businesshub.config.settings import Settings, get_settings
from businesshub.core.exceptions import BusinessHubError
from businesshub.core.rate_limiter import close_rate_limiter
from businesshub.db.database import get_session_factory, init_db
from businesshub.services.users import ensure_admin

logger = structlog.get_logger(__name__)

# API metadata for OpenAPI documentation
API_TITLE = "BusinessHub API"
API_DESCRIPTION = """
## Local Business Directory

Browse, review and contact local businesses; owners claim and manage their
listings; admins moderate content and run the site.

### Authentication

Register or log in via `/api/auth` and send the returned token as
`Authorization: Bearer <token>`.
"""

OPENAPI_TAGS = [
    {"name": "Health", "description": "System health and status endpoints"},
    {"name": "Auth", "description": "Registration, login and the caller's own profile"},
    {"name": "Businesses", "description": "Public directory listings and owner edits"},
    {"name": "Categories", "description": "Categories and cities"},
    {"name": "Reviews", "description": "Review submission and moderation"},
    {"name": "Leads", "description": "Messages sent to businesses"},
    {"name": "Claims", "description": "Ownership claims and featured-listing requests"},
    {"name": "Admin", "description": "Business administration, submissions and stats"},
    {"name": "Admin Users", "description": "Account administration"},
    {"name": "Pages", "description": "CMS pages"},
    {"name": "Navigation", "description": "Menu items and social media links"},
    {"name": "Site Settings", "description": "Key/value site configuration"},
    {"name": "Content", "description": "Translatable UI strings"},
    {"name": "Services", "description": "Service catalogue and the services businesses offer"},
    {"name": "Import", "description": "CSV business import"},
]


def _bootstrap_admin(settings: Settings) -> None:
    if not settings.admin_email or not settings.admin_password:
        return
    db = get_session_factory()()
    try:
        ensure_admin(db, settings.admin_email, settings.admin_password.get_secret_value())
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    - Startup: create tables (with retry) and the bootstrap admin
    - Shutdown: close the rate limiter's Redis connection
    """
    settings: Settings = app.state.settings
    logger.info("application_starting", environment=settings.app_env, version=__version__)
    set_server_start_time()

    init_db()
    _bootstrap_admin(settings)

    logger.info("application_started")

    yield

    logger.info("application_stopping")
    await close_rate_limiter()
    logger.info("application_stopped")


# =============================================================================
# Exception Handlers
# =============================================================================


async def businesshub_exception_handler(request: Request, exc: BusinessHubError) -> JSONResponse:
    """Render domain errors with the status code their class declares."""
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "request_failed",
        path=request.url.path,
        method=request.method,
        error=exc.error_code,
        message=exc.message,
    )

    response = ErrorResponse(
        error=exc.error_code,
        message=exc.message,
        detail=exc.details or None,
        path=request.url.path,
    )
    return JSONResponse(status_code=exc.status_code, content=response.model_dump(mode="json"))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle Pydantic validation errors with a 400 and per-field details."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        value = error.get("input")
        errors.append(ValidationErrorDetail(
            field=field,
            message=error["msg"],
            value=value if isinstance(value, (str, int, float, bool, type(None))) else None,
        ))

    response = ValidationErrorResponse(errors=errors, timestamp=datetime.now(timezone.utc))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=response.model_dump(mode="json"),
    )


async def integrity_exception_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """A unique or foreign key constraint rejected the write."""
    logger.warning("integrity_error", path=request.url.path, error=str(exc.orig))
    response = ErrorResponse(
        error="conflict",
        message="The request conflicts with existing data",
        path=request.url.path,
    )
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=response.model_dump(mode="json"))


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )

    response = ErrorResponse(
        error="internal_server_error",
        message="An unexpected error occurred",
        detail=str(exc) if request.app.state.settings.debug else None,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=response.model_dump(mode="json"),
    )


# =============================================================================
# Application Factory
# =============================================================================


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Overrides the environment-derived settings (used by tests)
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        openapi_tags=OPENAPI_TAGS,
    )
    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings

    if settings.rate_limit_enabled:
        app.add_middleware(RateLimitMiddleware, settings=settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["Content-Type", "Authorization", "Accept"],
    )

    app.add_exception_handler(BusinessHubError, businesshub_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        return {
            "name": API_TITLE,
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
            "api": "/api",
        }

    # Health endpoints at root level
    app.include_router(health_router)

    api_router = APIRouter(prefix="/api")
    api_router.include_router(auth_router)
    api_router.include_router(businesses_router)
    api_router.include_router(categories_router)
    api_router.include_router(reviews_router)
    api_router.include_router(leads_router)
    api_router.include_router(claims_router)
    api_router.include_router(admin_businesses_router)
    api_router.include_router(users_router)
    api_router.include_router(pages_router)
    api_router.include_router(navigation_router)
    api_router.include_router(site_settings_router)
    api_router.include_router(content_router)
    api_router.include_router(services_router)
    api_router.include_router(imports_router)
    app.include_router(api_router)

    return app


app = create_app()


# =============================================================================
# Development Server
# =============================================================================


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "businesshub.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
