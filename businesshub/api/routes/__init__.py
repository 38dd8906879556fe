"""API route modules."""

from businesshub.api.routes.admin_businesses import router as admin_businesses_router
from businesshub.api.routes.auth import router as auth_router
from businesshub.api.routes.businesses import router as businesses_router
from businesshub.api.routes.categories import router as categories_router
from businesshub.api.routes.claims import router as claims_router
from businesshub.api.routes.content import router as content_router
from businesshub.api.routes.health import router as health_router
from businesshub.api.routes.imports import router as imports_router
from businesshub.api.routes.leads import router as leads_router
from businesshub.api.routes.navigation import router as navigation_router
from businesshub.api.routes.pages import router as pages_router
from businesshub.api.routes.reviews import router as reviews_router
from businesshub.api.routes.services import router as services_router
from businesshub.api.routes.site_settings import router as site_settings_router
from businesshub.api.routes.users import router as users_router

__all__ = [
    "admin_businesses_router",
    "auth_router",
    "businesses_router",
    "categories_router",
    "claims_router",
    "content_router",
    "health_router",
    "imports_router",
    "leads_router",
    "navigation_router",
    "pages_router",
    "reviews_router",
    "services_router",
    "site_settings_router",
    "users_router",
]
