"""
BusinessHub FastAPI application.

- main: application factory, exception handlers and router wiring
- routes/: endpoint definitions organized by resource
- models: Pydantic request/response models
- dependencies: authentication providers

API Structure:
- /health - Health check and readiness checks
- /api/auth, /api/businesses, /api/categories, ... - public and user endpoints
- /api/admin/... - admin-only management endpoints

Example:
    from businesshub.api.main import app

    # Run with: uvicorn businesshub.api.main:app --reload
"""
