"""
BusinessHub Test Suite.

- unit/: Service-layer rules against an in-memory SQLite database
- integration/: HTTP endpoints through FastAPI's TestClient
- conftest.py: Shared fixtures, factories and auth headers

Run tests with: pytest
"""
