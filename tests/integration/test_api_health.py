"""Integration tests for health endpoints, error mapping and rate limiting."""

import pytest
from fastapi.testclient import TestClient

from businesshub.api.main import create_app
from businesshub.core import rate_limiter
from businesshub.core.rate_limiter import InMemoryRateLimiter
from businesshub.db.database import get_db


class TestHealth:
    """Test health endpoints."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["services"]["database"]["status"] == "healthy"
        assert "uptime_seconds" in data

    def test_live_and_ready(self, client):
        assert client.get("/health/live").json()["status"] == "alive"
        assert client.get("/health/ready").json()["status"] == "ready"

    def test_root(self, client):
        assert client.get("/").json()["api"] == "/api"


class TestErrorResponses:
    """Domain errors render as ErrorResponse bodies."""

    def test_not_found_body(self, client):
        body = client.get("/api/pages/missing").json()

        assert body["error"] == "not_found"
        assert body["path"] == "/api/pages/missing"

    def test_validation_error_is_400(self, client):
        response = client.get("/api/businesses", params={"offset": -1})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "query.offset"


class TestRateLimiting:
    """Test the per-client request budget."""

    @pytest.fixture
    def make_limited_client(self, settings, session_factory, monkeypatch):
        monkeypatch.setattr(rate_limiter, "_rate_limiter", InMemoryRateLimiter())

        def _make(**overrides) -> TestClient:
            app = create_app(settings.model_copy(update={
                "rate_limit_enabled": True,
                "rate_limit_requests": 2,
                "rate_limit_window_seconds": 60,
                **overrides,
            }))

            def override_get_db():
                db = session_factory()
                try:
                    yield db
                finally:
                    db.close()

            app.dependency_overrides[get_db] = override_get_db
            return TestClient(app)

        return _make

    @pytest.fixture
    def limited_client(self, make_limited_client):
        return make_limited_client()

    def test_third_request_throttled(self, limited_client):
        first = limited_client.get("/api/categories")
        limited_client.get("/api/categories")
        third = limited_client.get("/api/categories")

        assert first.headers["X-RateLimit-Limit"] == "2"
        assert third.status_code == 429
        assert third.json()["error"] == "rate_limit_exceeded"
        assert "Retry-After" in third.headers

    def test_health_never_throttled(self, limited_client):
        statuses = [limited_client.get("/health/live").status_code for _ in range(4)]

        assert statuses == [200, 200, 200, 200]

    def test_forwarded_header_ignored_by_default(self, limited_client):
        statuses = [
            limited_client.get("/api/categories", headers={"X-Forwarded-For": f"198.51.100.{i}"}).status_code
            for i in range(3)
        ]

        assert statuses == [200, 200, 429]

    def test_forwarded_header_used_behind_trusted_proxy(self, make_limited_client):
        client = make_limited_client(rate_limit_trust_forwarded_for=True)

        statuses = [
            client.get("/api/categories", headers={"X-Forwarded-For": f"198.51.100.{i}"}).status_code
            for i in range(3)
        ]

        assert statuses == [200, 200, 200]
