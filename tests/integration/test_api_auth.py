"""Integration tests for registration, login and the caller's profile."""

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from businesshub.api.main import create_app
from businesshub.core.security import create_access_token
from businesshub.db.database import get_db


class TestRegisterAndLogin:
    """Test the /api/auth flow end to end."""

    def test_register_returns_token(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "sam@example.com", "password": "secret123", "first_name": "Sam", "last_name": "Lee"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["user"]["role"] == "user"

        me = client.get("/api/auth/user", headers={"Authorization": f"Bearer {data['access_token']}"})
        assert me.status_code == 200
        assert me.json()["email"] == "sam@example.com"

    def test_register_configured_admin(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "boss@example.com", "password": "secret123", "first_name": "Big", "last_name": "Boss"},
        )

        assert response.json()["user"]["role"] == "admin"

    def test_register_duplicate(self, client, regular_user):
        response = client.post(
            "/api/auth/register",
            json={"email": regular_user.email, "password": "secret123", "first_name": "J", "last_name": "D"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_register_invalid_body(self, client):
        response = client.post("/api/auth/register", json={"email": "nope", "password": "1"})

        assert response.status_code == 400
        assert response.json()["errors"]

    def test_login(self, client, regular_user):
        response = client.post("/api/auth/login", json={"email": regular_user.email, "password": "secret123"})

        assert response.status_code == 200
        assert response.json()["user"]["id"] == regular_user.id

    def test_login_wrong_password(self, client, regular_user):
        response = client.post("/api/auth/login", json={"email": regular_user.email, "password": "wrong"})

        assert response.status_code == 401
        assert response.json()["error"] == "authentication_required"


class TestProfile:
    """Test the authenticated profile endpoints."""

    def test_requires_token(self, client):
        assert client.get("/api/auth/user").status_code == 401

    def test_garbage_token(self, client):
        response = client.get("/api/auth/user", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    def test_update_profile(self, client, user_headers):
        response = client.patch("/api/auth/user", json={"first_name": "Janet"}, headers=user_headers)

        assert response.status_code == 200
        assert response.json()["first_name"] == "Janet"

    def test_change_password(self, client, user_headers, regular_user):
        response = client.patch(
            "/api/auth/change-password",
            json={"current_password": "secret123", "new_password": "better-secret"},
            headers=user_headers,
        )
        assert response.status_code == 200

        login = client.post("/api/auth/login", json={"email": regular_user.email, "password": "better-secret"})
        assert login.status_code == 200

    def test_suspended_token_rejected(self, client, make_user, headers_for):
        user = make_user(role="suspended")

        assert client.get("/api/auth/user", headers=headers_for(user)).status_code == 403

    def test_logout(self, client, user_headers):
        response = client.post("/api/auth/logout", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Logged out successfully"


class TestAppSettings:
    """Tokens are signed and verified with the settings the app was built with."""

    @pytest.fixture
    def custom_settings(self, settings):
        return settings.model_copy(update={"jwt_secret_key": SecretStr("another-signing-secret-value")})

    @pytest.fixture
    def custom_client(self, custom_settings, session_factory):
        app = create_app(custom_settings)

        def override_get_db():
            db = session_factory()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        return TestClient(app)

    def test_app_accepts_its_own_tokens(self, custom_client):
        registered = custom_client.post(
            "/api/auth/register",
            json={"email": "kai@example.com", "password": "secret123", "first_name": "Kai", "last_name": "Ng"},
        )
        token = registered.json()["access_token"]

        me = custom_client.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})

        assert me.status_code == 200
        assert me.json()["email"] == "kai@example.com"

    def test_tokens_signed_with_other_secret_rejected(self, custom_client, regular_user, settings):
        token = create_access_token({"sub": regular_user.id, "role": regular_user.role}, settings=settings)

        response = custom_client.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
