"""
Pytest Configuration and Shared Fixtures.

This module provides common fixtures for all tests:

- engine / db_session: in-memory SQLite database with the full schema
- app / client: FastAPI app wired to the test database (rate limiting off)
- make_user / make_business: factories for seeded rows
- admin_headers / user_headers / owner_headers: bearer auth headers
"""

from typing import Callable, Iterator, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

import businesshub.models  # noqa: F401
from businesshub.api.main import create_app
from businesshub.config.settings import Settings
from businesshub.core.security import create_access_token, hash_password
from businesshub.db.database import Base, create_db_engine, get_db
from businesshub.models import Business, BusinessStatus, Category, User, UserRole

TEST_PASSWORD = "secret123"


@pytest.fixture
def settings() -> Settings:
    """Settings for an isolated in-memory test run."""
    return Settings(
        database_url="sqlite://",
        rate_limit_enabled=False,
        redis_url=None,
        admin_emails=["boss@example.com"],
        app_env="development",
    )


@pytest.fixture
def engine(settings):
    engine = create_db_engine(settings.database_url, settings)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app(settings, session_factory):
    """App whose get_db dependency hands out sessions on the test engine."""
    app = create_app(settings)

    def override_get_db() -> Iterator[Session]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


# =============================================================================
# Factories
# =============================================================================


@pytest.fixture
def make_user(db_session) -> Callable[..., User]:
    counter = {"n": 0}

    def _make_user(
        email: Optional[str] = None,
        role: str = UserRole.USER.value,
        password: str = TEST_PASSWORD,
    ) -> User:
        counter["n"] += 1
        user = User(
            email=email or f"user{counter['n']}@example.com",
            password_hash=hash_password(password),
            first_name="Test",
            last_name=f"User{counter['n']}",
            role=role,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_category(db_session) -> Callable[..., Category]:
    def _make_category(name: str = "Bakeries", slug: Optional[str] = None) -> Category:
        category = Category(name=name, slug=slug or name.lower().replace(" ", "-"))
        db_session.add(category)
        db_session.commit()
        db_session.refresh(category)
        return category

    return _make_category


@pytest.fixture
def make_business(db_session) -> Callable[..., Business]:
    counter = {"n": 0}

    def _make_business(
        title: str = "Test Bakery",
        status: str = BusinessStatus.APPROVED.value,
        owner: Optional[User] = None,
        category: Optional[Category] = None,
        **fields,
    ) -> Business:
        counter["n"] += 1
        business = Business(
            placeid=fields.pop("placeid", f"place_{counter['n']}"),
            slug=fields.pop("slug", f"test-business-{counter['n']}"),
            title=title,
            status=status,
            owner_id=owner.id if owner else None,
            category_id=category.id if category else None,
            images=fields.pop("images", []),
            faqs=fields.pop("faqs", []),
            **fields,
        )
        db_session.add(business)
        db_session.commit()
        db_session.refresh(business)
        return business

    return _make_business


def auth_headers(user: User, settings: Settings) -> dict[str, str]:
    token = create_access_token({"sub": user.id, "role": user.role}, settings=settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_user(make_user) -> User:
    return make_user(email="admin@example.com", role=UserRole.ADMIN.value)


@pytest.fixture
def regular_user(make_user) -> User:
    return make_user(email="jane@example.com")


@pytest.fixture
def owner_user(make_user) -> User:
    return make_user(email="owner@example.com", role=UserRole.BUSINESS_OWNER.value)


@pytest.fixture
def admin_headers(admin_user, settings) -> dict[str, str]:
    return auth_headers(admin_user, settings)


@pytest.fixture
def user_headers(regular_user, settings) -> dict[str, str]:
    return auth_headers(regular_user, settings)


@pytest.fixture
def owner_headers(owner_user, settings) -> dict[str, str]:
    return auth_headers(owner_user, settings)


@pytest.fixture
def headers_for(settings) -> Callable[[User], dict[str, str]]:
    return lambda user: auth_headers(user, settings)
