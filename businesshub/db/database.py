"""
Database Configuration

Supports both SQLite (development, tests) and PostgreSQL (production).
"""
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import Iterator, Optional

import structlog
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from tenacity import (
    RetryError,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from businesshub.config.settings import Settings, get_settings
from businesshub.core.exceptions import ConfigurationError, DatabaseUnavailableError

logger = structlog.get_logger(__name__)

# Base class for models
Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def create_db_engine(database_url: str, settings: Optional[Settings] = None) -> Engine:
    """Build an engine for the URL, applying SQLite or pool options as appropriate."""
    settings = settings or get_settings()
    if not database_url:
        raise ConfigurationError("database_url", "must be set")

    if database_url.startswith("sqlite"):
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # In-memory databases live as long as their single connection
            return create_engine(
                database_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                echo=settings.db_echo,
            )

        db_path = Path(database_url.replace("sqlite:///", "", 1))
        db_path.parent.mkdir(parents=True, exist_ok=True)
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=settings.db_echo,
        )

    return create_engine(
        database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        echo=settings.db_echo,
    )


@lru_cache
def get_engine() -> Engine:
    """Process-wide engine for the configured database_url."""
    settings = get_settings()
    return create_db_engine(settings.database_url, settings)


@lru_cache
def get_session_factory() -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def get_db() -> Iterator[Session]:
    """
    Dependency that provides a database session.

    Usage:
        @router.get("/items")
        async def get_items(db: Session = Depends(get_db)):
            return db.query(Item).all()
    """
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def check_connection(engine: Optional[Engine] = None) -> None:
    """Run a trivial query; raises OperationalError when unreachable."""
    engine = engine or get_engine()
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))


def init_db(engine: Optional[Engine] = None, attempts: Optional[int] = None) -> None:
    """
    Create all tables, retrying with exponential backoff while the database
    is unreachable.

    Raises:
        DatabaseUnavailableError: If every attempt fails
    """
    # Import models so they register with Base.metadata
    import businesshub.models  # noqa: F401

    engine = engine or get_engine()
    attempts = attempts or get_settings().db_connect_retries

    @retry(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
        retry=retry_if_exception_type(OperationalError),
        reraise=False,
    )
    def _create_all() -> None:
        check_connection(engine)
        Base.metadata.create_all(bind=engine)

    try:
        _create_all()
    except RetryError as e:
        logger.error("database_init_failed", attempts=attempts, error=str(e.last_attempt.exception()))
        raise DatabaseUnavailableError(
            "Database unreachable after retries", {"attempts": attempts}
        ) from e

    logger.info("database_initialized", url=engine.url.render_as_string(hide_password=True))


def drop_db(engine: Optional[Engine] = None) -> None:
    """Drop every table. Used by the maintenance script."""
    import businesshub.models  # noqa: F401

    engine = engine or get_engine()
    Base.metadata.drop_all(bind=engine)
    logger.warning("database_dropped", url=engine.url.render_as_string(hide_password=True))
