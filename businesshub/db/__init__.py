"""Database engine, session dependency and schema bootstrap."""

from businesshub.db.database import (
    Base,
    create_db_engine,
    get_db,
    get_engine,
    get_session_factory,
    init_db,
    drop_db,
    utcnow,
)

__all__ = [
    "Base",
    "create_db_engine",
    "get_db",
    "get_engine",
    "get_session_factory",
    "init_db",
    "drop_db",
    "utcnow",
]
