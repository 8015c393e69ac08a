"""Database configuration and session management."""

from __future__ import annotations

import logging
from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from isle.config import Settings, get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


logger = logging.getLogger(__name__)


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def build_engine(settings: Settings) -> Engine:
    """Create the SQLAlchemy engine for the configured ``DATABASE_URL``."""

    url = settings.database_url
    connect_args: dict[str, object] = {}
    if _is_sqlite(url):
        # FastAPI runs sync handlers in a threadpool.
        connect_args["check_same_thread"] = False

    built = create_engine(url, pool_pre_ping=True, connect_args=connect_args)

    if _is_sqlite(url):

        @event.listens_for(built, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, _record) -> None:
            # Weak references rely on ON DELETE SET NULL, which SQLite only
            # honours with foreign key enforcement switched on.
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    logger.debug("Database engine created for dialect %s", built.dialect.name)
    return built


settings = get_settings()
engine = build_engine(settings)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database() -> None:
    """Ensure all ORM models have corresponding database tables."""

    from isle.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


__all__ = ["Base", "SessionLocal", "build_engine", "engine", "get_db", "initialize_database"]
