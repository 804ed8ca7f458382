"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from app.config import Settings, get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


settings = get_settings()

logger = logging.getLogger(__name__)


def _build_connect_args(settings: Settings) -> dict[str, Any]:
    """Return driver arguments applying the configured store deadline."""

    url = make_url(settings.database_url)
    timeout = settings.store_timeout_seconds
    if url.get_backend_name() == "sqlite":
        return {"timeout": timeout, "check_same_thread": False}
    if url.get_backend_name() in {"postgresql", "mysql"}:
        return {"connect_timeout": max(1, int(timeout))}
    logger.debug(
        "No connect timeout mapping for backend '%s'; relying on pool timeout only",
        url.get_backend_name(),
    )
    return {}


def build_engine(settings: Settings):
    """Create the SQLAlchemy engine for ``settings``."""

    options: dict[str, Any] = {
        "pool_pre_ping": True,
        "connect_args": _build_connect_args(settings),
    }
    if make_url(settings.database_url).get_backend_name() != "sqlite":
        options["pool_timeout"] = settings.store_timeout_seconds
    return create_engine(settings.database_url, **options)


engine = build_engine(settings)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database() -> None:
    """Ensure all ORM models have corresponding database tables."""

    from app.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)


def get_db() -> Generator:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
