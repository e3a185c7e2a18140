"""SQLAlchemy engine/session setup.

When ``DATABASE_URL`` is not set the application runs in demo mode:
``get_db`` yields ``None`` and the repositories fall back to the in-memory
stores attached to the app.
"""

from __future__ import annotations

import logging
import os
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", "").strip()

Base = declarative_base()


def _make_engine(url: str):
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


engine = _make_engine(DATABASE_URL) if DATABASE_URL else None
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine) if engine else None


def is_database_configured() -> bool:
    return SessionLocal is not None


def get_db() -> Iterator[Optional[Session]]:
    """Yield a session per request, or None in demo mode."""
    if SessionLocal is None:
        yield None
        return
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create tables for all registered models (no-op in demo mode)."""
    if engine is None:
        return
    from . import models  # noqa: F401  registers the mappers

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured")
