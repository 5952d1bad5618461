"""
SQLAlchemy session setup with FastAPI-compatible dependency.

- engine: Synchronous engine (SQLite by default).
- SessionLocal: sessionmaker factory bound to the engine.
- get_db(): Yields a session per request and ensures it is closed.
- init_db(): Creates missing tables (local development, tests).

Database URL resolution (priority):
1) Env var DATABASE_URL or DB_URL
2) liga.core.config.get_settings().db_url
"""

from __future__ import annotations

import os
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from liga.core.config import get_settings

__all__ = ["engine", "SessionLocal", "get_db", "init_db", "DATABASE_URL", "SQLALCHEMY_ECHO"]

# -------------------------------
# Configuration
# -------------------------------

DATABASE_URL: str = os.getenv("DATABASE_URL") or os.getenv("DB_URL") or get_settings().db_url

SQLALCHEMY_ECHO: bool = os.getenv("SQLALCHEMY_ECHO", "0").lower() in {"1", "true", "yes", "on"}

# -------------------------------
# Engine
# -------------------------------

# SQLite needs check_same_thread=False for multithreaded apps (e.g., FastAPI with Uvicorn)
if DATABASE_URL.startswith("sqlite"):
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},
        echo=SQLALCHEMY_ECHO,
    )

    # Ensure FK constraints are enforced on every connection (SQLite default is OFF)
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record) -> None:  # pragma: no cover
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()
else:
    # For non-SQLite URLs, enable pool_pre_ping to avoid stale connections
    engine = create_engine(
        DATABASE_URL,
        pool_pre_ping=True,
        echo=SQLALCHEMY_ECHO,
    )

# -------------------------------
# Session Factory
# -------------------------------

# expire_on_commit=False keeps loaded attributes usable after commit in request-scoped sessions
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    class_=Session,
)

# -------------------------------
# FastAPI Dependency
# -------------------------------

def get_db() -> Generator[Session, None, None]:
    """
    Yield a database session and ensure it's closed afterwards.

    Usage in FastAPI:
        db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create any missing tables for every registered model."""
    from liga.db.base import Base  # registers models on import

    Base.metadata.create_all(bind=engine)
