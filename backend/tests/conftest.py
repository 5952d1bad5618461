"""
Pytest configuration for backend tests.

Provides an isolated SQLite database per test run using a temporary file
(rather than in-memory) to support multiple connections and sessions.

DATABASE_URL is set at import time, before any test module imports liga, so
the engine in liga.db.session and every request-scoped session use this DB.

Fixtures:
- db_engine (session scope): Builds tables on the temp DB and tears down.
- db_session (function scope): A clean Session per test (tables truncated).
- client: TestClient over the full application.
- make_user: factory creating a user with roles/permissions and a bearer token.
- catalog: a centro, a ciclo and an estudio linking them.
"""

from __future__ import annotations

import os
import shutil
import sys
import tempfile
from pathlib import Path
from typing import Generator

import pytest


# Ensure the 'backend' directory is on sys.path so we can import liga modules when running tests from repo root
CURRENT_DIR = Path(__file__).parent
BACKEND_ROOT = (CURRENT_DIR / "..").resolve()
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

_TMP_DIR = tempfile.mkdtemp(prefix="liga-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_TMP_DIR, 'test.db').as_posix()}"
os.environ.setdefault("SQLALCHEMY_ECHO", "0")
os.environ.setdefault("AUTH_HMAC_SECRET", "test-suite-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")


@pytest.fixture(scope="session")
def db_engine() -> "Generator":
    """
    Create all tables on the temporary SQLite database for the whole session.
    """
    from liga.db.session import engine
    from liga.db.base import Base

    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
        shutil.rmtree(_TMP_DIR, ignore_errors=True)


@pytest.fixture(scope="function")
def db_session(db_engine) -> "Generator":
    """
    Provide a fresh Session for each test function.
    Truncates tables before each test for isolation.
    """
    from liga.db.session import SessionLocal
    from liga.db.base import Base

    session = SessionLocal()

    try:
        for table in reversed(Base.metadata.sorted_tables):
            session.execute(table.delete())
        session.commit()
    except Exception:
        session.rollback()
        raise

    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture()
def client(db_session):
    """
    TestClient over the real application. Requests open their own sessions on
    the same database; call db_session.expire_all() before reading their effects.
    """
    from fastapi.testclient import TestClient
    from liga.main import get_application

    return TestClient(get_application())


@pytest.fixture()
def make_user(db_session):
    """
    Factory: make_user(email, roles=(), permissions=(), abilities=("*",)) -> (user, headers)

    Permissions are granted directly to the user.
    """
    from liga.repos.user_repo import SqlAlchemyUserRepo

    repo = SqlAlchemyUserRepo(db_session)

    def _make(email, roles=(), permissions=(), abilities=("*",), is_active=True):
        user = repo.create_user(email.split("@")[0], email, roles=roles, is_active=is_active)
        for perm in permissions:
            repo.grant_permission(user, perm)
        _, plain = repo.create_token(user, abilities=abilities)
        return user, {"Authorization": f"Bearer {plain}"}

    return _make


@pytest.fixture()
def catalog(db_session):
    """
    Seed one centro, one ciclo and the estudio linking them.
    """
    from liga.repos.centro_repo import SqlAlchemyCentroRepo
    from liga.repos.ciclo_repo import SqlAlchemyCicloRepo
    from liga.repos.estudio_repo import SqlAlchemyEstudioRepo

    centro = SqlAlchemyCentroRepo(db_session).create("IES Miguel Catalán", direccion="Isabel la Católica 3")
    ciclo = SqlAlchemyCicloRepo(db_session).create("DAW", cod_ciclo="IFC303", familia="Informática")
    estudio = SqlAlchemyEstudioRepo(db_session).create(centro_id=centro.id, ciclo_id=ciclo.id, curso=2)
    return {"centro": centro, "ciclo": ciclo, "estudio": estudio}
