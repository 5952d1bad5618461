"""
FastAPI application entrypoint.

- Configures CORS.
- Registers standardized error handlers.
- Initializes structured logging.
- Creates missing tables on startup.
- Includes infra routes (health/version) and aggregates API sub-routers.

Run locally (from backend/):
  uvicorn liga.main:app --reload --port 8000
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, List

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from liga.api.router import router as api_router
from liga.core.config import get_settings
from liga.core.errors import register_exception_handlers
from liga.core.logging import get_logger, init_logging
from liga.db.session import init_db

log = get_logger(__name__)


def _create_cors_origins() -> List[str]:
    """
    Build the list of allowed CORS origins from settings (comma-separated).
    Defaults to "*".
    """
    raw = (get_settings().allow_origins or "*").strip()
    if not raw or raw == "*":
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


def _create_infra_router() -> APIRouter:
    """
    Create a minimal API router with non-business endpoints (health, version).
    """
    router = APIRouter(prefix="/api", tags=["infra"])

    @router.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @router.get("/version")
    def version() -> dict:
        return {"version": os.getenv("APP_VERSION", "0.1.0")}

    return router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_db()
    log.info("application started", extra={"env": get_settings().app_env})
    yield


def get_application() -> FastAPI:
    """
    Construct the FastAPI app with CORS, logging, routers, and error handlers.
    """
    init_logging()

    app = FastAPI(
        title="Liga API",
        version=os.getenv("APP_VERSION", "0.1.0"),
        lifespan=_lifespan,
    )

    origins = _create_cors_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(_create_infra_router())
    app.include_router(api_router)

    register_exception_handlers(app)

    @app.get("/")
    def root() -> dict:
        return {"message": "Liga API", "health": "/api/health"}

    return app


# ASGI application
app = get_application()
