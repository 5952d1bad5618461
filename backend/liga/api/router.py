"""
Shared API router.

- Aggregates sub-routers from liga.api.routes.* modules.
- Uses no top-level prefix; each sub-router owns its /api/... prefix.

Sub-routers included:
- liga.api.routes.equipos        -> /api/equipos
- liga.api.routes.jugadores      -> /api/jugadores
- liga.api.routes.centros        -> /api/centros
- liga.api.routes.ciclos         -> /api/ciclos
- liga.api.routes.estudios       -> /api/estudios
- liga.api.routes.inscripciones  -> /api/inscripciones
"""

from __future__ import annotations

import importlib
from typing import List

from fastapi import APIRouter

__all__ = ["router", "INCLUDED_MODULES", "ROUTE_MODULES"]

router = APIRouter()

ROUTE_MODULES = (
    "liga.api.routes.equipos",
    "liga.api.routes.jugadores",
    "liga.api.routes.centros",
    "liga.api.routes.ciclos",
    "liga.api.routes.estudios",
    "liga.api.routes.inscripciones",
)


def _include_subrouter(parent: APIRouter, module_path: str) -> APIRouter:
    """
    Import a route module and include its 'router'.
    Import errors propagate; a module without an APIRouter is a wiring bug.
    """
    module = importlib.import_module(module_path)
    sub = getattr(module, "router", None)
    if not isinstance(sub, APIRouter):
        raise TypeError(f"{module_path} does not define an APIRouter named 'router'")
    parent.include_router(sub)
    return sub


def _include_known_subrouters(parent: APIRouter) -> List[str]:
    included: List[str] = []
    for mod in ROUTE_MODULES:
        _include_subrouter(parent, mod)
        included.append(mod)
    return included


INCLUDED_MODULES = _include_known_subrouters(router)
