"""
Dependency wiring for repositories and services.

This module exposes factory functions that construct concrete implementations
behind Protocol-like interfaces. It must not contain business logic.

Provided factories:
- get_user_repo / get_equipo_repo / get_jugador_repo
- get_centro_repo / get_ciclo_repo / get_estudio_repo / get_inscripcion_repo
- get_auth_service
- get_equipo_service / get_jugador_service / get_inscripcion_service

All repositories resolved within one request share the request's Session
(FastAPI caches get_db per request).
"""
from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from liga.core.config import get_settings
from liga.core.contracts import CentroRepo, EquipoRepo, EstudioRepo, InscripcionRepo, JugadorRepo, UserRepo
from liga.db.session import get_db
from liga.repos.centro_repo import SqlAlchemyCentroRepo
from liga.repos.ciclo_repo import SqlAlchemyCicloRepo
from liga.repos.equipo_repo import SqlAlchemyEquipoRepo
from liga.repos.estudio_repo import SqlAlchemyEstudioRepo
from liga.repos.inscripcion_repo import SqlAlchemyInscripcionRepo
from liga.repos.jugador_repo import SqlAlchemyJugadorRepo
from liga.repos.user_repo import SqlAlchemyUserRepo
from liga.services.auth_service import AuthService
from liga.services.equipo_service import EquipoService
from liga.services.inscripcion_service import InscripcionService
from liga.services.jugador_service import JugadorService

__all__ = [
    # repos
    "get_user_repo",
    "get_equipo_repo",
    "get_jugador_repo",
    "get_centro_repo",
    "get_ciclo_repo",
    "get_estudio_repo",
    "get_inscripcion_repo",
    # services
    "get_auth_service",
    "get_equipo_service",
    "get_jugador_service",
    "get_inscripcion_service",
]

# -------------------------------
# Repository Providers
# -------------------------------

def get_user_repo(db: Session = Depends(get_db)) -> UserRepo:
    """Provide a UserRepo bound to the current DB session."""
    return SqlAlchemyUserRepo(db)  # type: ignore[return-value]


def get_equipo_repo(db: Session = Depends(get_db)) -> EquipoRepo:
    """Provide an EquipoRepo bound to the current DB session."""
    return SqlAlchemyEquipoRepo(db)  # type: ignore[return-value]


def get_jugador_repo(db: Session = Depends(get_db)) -> JugadorRepo:
    """Provide a JugadorRepo bound to the current DB session."""
    return SqlAlchemyJugadorRepo(db)  # type: ignore[return-value]


def get_centro_repo(db: Session = Depends(get_db)) -> CentroRepo:
    return SqlAlchemyCentroRepo(db)  # type: ignore[return-value]


def get_ciclo_repo(db: Session = Depends(get_db)) -> SqlAlchemyCicloRepo:
    return SqlAlchemyCicloRepo(db)


def get_estudio_repo(db: Session = Depends(get_db)) -> EstudioRepo:
    return SqlAlchemyEstudioRepo(db)  # type: ignore[return-value]


def get_inscripcion_repo(db: Session = Depends(get_db)) -> InscripcionRepo:
    return SqlAlchemyInscripcionRepo(db)  # type: ignore[return-value]

# -------------------------------
# Services
# -------------------------------

def get_auth_service(user_repo: UserRepo = Depends(get_user_repo)) -> AuthService:
    """Provide an AuthService bound to the request's UserRepo."""
    return AuthService(user_repo)


def get_equipo_service(
    equipo_repo: EquipoRepo = Depends(get_equipo_repo),
    centro_repo: CentroRepo = Depends(get_centro_repo),
    estudio_repo: EstudioRepo = Depends(get_estudio_repo),
) -> EquipoService:
    return EquipoService(
        equipo_repo=equipo_repo,
        centro_repo=centro_repo,
        estudio_repo=estudio_repo,
        max_jugadores=get_settings().max_jugadores,
    )


def get_jugador_service(
    jugador_repo: JugadorRepo = Depends(get_jugador_repo),
    equipo_repo: EquipoRepo = Depends(get_equipo_repo),
    estudio_repo: EstudioRepo = Depends(get_estudio_repo),
    auth_service: AuthService = Depends(get_auth_service),
) -> JugadorService:
    return JugadorService(
        jugador_repo=jugador_repo,
        equipo_repo=equipo_repo,
        estudio_repo=estudio_repo,
        auth_service=auth_service,
        max_jugadores=get_settings().max_jugadores,
    )


def get_inscripcion_service(
    inscripcion_repo: InscripcionRepo = Depends(get_inscripcion_repo),
    equipo_repo: EquipoRepo = Depends(get_equipo_repo),
) -> InscripcionService:
    return InscripcionService(inscripcion_repo=inscripcion_repo, equipo_repo=equipo_repo)
