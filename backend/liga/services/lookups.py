"""
Name-to-record lookups shared by the services and catalog routes.

Clients reference centers, teams and cycles by name. A name that does not
resolve makes the request unprocessable (422) rather than not-found, since the
addressed resource itself exists.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from liga.core.contracts import CentroRepo, CicloRepo, EquipoRepo, EstudioRepo
from liga.core.errors import UnprocessableError

if TYPE_CHECKING:
    from liga.models.equipo import Equipo


def resolve_centro_id(centro_repo: CentroRepo, nombre: Optional[str]) -> Optional[int]:
    if nombre is None:
        return None
    centro = centro_repo.get_by_nombre(nombre)
    if centro is None:
        raise UnprocessableError("Centro no encontrado", details={"centro": nombre})
    return centro.id


def resolve_estudio_id(estudio_repo: EstudioRepo, ciclo: Optional[str]) -> Optional[int]:
    """Cycle name -> id of the first study for that cycle."""
    if ciclo is None:
        return None
    estudio = estudio_repo.get_first_by_ciclo_nombre(ciclo)
    if estudio is None:
        raise UnprocessableError("Ciclo no encontrado o sin estudio asociado", details={"ciclo": ciclo})
    return estudio.id


def resolve_equipo(equipo_repo: EquipoRepo, nombre: str) -> "Equipo":
    equipo = equipo_repo.get_by_nombre(nombre)
    if equipo is None:
        raise UnprocessableError("Equipo no encontrado", details={"equipo": nombre})
    return equipo


def resolve_ciclo_id(ciclo_repo: CicloRepo, nombre: Optional[str]) -> Optional[int]:
    if nombre is None:
        return None
    ciclo = ciclo_repo.get_by_nombre(nombre)
    if ciclo is None:
        raise UnprocessableError("Ciclo no encontrado", details={"ciclo": nombre})
    return ciclo.id
