"""
Enrollment service.

A coach enrolls their team ("pendiente"); an administrator approves or
rejects it. Only approved teams show up in the public team listing.
"""

from __future__ import annotations

from typing import Any, Optional

from liga.core.contracts import EquipoRepo, InscripcionRepo
from liga.core.errors import ConflictError, ForbiddenError, NotFoundError, UnprocessableError
from liga.core.logging import get_logger
from liga.services import abilities
from liga.services.auth_service import Principal
from liga.services.lookups import resolve_equipo

log = get_logger(__name__)


class InscripcionService:
    def __init__(self, inscripcion_repo: InscripcionRepo, equipo_repo: EquipoRepo) -> None:
        self.inscripcion_repo = inscripcion_repo
        self.equipo_repo = equipo_repo

    def get(self, inscripcion_id: int) -> Any:
        inscripcion = self.inscripcion_repo.get_by_id(inscripcion_id)
        if inscripcion is None:
            raise NotFoundError("Inscripción no encontrada")
        return inscripcion

    def create(self, principal: Principal, *, equipo: str, comentario: Optional[str] = None) -> Any:
        team = resolve_equipo(self.equipo_repo, equipo)
        if principal.token_cant(abilities.editar_equipo(team.id)):
            raise ForbiddenError("No tienes permisos para inscribir este equipo")
        if self.inscripcion_repo.get_by_equipo_id(team.id) is not None:
            raise ConflictError("El equipo ya tiene una inscripción", details={"equipo": team.nombre})

        try:
            inscripcion = self.inscripcion_repo.create(team.id, comentario=comentario)
        except ValueError as e:
            raise ConflictError("El equipo ya tiene una inscripción", details={"equipo": team.nombre}) from e

        log.info("inscripcion created", extra={"inscripcion_id": inscripcion.id, "equipo_id": team.id})
        return inscripcion

    def update(
        self,
        principal: Principal,
        inscripcion_id: int,
        *,
        estado: Optional[str] = None,
        comentario: Optional[str] = None,
    ) -> Any:
        inscripcion = self.get(inscripcion_id)
        try:
            inscripcion = self.inscripcion_repo.update(inscripcion, estado=estado, comentario=comentario)
        except ValueError as e:
            raise UnprocessableError(str(e)) from e

        log.info(
            "inscripcion updated",
            extra={"inscripcion_id": inscripcion.id, "estado": inscripcion.estado, "user_id": principal.user_id},
        )
        return inscripcion

    def delete(self, principal: Principal, inscripcion_id: int) -> None:
        inscripcion = self.get(inscripcion_id)
        self.inscripcion_repo.delete(inscripcion)
        log.info("inscripcion deleted", extra={"inscripcion_id": inscripcion_id, "user_id": principal.user_id})
