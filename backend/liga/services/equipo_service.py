"""
Team service.

Depends only on:
- Protocol interfaces: EquipoRepo, CentroRepo, EstudioRepo
- Principal (liga.services.auth_service) for ability and role gates

Rules:
- Administrators list every team; everyone else only teams with an approved enrollment.
- Creating a team needs the "crear_equipo" token ability; the center and each
  player's cycle are resolved by name and the roster is capped.
- Updating/deleting team N needs "editar_equipo_N" / "borrar_equipo_N".
  Existence is checked before the ability.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from liga.core.contracts import CentroRepo, EquipoRepo, EstudioRepo
from liga.core.errors import ConflictError, ForbiddenError, NotFoundError, UnprocessableError
from liga.core.logging import get_logger
from liga.models.inscripcion import ESTADO_APROBADA
from liga.models.user import ROLE_ADMINISTRADOR
from liga.services import abilities
from liga.services.auth_service import Principal
from liga.services.lookups import resolve_centro_id, resolve_estudio_id

log = get_logger(__name__)


class EquipoService:
    def __init__(
        self,
        equipo_repo: EquipoRepo,
        centro_repo: CentroRepo,
        estudio_repo: EstudioRepo,
        max_jugadores: int = 12,
    ) -> None:
        self.equipo_repo = equipo_repo
        self.centro_repo = centro_repo
        self.estudio_repo = estudio_repo
        self.max_jugadores = max_jugadores

    def list_visible(self, principal: Optional[Principal]) -> Sequence[Any]:
        if principal is not None and principal.has_role(ROLE_ADMINISTRADOR):
            return self.equipo_repo.list_all()
        return self.equipo_repo.list_with_estado(ESTADO_APROBADA)

    def get(self, equipo_id: int) -> Any:
        equipo = self.equipo_repo.get_by_id(equipo_id)
        if equipo is None:
            raise NotFoundError("Equipo no encontrado")
        return equipo

    def create(
        self,
        principal: Principal,
        *,
        nombre: str,
        grupo: Optional[str] = None,
        centro: Optional[str] = None,
        jugadores: Sequence[Mapping[str, Any]] = (),
    ) -> Any:
        if principal.token_cant(abilities.CREAR_EQUIPO):
            raise ForbiddenError(
                "No tienes permisos para crear un nuevo equipo. Revisa si ya creaste uno"
            )
        if len(jugadores) > self.max_jugadores:
            raise UnprocessableError(
                f"Un equipo no puede tener más de {self.max_jugadores} jugadores",
                details={"jugadores": len(jugadores)},
            )

        centro_id = resolve_centro_id(self.centro_repo, centro)

        rows = []
        for jugador in jugadores:
            data = dict(jugador)
            ciclo = data.pop("ciclo", None)
            if ciclo is not None:
                data["estudio_id"] = resolve_estudio_id(self.estudio_repo, ciclo)
            rows.append(data)

        try:
            equipo = self.equipo_repo.create_with_jugadores(
                nombre=nombre,
                grupo=grupo,
                centro_id=centro_id,
                jugadores=rows,
                usuario_id=principal.user_id,
            )
        except ValueError as e:
            raise ConflictError("Ya existe un equipo con ese nombre", details={"nombre": nombre}) from e

        log.info(
            "equipo created",
            extra={"equipo_id": equipo.id, "user_id": principal.user_id, "jugadores": len(rows)},
        )
        return equipo

    def update(self, principal: Principal, equipo_id: int, **fields: Any) -> Any:
        equipo = self.get(equipo_id)
        if principal.token_cant(abilities.editar_equipo(equipo.id)):
            raise ForbiddenError("No tienes permisos para actualizar este equipo")

        try:
            equipo = self.equipo_repo.update(equipo, usuario_id=principal.user_id, **fields)
        except ValueError as e:
            raise ConflictError("Ya existe un equipo con ese nombre", details=fields) from e

        log.info("equipo updated", extra={"equipo_id": equipo.id, "user_id": principal.user_id})
        return equipo

    def delete(self, principal: Principal, equipo_id: int) -> None:
        equipo = self.get(equipo_id)
        if principal.token_cant(abilities.borrar_equipo(equipo.id)):
            raise ForbiddenError("No tienes permisos para borrar este equipo")

        self.equipo_repo.delete(equipo)
        log.info("equipo deleted", extra={"equipo_id": equipo_id, "user_id": principal.user_id})
