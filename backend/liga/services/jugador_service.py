"""
Player service.

Depends only on:
- Protocol interfaces: JugadorRepo, EquipoRepo, EstudioRepo
- AuthService for the side-effecting permission grant/revoke

Behavior of create(...):
1) Resolve the team by name (422 when unknown).
2) Require the "crear_jugador_equipo_<team name>" token ability (403).
3) Enforce the roster cap (checked up front and again inside the insert
   transaction): a full team revokes the principal's
   "create player" permission and answers 409.
4) Resolve the optional cycle name to a study record.
5) Persist and return the player.

Deleting a player gives "create player" back to the principal.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from liga.core.contracts import EquipoRepo, EstudioRepo, JugadorRepo
from liga.core.errors import ConflictError, ForbiddenError, NotFoundError, RosterFullError, UnprocessableError
from liga.core.logging import get_logger
from liga.models.user import PERMISSION_CREATE_PLAYER
from liga.services import abilities
from liga.services.auth_service import AuthService, Principal
from liga.services.lookups import resolve_equipo, resolve_estudio_id

log = get_logger(__name__)

# Plain columns a client may change on update
_UPDATABLE_FIELDS = ("nombre", "apellido1", "apellido2", "tipo", "dni", "email", "telefono")


class JugadorService:
    def __init__(
        self,
        jugador_repo: JugadorRepo,
        equipo_repo: EquipoRepo,
        estudio_repo: EstudioRepo,
        auth_service: AuthService,
        max_jugadores: int = 12,
    ) -> None:
        self.jugador_repo = jugador_repo
        self.equipo_repo = equipo_repo
        self.estudio_repo = estudio_repo
        self.auth_service = auth_service
        self.max_jugadores = max_jugadores

    def list_all(self) -> Sequence[Any]:
        return self.jugador_repo.list_all()

    def get(self, jugador_id: int) -> Any:
        jugador = self.jugador_repo.get_by_id(jugador_id)
        if jugador is None:
            raise NotFoundError("Jugador no encontrado")
        return jugador

    def create(
        self,
        principal: Principal,
        *,
        equipo: str,
        nombre: str,
        ciclo: Optional[str] = None,
        **fields: Any,
    ) -> Any:
        team = resolve_equipo(self.equipo_repo, equipo)

        if principal.token_cant(abilities.crear_jugador_equipo(team.nombre)):
            raise ForbiddenError("No tienes permisos para crear un nuevo jugador en este equipo")

        if self.equipo_repo.count_jugadores(team.id) >= self.max_jugadores:
            raise self._roster_full(principal, team)

        estudio_id = resolve_estudio_id(self.estudio_repo, ciclo)

        try:
            jugador = self.jugador_repo.create(
                equipo_id=team.id,
                nombre=nombre,
                estudio_id=estudio_id,
                max_jugadores=self.max_jugadores,
                **{k: v for k, v in fields.items() if k in _UPDATABLE_FIELDS},
            )
        except RosterFullError as e:
            # Another request filled the last slot after the count above
            raise self._roster_full(principal, team) from e
        except ValueError as e:
            raise UnprocessableError("No se pudo crear el jugador", details={"equipo": team.nombre}) from e

        log.info(
            "jugador created",
            extra={"jugador_id": jugador.id, "equipo_id": team.id, "user_id": principal.user_id},
        )
        return jugador

    def _roster_full(self, principal: Principal, team: Any) -> ConflictError:
        self.auth_service.revoke_permission_to(principal, PERMISSION_CREATE_PLAYER)
        log.warning(
            "roster full",
            extra={"equipo_id": team.id, "user_id": principal.user_id, "max": self.max_jugadores},
        )
        return ConflictError(
            "Equipo lleno | No puedes crear más jugadores",
            details={"equipo": team.nombre, "max_jugadores": self.max_jugadores},
        )

    def update(
        self,
        principal: Principal,
        jugador_id: int,
        *,
        equipo: Optional[str] = None,
        ciclo: Optional[str] = None,
        **fields: Any,
    ) -> Any:
        jugador = self.get(jugador_id)
        if principal.token_cant(abilities.actualizar_jugador_equipo(jugador.equipo_id)):
            raise ForbiddenError("No tienes permisos para actualizar a este jugador")

        changes = {k: v for k, v in fields.items() if k in _UPDATABLE_FIELDS}
        target = None
        if equipo is not None:
            target = resolve_equipo(self.equipo_repo, equipo)
            if target.id != jugador.equipo_id and self.equipo_repo.count_jugadores(target.id) >= self.max_jugadores:
                raise self._move_full(target)
            changes["equipo_id"] = target.id
        if ciclo is not None:
            changes["estudio_id"] = resolve_estudio_id(self.estudio_repo, ciclo)

        try:
            jugador = self.jugador_repo.update(jugador, max_jugadores=self.max_jugadores, **changes)
        except RosterFullError as e:
            raise self._move_full(target) from e
        except ValueError as e:
            raise UnprocessableError("No se pudo actualizar el jugador", details={"jugador_id": jugador_id}) from e

        log.info("jugador updated", extra={"jugador_id": jugador.id, "user_id": principal.user_id})
        return jugador

    def _move_full(self, target: Any) -> ConflictError:
        return ConflictError(
            "Equipo lleno | No puedes mover más jugadores a este equipo",
            details={"equipo": target.nombre, "max_jugadores": self.max_jugadores},
        )

    def delete(self, principal: Principal, jugador_id: int) -> None:
        jugador = self.get(jugador_id)
        if principal.token_cant(abilities.borrar_jugador_equipo(jugador.equipo_id)):
            raise ForbiddenError("No tienes permisos para borrar a este jugador")

        self.jugador_repo.delete(jugador)
        self.auth_service.give_permission_to(principal, PERMISSION_CREATE_PLAYER)
        log.info("jugador deleted", extra={"jugador_id": jugador_id, "user_id": principal.user_id})
