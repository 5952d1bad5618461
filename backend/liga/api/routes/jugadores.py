"""
Player API routes.

Endpoints:
- GET    /api/jugadores        -> list players (204 when none)
- GET    /api/jugadores/{id}   -> player detail
- POST   /api/jugadores        -> add a player to a team (entrenador + "create player")
- PUT    /api/jugadores/{id}   -> update a player (administrador | entrenador)
- DELETE /api/jugadores/{id}   -> delete a player (administrador | entrenador)
"""

from __future__ import annotations

from typing import Union

from fastapi import APIRouter, Depends, Path, Response, status

from liga.core.deps import get_jugador_service
from liga.core.security import get_current_principal, require_permission, require_roles
from liga.models.user import PERMISSION_CREATE_PLAYER, ROLE_ADMINISTRADOR, ROLE_ENTRENADOR
from liga.schemas.common import MessageResponse
from liga.schemas.jugadores import (
    JugadorCreate,
    JugadorDetalleOut,
    JugadorListResponse,
    JugadorOut,
    JugadorResponse,
    JugadorUpdate,
)
from liga.services.auth_service import Principal
from liga.services.jugador_service import JugadorService

router = APIRouter(prefix="/api/jugadores", tags=["jugadores"])


@router.get("", response_model=JugadorListResponse)
def list_jugadores(
    service: JugadorService = Depends(get_jugador_service),
) -> Union[JugadorListResponse, Response]:
    jugadores = service.list_all()
    if not jugadores:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return JugadorListResponse(
        message="Jugadores obtenidos correctamente",
        jugadores=[JugadorOut.model_validate(j) for j in jugadores],
    )


@router.get("/{jugador_id}", response_model=JugadorResponse)
def get_jugador(
    jugador_id: int = Path(..., ge=1),
    service: JugadorService = Depends(get_jugador_service),
) -> JugadorResponse:
    jugador = service.get(jugador_id)
    return JugadorResponse(
        message="Jugador obtenido correctamente", jugador=JugadorDetalleOut.model_validate(jugador)
    )


@router.post(
    "",
    response_model=JugadorResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[
        Depends(require_roles(ROLE_ENTRENADOR)),
        Depends(require_permission(PERMISSION_CREATE_PLAYER)),
    ],
)
def create_jugador(
    payload: JugadorCreate,
    principal: Principal = Depends(get_current_principal),
    service: JugadorService = Depends(get_jugador_service),
) -> JugadorResponse:
    """
    Add a player to a team by team name.

    A full team answers 409 and takes the "create player" permission away.
    """
    jugador = service.create(principal, **payload.model_dump())
    return JugadorResponse(
        message="Jugador creado correctamente", jugador=JugadorDetalleOut.model_validate(jugador)
    )


@router.put("/{jugador_id}", response_model=JugadorResponse)
def update_jugador(
    payload: JugadorUpdate,
    jugador_id: int = Path(..., ge=1),
    principal: Principal = Depends(require_roles(ROLE_ADMINISTRADOR, ROLE_ENTRENADOR)),
    service: JugadorService = Depends(get_jugador_service),
) -> JugadorResponse:
    jugador = service.update(principal, jugador_id, **payload.model_dump(exclude_unset=True))
    return JugadorResponse(
        message="Jugador actualizado correctamente", jugador=JugadorDetalleOut.model_validate(jugador)
    )


@router.delete("/{jugador_id}", response_model=MessageResponse)
def delete_jugador(
    jugador_id: int = Path(..., ge=1),
    principal: Principal = Depends(require_roles(ROLE_ADMINISTRADOR, ROLE_ENTRENADOR)),
    service: JugadorService = Depends(get_jugador_service),
) -> MessageResponse:
    service.delete(principal, jugador_id)
    return MessageResponse(message="Jugador eliminado correctamente")
