"""
Team API routes.

Endpoints:
- GET    /api/equipos        -> list visible teams (204 when none)
- GET    /api/equipos/{id}   -> team detail
- POST   /api/equipos        -> create a team with its roster (entrenador)
- PUT    /api/equipos/{id}   -> update a team (administrador | entrenador)
- DELETE /api/equipos/{id}   -> delete a team and its players (administrador | entrenador)

Routes are thin: they delegate to EquipoService and return Pydantic envelopes.
"""

from __future__ import annotations

from typing import Optional, Union

from fastapi import APIRouter, Depends, Path, Response, status

from liga.core.deps import get_equipo_service
from liga.core.security import get_optional_principal, require_roles
from liga.models.user import ROLE_ADMINISTRADOR, ROLE_ENTRENADOR
from liga.schemas.common import MessageResponse
from liga.schemas.equipos import (
    EquipoCreate,
    EquipoListResponse,
    EquipoOut,
    EquipoResponse,
    EquipoUpdate,
)
from liga.services.auth_service import Principal
from liga.services.equipo_service import EquipoService

router = APIRouter(prefix="/api/equipos", tags=["equipos"])


@router.get("", response_model=EquipoListResponse)
def list_equipos(
    principal: Optional[Principal] = Depends(get_optional_principal),
    service: EquipoService = Depends(get_equipo_service),
) -> Union[EquipoListResponse, Response]:
    """
    Administrators see every team; everyone else only approved ones.
    """
    equipos = service.list_visible(principal)
    if not equipos:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return EquipoListResponse(
        message="Equipos obtenidos correctamente",
        equipos=[EquipoOut.model_validate(e) for e in equipos],
    )


@router.get(
    "/{equipo_id}",
    response_model=EquipoResponse,
    dependencies=[Depends(get_optional_principal)],
)
def get_equipo(
    equipo_id: int = Path(..., ge=1),
    service: EquipoService = Depends(get_equipo_service),
) -> EquipoResponse:
    equipo = service.get(equipo_id)
    return EquipoResponse(message="Equipo obtenido correctamente", equipo=EquipoOut.model_validate(equipo))


@router.post("", response_model=EquipoResponse, status_code=status.HTTP_201_CREATED)
def create_equipo(
    payload: EquipoCreate,
    principal: Principal = Depends(require_roles(ROLE_ENTRENADOR)),
    service: EquipoService = Depends(get_equipo_service),
) -> EquipoResponse:
    """
    Create a team and its initial roster. Needs the "crear_equipo" token ability.
    """
    equipo = service.create(
        principal,
        nombre=payload.nombre,
        grupo=payload.grupo,
        centro=payload.centro,
        jugadores=[j.model_dump() for j in payload.jugadores],
    )
    return EquipoResponse(message="Equipo creado correctamente", equipo=EquipoOut.model_validate(equipo))


@router.put("/{equipo_id}", response_model=EquipoResponse)
def update_equipo(
    payload: EquipoUpdate,
    equipo_id: int = Path(..., ge=1),
    principal: Principal = Depends(require_roles(ROLE_ADMINISTRADOR, ROLE_ENTRENADOR)),
    service: EquipoService = Depends(get_equipo_service),
) -> EquipoResponse:
    equipo = service.update(principal, equipo_id, **payload.model_dump(exclude_unset=True))
    return EquipoResponse(message="Equipo actualizado correctamente", equipo=EquipoOut.model_validate(equipo))


@router.delete("/{equipo_id}", response_model=MessageResponse)
def delete_equipo(
    equipo_id: int = Path(..., ge=1),
    principal: Principal = Depends(require_roles(ROLE_ADMINISTRADOR, ROLE_ENTRENADOR)),
    service: EquipoService = Depends(get_equipo_service),
) -> MessageResponse:
    service.delete(principal, equipo_id)
    return MessageResponse(message="Equipo eliminado correctamente")
