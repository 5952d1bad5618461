"""
Enrollment API routes.

Endpoints:
- GET    /api/inscripciones        -> list enrollments (administrador), optional ?estado=
- GET    /api/inscripciones/{id}   -> detail (administrador | entrenador)
- POST   /api/inscripciones        -> enroll a team as "pendiente" (entrenador)
- PUT    /api/inscripciones/{id}   -> approve/reject (administrador)
- DELETE /api/inscripciones/{id}   -> remove (administrador)
"""

from __future__ import annotations

from typing import Optional, Union

from fastapi import APIRouter, Depends, Path, Query, Response, status

from liga.core.contracts import InscripcionRepo
from liga.core.deps import get_inscripcion_repo, get_inscripcion_service
from liga.core.security import require_roles
from liga.models.user import ROLE_ADMINISTRADOR, ROLE_ENTRENADOR
from liga.schemas.common import MessageResponse
from liga.schemas.inscripciones import (
    EstadoInscripcion,
    InscripcionCreate,
    InscripcionListResponse,
    InscripcionOut,
    InscripcionResponse,
    InscripcionUpdate,
)
from liga.services.auth_service import Principal
from liga.services.inscripcion_service import InscripcionService

router = APIRouter(prefix="/api/inscripciones", tags=["inscripciones"])


@router.get(
    "",
    response_model=InscripcionListResponse,
    dependencies=[Depends(require_roles(ROLE_ADMINISTRADOR))],
)
def list_inscripciones(
    estado: Optional[EstadoInscripcion] = Query(None),
    offset: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    repo: InscripcionRepo = Depends(get_inscripcion_repo),
) -> Union[InscripcionListResponse, Response]:
    items = repo.list(estado=estado, offset=offset, limit=limit)  # type: ignore[attr-defined]
    if not items:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return InscripcionListResponse(
        message="Inscripciones obtenidas correctamente",
        inscripciones=[InscripcionOut.model_validate(i) for i in items],
    )


@router.get(
    "/{inscripcion_id}",
    response_model=InscripcionResponse,
    dependencies=[Depends(require_roles(ROLE_ADMINISTRADOR, ROLE_ENTRENADOR))],
)
def get_inscripcion(
    inscripcion_id: int = Path(..., ge=1),
    service: InscripcionService = Depends(get_inscripcion_service),
) -> InscripcionResponse:
    inscripcion = service.get(inscripcion_id)
    return InscripcionResponse(
        message="Inscripción obtenida correctamente",
        inscripcion=InscripcionOut.model_validate(inscripcion),
    )


@router.post("", response_model=InscripcionResponse, status_code=status.HTTP_201_CREATED)
def create_inscripcion(
    payload: InscripcionCreate,
    principal: Principal = Depends(require_roles(ROLE_ENTRENADOR)),
    service: InscripcionService = Depends(get_inscripcion_service),
) -> InscripcionResponse:
    inscripcion = service.create(principal, equipo=payload.equipo, comentario=payload.comentario)
    return InscripcionResponse(
        message="Inscripción creada correctamente",
        inscripcion=InscripcionOut.model_validate(inscripcion),
    )


@router.put("/{inscripcion_id}", response_model=InscripcionResponse)
def update_inscripcion(
    payload: InscripcionUpdate,
    inscripcion_id: int = Path(..., ge=1),
    principal: Principal = Depends(require_roles(ROLE_ADMINISTRADOR)),
    service: InscripcionService = Depends(get_inscripcion_service),
) -> InscripcionResponse:
    inscripcion = service.update(
        principal, inscripcion_id, estado=payload.estado, comentario=payload.comentario
    )
    return InscripcionResponse(
        message="Inscripción actualizada correctamente",
        inscripcion=InscripcionOut.model_validate(inscripcion),
    )


@router.delete("/{inscripcion_id}", response_model=MessageResponse)
def delete_inscripcion(
    inscripcion_id: int = Path(..., ge=1),
    principal: Principal = Depends(require_roles(ROLE_ADMINISTRADOR)),
    service: InscripcionService = Depends(get_inscripcion_service),
) -> MessageResponse:
    service.delete(principal, inscripcion_id)
    return MessageResponse(message="Inscripción eliminada correctamente")
