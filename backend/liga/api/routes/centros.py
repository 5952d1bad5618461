"""
Center API routes.

Endpoints:
- GET    /api/centros        -> list centers (204 when none)
- GET    /api/centros/{id}   -> center detail
- POST   /api/centros        -> create (administrador)
- PUT    /api/centros/{id}   -> update (administrador)
- DELETE /api/centros/{id}   -> delete, refused while referenced (administrador)

Catalog routes delegate straight to the repository.
"""

from __future__ import annotations

from typing import Union

from fastapi import APIRouter, Depends, Path, Query, Response, status

from liga.core.contracts import CentroRepo
from liga.core.deps import get_centro_repo
from liga.core.errors import ConflictError, NotFoundError
from liga.core.security import require_roles
from liga.models.user import ROLE_ADMINISTRADOR
from liga.schemas.centros import CentroCreate, CentroListResponse, CentroOut, CentroResponse, CentroUpdate
from liga.schemas.common import MessageResponse

router = APIRouter(prefix="/api/centros", tags=["centros"])

_admin_only = [Depends(require_roles(ROLE_ADMINISTRADOR))]


def _get_or_404(repo: CentroRepo, centro_id: int):
    centro = repo.get_by_id(centro_id)
    if centro is None:
        raise NotFoundError("Centro no encontrado")
    return centro


@router.get("", response_model=CentroListResponse)
def list_centros(
    offset: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    repo: CentroRepo = Depends(get_centro_repo),
) -> Union[CentroListResponse, Response]:
    centros = repo.list(offset=offset, limit=limit)  # type: ignore[attr-defined]
    if not centros:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return CentroListResponse(
        message="Centros obtenidos correctamente",
        centros=[CentroOut.model_validate(c) for c in centros],
    )


@router.get("/{centro_id}", response_model=CentroResponse)
def get_centro(
    centro_id: int = Path(..., ge=1),
    repo: CentroRepo = Depends(get_centro_repo),
) -> CentroResponse:
    centro = _get_or_404(repo, centro_id)
    return CentroResponse(message="Centro obtenido correctamente", centro=CentroOut.model_validate(centro))


@router.post("", response_model=CentroResponse, status_code=status.HTTP_201_CREATED, dependencies=_admin_only)
def create_centro(
    payload: CentroCreate,
    repo: CentroRepo = Depends(get_centro_repo),
) -> CentroResponse:
    try:
        centro = repo.create(**payload.model_dump())  # type: ignore[attr-defined]
    except ValueError as e:
        raise ConflictError("Ya existe un centro con ese nombre", details={"nombre": payload.nombre}) from e
    return CentroResponse(message="Centro creado correctamente", centro=CentroOut.model_validate(centro))


@router.put("/{centro_id}", response_model=CentroResponse, dependencies=_admin_only)
def update_centro(
    payload: CentroUpdate,
    centro_id: int = Path(..., ge=1),
    repo: CentroRepo = Depends(get_centro_repo),
) -> CentroResponse:
    centro = _get_or_404(repo, centro_id)
    try:
        centro = repo.update(centro, **payload.model_dump(exclude_unset=True))  # type: ignore[attr-defined]
    except ValueError as e:
        raise ConflictError("Ya existe un centro con ese nombre", details={"nombre": payload.nombre}) from e
    return CentroResponse(message="Centro actualizado correctamente", centro=CentroOut.model_validate(centro))


@router.delete("/{centro_id}", response_model=MessageResponse, dependencies=_admin_only)
def delete_centro(
    centro_id: int = Path(..., ge=1),
    repo: CentroRepo = Depends(get_centro_repo),
) -> MessageResponse:
    centro = _get_or_404(repo, centro_id)
    try:
        repo.delete(centro)  # type: ignore[attr-defined]
    except ValueError as e:
        raise ConflictError("El centro tiene equipos o estudios asociados") from e
    return MessageResponse(message="Centro eliminado correctamente")
