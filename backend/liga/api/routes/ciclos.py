"""
Academic cycle API routes: public listing/detail, administrator-only mutations.
"""

from __future__ import annotations

from typing import Union

from fastapi import APIRouter, Depends, Path, Query, Response, status

from liga.core.deps import get_ciclo_repo
from liga.core.errors import ConflictError, NotFoundError
from liga.core.security import require_roles
from liga.models.user import ROLE_ADMINISTRADOR
from liga.repos.ciclo_repo import SqlAlchemyCicloRepo
from liga.schemas.centros import CicloCreate, CicloListResponse, CicloOut, CicloResponse, CicloUpdate
from liga.schemas.common import MessageResponse

router = APIRouter(prefix="/api/ciclos", tags=["ciclos"])

_admin_only = [Depends(require_roles(ROLE_ADMINISTRADOR))]


def _get_or_404(repo: SqlAlchemyCicloRepo, ciclo_id: int):
    ciclo = repo.get_by_id(ciclo_id)
    if ciclo is None:
        raise NotFoundError("Ciclo no encontrado")
    return ciclo


@router.get("", response_model=CicloListResponse)
def list_ciclos(
    offset: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    repo: SqlAlchemyCicloRepo = Depends(get_ciclo_repo),
) -> Union[CicloListResponse, Response]:
    ciclos = repo.list(offset=offset, limit=limit)
    if not ciclos:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return CicloListResponse(
        message="Ciclos obtenidos correctamente",
        ciclos=[CicloOut.model_validate(c) for c in ciclos],
    )


@router.get("/{ciclo_id}", response_model=CicloResponse)
def get_ciclo(
    ciclo_id: int = Path(..., ge=1),
    repo: SqlAlchemyCicloRepo = Depends(get_ciclo_repo),
) -> CicloResponse:
    ciclo = _get_or_404(repo, ciclo_id)
    return CicloResponse(message="Ciclo obtenido correctamente", ciclo=CicloOut.model_validate(ciclo))


@router.post("", response_model=CicloResponse, status_code=status.HTTP_201_CREATED, dependencies=_admin_only)
def create_ciclo(
    payload: CicloCreate,
    repo: SqlAlchemyCicloRepo = Depends(get_ciclo_repo),
) -> CicloResponse:
    try:
        ciclo = repo.create(**payload.model_dump())
    except ValueError as e:
        raise ConflictError("Ya existe un ciclo con ese nombre", details={"nombre": payload.nombre}) from e
    return CicloResponse(message="Ciclo creado correctamente", ciclo=CicloOut.model_validate(ciclo))


@router.put("/{ciclo_id}", response_model=CicloResponse, dependencies=_admin_only)
def update_ciclo(
    payload: CicloUpdate,
    ciclo_id: int = Path(..., ge=1),
    repo: SqlAlchemyCicloRepo = Depends(get_ciclo_repo),
) -> CicloResponse:
    ciclo = _get_or_404(repo, ciclo_id)
    try:
        ciclo = repo.update(ciclo, **payload.model_dump(exclude_unset=True))
    except ValueError as e:
        raise ConflictError("Ya existe un ciclo con ese nombre", details={"nombre": payload.nombre}) from e
    return CicloResponse(message="Ciclo actualizado correctamente", ciclo=CicloOut.model_validate(ciclo))


@router.delete("/{ciclo_id}", response_model=MessageResponse, dependencies=_admin_only)
def delete_ciclo(
    ciclo_id: int = Path(..., ge=1),
    repo: SqlAlchemyCicloRepo = Depends(get_ciclo_repo),
) -> MessageResponse:
    ciclo = _get_or_404(repo, ciclo_id)
    try:
        repo.delete(ciclo)
    except ValueError as e:
        raise ConflictError("El ciclo tiene estudios asociados") from e
    return MessageResponse(message="Ciclo eliminado correctamente")
