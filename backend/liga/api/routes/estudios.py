"""
Study API routes.

A study ties a cycle to a center and a course year. Clients reference the
center and the cycle by name; unknown names answer 422.
"""

from __future__ import annotations

from typing import Union

from fastapi import APIRouter, Depends, Path, Query, Response, status

from liga.core.contracts import CentroRepo, CicloRepo, EstudioRepo
from liga.core.deps import get_centro_repo, get_ciclo_repo, get_estudio_repo
from liga.core.errors import ConflictError, NotFoundError, UnprocessableError
from liga.core.security import require_roles
from liga.models.user import ROLE_ADMINISTRADOR
from liga.schemas.common import MessageResponse
from liga.schemas.estudios import EstudioCreate, EstudioListResponse, EstudioOut, EstudioResponse, EstudioUpdate
from liga.services.lookups import resolve_centro_id, resolve_ciclo_id

router = APIRouter(prefix="/api/estudios", tags=["estudios"])

_admin_only = [Depends(require_roles(ROLE_ADMINISTRADOR))]


def _get_or_404(repo: EstudioRepo, estudio_id: int):
    estudio = repo.get_by_id(estudio_id)  # type: ignore[attr-defined]
    if estudio is None:
        raise NotFoundError("Estudio no encontrado")
    return estudio


@router.get("", response_model=EstudioListResponse)
def list_estudios(
    offset: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    repo: EstudioRepo = Depends(get_estudio_repo),
) -> Union[EstudioListResponse, Response]:
    estudios = repo.list(offset=offset, limit=limit)  # type: ignore[attr-defined]
    if not estudios:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return EstudioListResponse(
        message="Estudios obtenidos correctamente",
        estudios=[EstudioOut.model_validate(e) for e in estudios],
    )


@router.get("/{estudio_id}", response_model=EstudioResponse)
def get_estudio(
    estudio_id: int = Path(..., ge=1),
    repo: EstudioRepo = Depends(get_estudio_repo),
) -> EstudioResponse:
    estudio = _get_or_404(repo, estudio_id)
    return EstudioResponse(message="Estudio obtenido correctamente", estudio=EstudioOut.model_validate(estudio))


@router.post("", response_model=EstudioResponse, status_code=status.HTTP_201_CREATED, dependencies=_admin_only)
def create_estudio(
    payload: EstudioCreate,
    repo: EstudioRepo = Depends(get_estudio_repo),
    centro_repo: CentroRepo = Depends(get_centro_repo),
    ciclo_repo: CicloRepo = Depends(get_ciclo_repo),
) -> EstudioResponse:
    centro_id = resolve_centro_id(centro_repo, payload.centro)
    ciclo_id = resolve_ciclo_id(ciclo_repo, payload.ciclo)
    try:
        estudio = repo.create(centro_id=centro_id, ciclo_id=ciclo_id, curso=payload.curso)  # type: ignore[attr-defined]
    except ValueError as e:
        raise UnprocessableError(
            "No se pudo crear el estudio", details={"centro": payload.centro, "ciclo": payload.ciclo}
        ) from e
    return EstudioResponse(message="Estudio creado correctamente", estudio=EstudioOut.model_validate(estudio))


@router.put("/{estudio_id}", response_model=EstudioResponse, dependencies=_admin_only)
def update_estudio(
    payload: EstudioUpdate,
    estudio_id: int = Path(..., ge=1),
    repo: EstudioRepo = Depends(get_estudio_repo),
    centro_repo: CentroRepo = Depends(get_centro_repo),
    ciclo_repo: CicloRepo = Depends(get_ciclo_repo),
) -> EstudioResponse:
    estudio = _get_or_404(repo, estudio_id)
    changes = {}
    if payload.centro is not None:
        changes["centro_id"] = resolve_centro_id(centro_repo, payload.centro)
    if payload.ciclo is not None:
        changes["ciclo_id"] = resolve_ciclo_id(ciclo_repo, payload.ciclo)
    if payload.curso is not None:
        changes["curso"] = payload.curso
    try:
        estudio = repo.update(estudio, **changes)  # type: ignore[attr-defined]
    except ValueError as e:
        raise UnprocessableError("No se pudo actualizar el estudio", details={"estudio_id": estudio_id}) from e
    return EstudioResponse(message="Estudio actualizado correctamente", estudio=EstudioOut.model_validate(estudio))


@router.delete("/{estudio_id}", response_model=MessageResponse, dependencies=_admin_only)
def delete_estudio(
    estudio_id: int = Path(..., ge=1),
    repo: EstudioRepo = Depends(get_estudio_repo),
) -> MessageResponse:
    estudio = _get_or_404(repo, estudio_id)
    try:
        repo.delete(estudio)  # type: ignore[attr-defined]
    except ValueError as e:
        raise ConflictError("El estudio tiene jugadores asociados") from e
    return MessageResponse(message="Estudio eliminado correctamente")
