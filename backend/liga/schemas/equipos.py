"""
Pydantic models for teams.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from liga.schemas.centros import CentroOut
from liga.schemas.common import Envelope, ORMBase, reject_null
from liga.schemas.jugadores import JugadorEnEquipo, JugadorOut


class EquipoCreate(BaseModel):
    nombre: str = Field(..., min_length=1, max_length=255)
    grupo: Optional[str] = Field(default=None, max_length=16)
    centro: Optional[str] = Field(default=None, min_length=1, description="Nombre del centro")
    jugadores: list[JugadorEnEquipo] = Field(..., description="Plantilla inicial")


class EquipoUpdate(BaseModel):
    nombre: Optional[str] = Field(default=None, min_length=1, max_length=255)
    grupo: Optional[str] = Field(default=None, max_length=16)

    @field_validator("nombre")
    @classmethod
    def _not_null(cls, v, info: ValidationInfo):
        return reject_null(v, info.field_name)


class EquipoOut(ORMBase):
    id: int
    nombre: str
    grupo: Optional[str] = None
    centro: Optional[CentroOut] = None
    jugadores: list[JugadorOut] = Field(default_factory=list)
    usuario_id_creacion: Optional[int] = None
    fecha_creacion: Optional[datetime] = None
    usuario_id_actualizacion: Optional[int] = None
    fecha_actualizacion: Optional[datetime] = None


class EquipoResponse(Envelope):
    equipo: EquipoOut


class EquipoListResponse(Envelope):
    equipos: list[EquipoOut] = Field(default_factory=list)
