"""
Pydantic models for players.

- JugadorEnEquipo: a player inside a team creation payload (no team reference).
- JugadorCreate: standalone creation, team referenced by name.
- JugadorOut: summary rendering used by listings.
- JugadorDetalleOut: detail rendering with contact data and team name.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from liga.schemas.common import Envelope, ORMBase, reject_null
from liga.schemas.estudios import EstudioOut

TipoJugador = Literal["jugador", "capitan", "entrenador"]


class JugadorEnEquipo(BaseModel):
    nombre: str = Field(..., min_length=1, max_length=255)
    apellido1: Optional[str] = Field(default=None, max_length=255)
    apellido2: Optional[str] = Field(default=None, max_length=255)
    tipo: TipoJugador = Field(default="jugador")
    dni: Optional[str] = Field(default=None, max_length=16)
    email: Optional[str] = Field(default=None, max_length=255)
    telefono: Optional[str] = Field(default=None, max_length=32)
    ciclo: Optional[str] = Field(default=None, description="Nombre del ciclo que estudia")


class JugadorCreate(JugadorEnEquipo):
    equipo: str = Field(..., min_length=1, description="Nombre del equipo")


class JugadorUpdate(BaseModel):
    nombre: Optional[str] = Field(default=None, min_length=1, max_length=255)
    apellido1: Optional[str] = Field(default=None, max_length=255)
    apellido2: Optional[str] = Field(default=None, max_length=255)
    tipo: Optional[TipoJugador] = None
    dni: Optional[str] = Field(default=None, max_length=16)
    email: Optional[str] = Field(default=None, max_length=255)
    telefono: Optional[str] = Field(default=None, max_length=32)
    equipo: Optional[str] = Field(default=None, min_length=1)
    ciclo: Optional[str] = Field(default=None, min_length=1)

    @field_validator("nombre", "tipo", "equipo", "ciclo")
    @classmethod
    def _not_null(cls, v, info: ValidationInfo):
        return reject_null(v, info.field_name)


class JugadorOut(ORMBase):
    id: int
    nombre: str
    apellido1: Optional[str] = None
    apellido2: Optional[str] = None
    tipo: str
    estudio: Optional[EstudioOut] = None


class EquipoRef(ORMBase):
    id: int
    nombre: str


class JugadorDetalleOut(JugadorOut):
    dni: Optional[str] = None
    email: Optional[str] = None
    telefono: Optional[str] = None
    equipo: EquipoRef


class JugadorResponse(Envelope):
    jugador: JugadorDetalleOut


class JugadorListResponse(Envelope):
    jugadores: list[JugadorOut] = Field(default_factory=list)
