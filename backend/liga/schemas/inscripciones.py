"""
Pydantic models for team enrollments.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from liga.schemas.common import Envelope, ORMBase

EstadoInscripcion = Literal["pendiente", "aprobada", "rechazada"]


class InscripcionCreate(BaseModel):
    equipo: str = Field(..., min_length=1, description="Nombre del equipo")
    comentario: Optional[str] = Field(default=None)


class InscripcionUpdate(BaseModel):
    estado: Optional[EstadoInscripcion] = None
    comentario: Optional[str] = None


class InscripcionOut(ORMBase):
    id: int
    equipo_id: int
    estado: str
    comentario: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class InscripcionResponse(Envelope):
    inscripcion: InscripcionOut


class InscripcionListResponse(Envelope):
    inscripciones: list[InscripcionOut] = Field(default_factory=list)
