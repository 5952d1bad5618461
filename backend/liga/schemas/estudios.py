"""
Pydantic models for study records.

An estudio renders as {id, centro, curso, ciclo} with the center and cycle nested.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from liga.schemas.centros import CentroOut, CicloOut
from liga.schemas.common import Envelope, ORMBase, reject_null


class EstudioCreate(BaseModel):
    centro: str = Field(..., min_length=1, description="Nombre del centro")
    ciclo: str = Field(..., min_length=1, description="Nombre del ciclo")
    curso: int = Field(default=1, ge=1, le=2)


class EstudioUpdate(BaseModel):
    centro: Optional[str] = Field(default=None, min_length=1)
    ciclo: Optional[str] = Field(default=None, min_length=1)
    curso: Optional[int] = Field(default=None, ge=1, le=2)

    @field_validator("centro", "ciclo", "curso")
    @classmethod
    def _not_null(cls, v, info: ValidationInfo):
        return reject_null(v, info.field_name)


class EstudioOut(ORMBase):
    id: int
    centro: CentroOut
    curso: int
    ciclo: CicloOut


class EstudioResponse(Envelope):
    estudio: EstudioOut


class EstudioListResponse(Envelope):
    estudios: list[EstudioOut] = Field(default_factory=list)
