"""
Pydantic models for centers and academic cycles.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from liga.schemas.common import Envelope, ORMBase, reject_null


# -------------------------------
# Centro
# -------------------------------

class CentroCreate(BaseModel):
    nombre: str = Field(..., min_length=1, max_length=255)
    direccion: Optional[str] = Field(default=None, max_length=255)
    telefono: Optional[str] = Field(default=None, max_length=32)
    email: Optional[str] = Field(default=None, max_length=255)


class CentroUpdate(BaseModel):
    nombre: Optional[str] = Field(default=None, min_length=1, max_length=255)
    direccion: Optional[str] = Field(default=None, max_length=255)
    telefono: Optional[str] = Field(default=None, max_length=32)
    email: Optional[str] = Field(default=None, max_length=255)

    @field_validator("nombre")
    @classmethod
    def _not_null(cls, v, info: ValidationInfo):
        return reject_null(v, info.field_name)


class CentroOut(ORMBase):
    id: int
    nombre: str
    direccion: Optional[str] = None
    telefono: Optional[str] = None
    email: Optional[str] = None


class CentroResponse(Envelope):
    centro: CentroOut


class CentroListResponse(Envelope):
    centros: list[CentroOut] = Field(default_factory=list)


# -------------------------------
# Ciclo
# -------------------------------

class CicloCreate(BaseModel):
    nombre: str = Field(..., min_length=1, max_length=255)
    cod_ciclo: Optional[str] = Field(default=None, max_length=32)
    familia: Optional[str] = Field(default=None, max_length=255)


class CicloUpdate(BaseModel):
    nombre: Optional[str] = Field(default=None, min_length=1, max_length=255)
    cod_ciclo: Optional[str] = Field(default=None, max_length=32)
    familia: Optional[str] = Field(default=None, max_length=255)

    @field_validator("nombre")
    @classmethod
    def _not_null(cls, v, info: ValidationInfo):
        return reject_null(v, info.field_name)


class CicloOut(ORMBase):
    id: int
    nombre: str
    cod_ciclo: Optional[str] = None
    familia: Optional[str] = None


class CicloResponse(Envelope):
    ciclo: CicloOut


class CicloListResponse(Envelope):
    ciclos: list[CicloOut] = Field(default_factory=list)
