"""
Centro model.

An educational center (institution) that owns teams and offers studies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from liga.db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from liga.models.equipo import Equipo
    from liga.models.estudio import Estudio


class Centro(TimestampMixin, Base):
    __tablename__ = "centros"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # Human-readable name, used by clients to reference the center
    nombre: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)

    direccion: Mapped[str | None] = mapped_column(String(255), nullable=True)
    telefono: Mapped[str | None] = mapped_column(String(32), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    equipos: Mapped[list["Equipo"]] = relationship("Equipo", back_populates="centro", passive_deletes="all")
    estudios: Mapped[list["Estudio"]] = relationship("Estudio", back_populates="centro", passive_deletes="all")

    def __repr__(self) -> str:
        return f"<Centro id={self.id!r} nombre={self.nombre!r}>"
