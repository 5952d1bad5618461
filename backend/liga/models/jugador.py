"""
Jugador model.

A player belongs to a team and optionally to a study program.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from liga.db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from liga.models.equipo import Equipo
    from liga.models.estudio import Estudio


TIPOS_JUGADOR = ("jugador", "capitan", "entrenador")


class Jugador(TimestampMixin, Base):
    __tablename__ = "jugadores"
    __table_args__ = (
        CheckConstraint(f"tipo in {TIPOS_JUGADOR}", name="tipo_valid"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    nombre: Mapped[str] = mapped_column(String(255), nullable=False)
    apellido1: Mapped[str | None] = mapped_column(String(255), nullable=True)
    apellido2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    tipo: Mapped[str] = mapped_column(String(16), nullable=False, default="jugador")
    dni: Mapped[str | None] = mapped_column(String(16), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    telefono: Mapped[str | None] = mapped_column(String(32), nullable=True)

    equipo_id: Mapped[int] = mapped_column(
        ForeignKey("equipos.id", ondelete="CASCADE"), nullable=False, index=True
    )
    estudio_id: Mapped[int | None] = mapped_column(ForeignKey("estudios.id"), nullable=True, index=True)

    equipo: Mapped["Equipo"] = relationship("Equipo", back_populates="jugadores")
    estudio: Mapped["Estudio | None"] = relationship("Estudio", back_populates="jugadores")

    def __repr__(self) -> str:
        return f"<Jugador id={self.id!r} nombre={self.nombre!r} equipo_id={self.equipo_id!r}>"
