"""
Inscripcion model.

A team's enrollment in the competition. Only teams whose enrollment is
"aprobada" are publicly listed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from liga.db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from liga.models.equipo import Equipo


ESTADO_PENDIENTE = "pendiente"
ESTADO_APROBADA = "aprobada"
ESTADO_RECHAZADA = "rechazada"
VALID_ESTADOS = (ESTADO_PENDIENTE, ESTADO_APROBADA, ESTADO_RECHAZADA)


class Inscripcion(TimestampMixin, Base):
    __tablename__ = "inscripciones"
    __table_args__ = (
        CheckConstraint(f"estado in {VALID_ESTADOS}", name="estado_valid"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # One enrollment per team
    equipo_id: Mapped[int] = mapped_column(
        ForeignKey("equipos.id", ondelete="CASCADE"), nullable=False, unique=True, index=True
    )
    comentario: Mapped[str | None] = mapped_column(Text, nullable=True)
    estado: Mapped[str] = mapped_column(String(16), nullable=False, default=ESTADO_PENDIENTE)

    equipo: Mapped["Equipo"] = relationship("Equipo", back_populates="inscripcion")

    def __repr__(self) -> str:
        return f"<Inscripcion id={self.id!r} equipo_id={self.equipo_id!r} estado={self.estado!r}>"
