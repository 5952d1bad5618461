"""
Equipo model.

A team belongs to one center, owns its players (deleted with it) and has at
most one enrollment (inscripcion). Creation/update audit columns record the
principal and time of the last write.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from liga.db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from liga.models.centro import Centro
    from liga.models.inscripcion import Inscripcion
    from liga.models.jugador import Jugador


class Equipo(TimestampMixin, Base):
    __tablename__ = "equipos"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    nombre: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    grupo: Mapped[str | None] = mapped_column(String(16), nullable=True)

    centro_id: Mapped[int | None] = mapped_column(ForeignKey("centros.id"), nullable=True, index=True)

    # Audit
    usuario_id_creacion: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    fecha_creacion: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    usuario_id_actualizacion: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    fecha_actualizacion: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    centro: Mapped["Centro | None"] = relationship("Centro", back_populates="equipos")
    jugadores: Mapped[list["Jugador"]] = relationship(
        "Jugador",
        back_populates="equipo",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Jugador.id",
    )
    inscripcion: Mapped["Inscripcion | None"] = relationship(
        "Inscripcion",
        back_populates="equipo",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Equipo id={self.id!r} nombre={self.nombre!r} centro_id={self.centro_id!r}>"
