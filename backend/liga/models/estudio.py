"""
Estudio model.

A study record: a given cycle taught at a given center, for a course year.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from liga.db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from liga.models.centro import Centro
    from liga.models.ciclo import Ciclo
    from liga.models.jugador import Jugador


class Estudio(TimestampMixin, Base):
    __tablename__ = "estudios"
    __table_args__ = (
        CheckConstraint("curso >= 1", name="curso_min"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    centro_id: Mapped[int] = mapped_column(ForeignKey("centros.id"), nullable=False, index=True)
    ciclo_id: Mapped[int] = mapped_column(ForeignKey("ciclos.id"), nullable=False, index=True)
    curso: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    centro: Mapped["Centro"] = relationship("Centro", back_populates="estudios")
    ciclo: Mapped["Ciclo"] = relationship("Ciclo", back_populates="estudios")
    jugadores: Mapped[list["Jugador"]] = relationship("Jugador", back_populates="estudio", passive_deletes="all")

    def __repr__(self) -> str:
        return f"<Estudio id={self.id!r} centro_id={self.centro_id!r} ciclo_id={self.ciclo_id!r} curso={self.curso!r}>"
