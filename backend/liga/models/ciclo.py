"""
Ciclo model.

An academic cycle (vocational training program). Players reference a cycle
by name; it is resolved to an Estudio through the cycle -> study lookup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from liga.db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from liga.models.estudio import Estudio


class Ciclo(TimestampMixin, Base):
    __tablename__ = "ciclos"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    nombre: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)

    # Official code and professional family, e.g. "IFC303" / "Informática y Comunicaciones"
    cod_ciclo: Mapped[str | None] = mapped_column(String(32), nullable=True)
    familia: Mapped[str | None] = mapped_column(String(255), nullable=True)

    estudios: Mapped[list["Estudio"]] = relationship(
        "Estudio", back_populates="ciclo", order_by="Estudio.id", passive_deletes="all"
    )

    def __repr__(self) -> str:
        return f"<Ciclo id={self.id!r} nombre={self.nombre!r}>"
