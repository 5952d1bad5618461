"""
SQLAlchemy-based Inscripcion repository.
"""

from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from liga.models.inscripcion import ESTADO_PENDIENTE, VALID_ESTADOS, Inscripcion


__all__ = ["SqlAlchemyInscripcionRepo"]


class SqlAlchemyInscripcionRepo:
    def __init__(self, session: Session) -> None:
        if not isinstance(session, Session):
            raise TypeError("session must be an instance of sqlalchemy.orm.Session")
        self.session = session

    def get_by_id(self, inscripcion_id: int) -> Optional[Inscripcion]:
        return self.session.get(Inscripcion, int(inscripcion_id))

    def get_by_equipo_id(self, equipo_id: int) -> Optional[Inscripcion]:
        stmt = select(Inscripcion).where(Inscripcion.equipo_id == int(equipo_id))
        return self.session.execute(stmt).scalars().first()

    def list(self, estado: Optional[str] = None, offset: int = 0, limit: int = 100) -> Sequence[Inscripcion]:
        stmt = select(Inscripcion)
        if estado is not None:
            stmt = stmt.where(Inscripcion.estado == estado)
        stmt = stmt.order_by(Inscripcion.id).offset(max(0, offset)).limit(max(1, limit))
        return list(self.session.execute(stmt).scalars().all())

    def create(self, equipo_id: int, comentario: Optional[str] = None) -> Inscripcion:
        inscripcion = Inscripcion(equipo_id=int(equipo_id), comentario=comentario, estado=ESTADO_PENDIENTE)
        self.session.add(inscripcion)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("Inscripcion creation failed due to uniqueness constraint") from exc
        self.session.refresh(inscripcion)
        return inscripcion

    def update(
        self, inscripcion: Inscripcion, *, estado: Optional[str] = None, comentario: Optional[str] = None
    ) -> Inscripcion:
        if estado is not None:
            if estado not in VALID_ESTADOS:
                raise ValueError(f"estado must be one of {VALID_ESTADOS}")
            inscripcion.estado = estado
        if comentario is not None:
            inscripcion.comentario = comentario
        self.session.commit()
        self.session.refresh(inscripcion)
        return inscripcion

    def delete(self, inscripcion: Inscripcion) -> None:
        self.session.delete(inscripcion)
        self.session.commit()
