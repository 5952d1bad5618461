"""
SQLAlchemy-based Centro repository.

Operations: get_by_id, get_by_nombre, list, create, update, delete.
Deleting a center still referenced by teams or studies raises ValueError.
"""

from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from liga.models.centro import Centro
from liga.models.equipo import Equipo
from liga.models.estudio import Estudio


__all__ = ["SqlAlchemyCentroRepo"]


class SqlAlchemyCentroRepo:
    def __init__(self, session: Session) -> None:
        if not isinstance(session, Session):
            raise TypeError("session must be an instance of sqlalchemy.orm.Session")
        self.session = session

    def get_by_id(self, centro_id: int) -> Optional[Centro]:
        return self.session.get(Centro, int(centro_id))

    def get_by_nombre(self, nombre: str) -> Optional[Centro]:
        if not isinstance(nombre, str) or not nombre.strip():
            return None
        stmt = select(Centro).where(Centro.nombre == nombre.strip())
        return self.session.execute(stmt).scalars().first()

    def list(self, offset: int = 0, limit: int = 100) -> Sequence[Centro]:
        stmt = select(Centro).order_by(Centro.nombre).offset(max(0, offset)).limit(max(1, limit))
        return list(self.session.execute(stmt).scalars().all())

    def create(
        self,
        nombre: str,
        direccion: Optional[str] = None,
        telefono: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Centro:
        if not isinstance(nombre, str) or not nombre.strip():
            raise ValueError("nombre must be a non-empty string")
        centro = Centro(nombre=nombre.strip(), direccion=direccion, telefono=telefono, email=email)
        self.session.add(centro)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("Centro creation failed due to uniqueness constraint") from exc
        self.session.refresh(centro)
        return centro

    def update(self, centro: Centro, **fields) -> Centro:
        for k, v in fields.items():
            if hasattr(centro, k):
                setattr(centro, k, v)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("Centro update failed due to uniqueness constraint") from exc
        self.session.refresh(centro)
        return centro

    def is_referenced(self, centro: Centro) -> bool:
        equipos = self.session.execute(
            select(func.count(Equipo.id)).where(Equipo.centro_id == centro.id)
        ).scalar_one()
        estudios = self.session.execute(
            select(func.count(Estudio.id)).where(Estudio.centro_id == centro.id)
        ).scalar_one()
        return bool(equipos or estudios)

    def delete(self, centro: Centro) -> None:
        if self.is_referenced(centro):
            raise ValueError("Centro is referenced by equipos or estudios")
        self.session.delete(centro)
        self.session.commit()
