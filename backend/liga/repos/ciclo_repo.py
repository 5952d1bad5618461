"""
SQLAlchemy-based Ciclo repository.
"""

from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from liga.models.ciclo import Ciclo
from liga.models.estudio import Estudio


__all__ = ["SqlAlchemyCicloRepo"]


class SqlAlchemyCicloRepo:
    def __init__(self, session: Session) -> None:
        if not isinstance(session, Session):
            raise TypeError("session must be an instance of sqlalchemy.orm.Session")
        self.session = session

    def get_by_id(self, ciclo_id: int) -> Optional[Ciclo]:
        return self.session.get(Ciclo, int(ciclo_id))

    def get_by_nombre(self, nombre: str) -> Optional[Ciclo]:
        if not isinstance(nombre, str) or not nombre.strip():
            return None
        stmt = select(Ciclo).where(Ciclo.nombre == nombre.strip())
        return self.session.execute(stmt).scalars().first()

    def list(self, offset: int = 0, limit: int = 100) -> Sequence[Ciclo]:
        stmt = select(Ciclo).order_by(Ciclo.nombre).offset(max(0, offset)).limit(max(1, limit))
        return list(self.session.execute(stmt).scalars().all())

    def create(self, nombre: str, cod_ciclo: Optional[str] = None, familia: Optional[str] = None) -> Ciclo:
        if not isinstance(nombre, str) or not nombre.strip():
            raise ValueError("nombre must be a non-empty string")
        ciclo = Ciclo(nombre=nombre.strip(), cod_ciclo=cod_ciclo, familia=familia)
        self.session.add(ciclo)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("Ciclo creation failed due to uniqueness constraint") from exc
        self.session.refresh(ciclo)
        return ciclo

    def update(self, ciclo: Ciclo, **fields) -> Ciclo:
        for k, v in fields.items():
            if hasattr(ciclo, k):
                setattr(ciclo, k, v)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("Ciclo update failed due to uniqueness constraint") from exc
        self.session.refresh(ciclo)
        return ciclo

    def delete(self, ciclo: Ciclo) -> None:
        in_use = self.session.execute(
            select(func.count(Estudio.id)).where(Estudio.ciclo_id == ciclo.id)
        ).scalar_one()
        if in_use:
            raise ValueError("Ciclo is referenced by estudios")
        self.session.delete(ciclo)
        self.session.commit()
