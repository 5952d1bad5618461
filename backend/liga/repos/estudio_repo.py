"""
SQLAlchemy-based Estudio repository.

Besides CRUD, provides the cycle -> study lookup used when players are
registered with a cycle name: get_first_by_ciclo_nombre(nombre).
"""

from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from liga.models.ciclo import Ciclo
from liga.models.estudio import Estudio
from liga.models.jugador import Jugador


__all__ = ["SqlAlchemyEstudioRepo"]


class SqlAlchemyEstudioRepo:
    def __init__(self, session: Session) -> None:
        if not isinstance(session, Session):
            raise TypeError("session must be an instance of sqlalchemy.orm.Session")
        self.session = session

    def get_by_id(self, estudio_id: int) -> Optional[Estudio]:
        return self.session.get(Estudio, int(estudio_id))

    def get_first_by_ciclo_nombre(self, nombre: str) -> Optional[Estudio]:
        """
        Resolve a cycle name to its first study record (lowest id), or None
        if the cycle does not exist or has no study.
        """
        if not isinstance(nombre, str) or not nombre.strip():
            return None
        stmt = (
            select(Estudio)
            .join(Ciclo, Estudio.ciclo_id == Ciclo.id)
            .where(Ciclo.nombre == nombre.strip())
            .order_by(Estudio.id)
            .limit(1)
        )
        return self.session.execute(stmt).scalars().first()

    def list(self, offset: int = 0, limit: int = 100) -> Sequence[Estudio]:
        stmt = (
            select(Estudio)
            .options(selectinload(Estudio.centro), selectinload(Estudio.ciclo))
            .order_by(Estudio.id)
            .offset(max(0, offset))
            .limit(max(1, limit))
        )
        return list(self.session.execute(stmt).scalars().all())

    def create(self, centro_id: int, ciclo_id: int, curso: int = 1) -> Estudio:
        estudio = Estudio(centro_id=int(centro_id), ciclo_id=int(ciclo_id), curso=int(curso))
        self.session.add(estudio)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("Estudio creation failed due to constraint violation") from exc
        self.session.refresh(estudio)
        return estudio

    def update(self, estudio: Estudio, **fields) -> Estudio:
        for k, v in fields.items():
            if hasattr(estudio, k):
                setattr(estudio, k, v)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("Estudio update failed due to constraint violation") from exc
        self.session.refresh(estudio)
        return estudio

    def delete(self, estudio: Estudio) -> None:
        in_use = self.session.execute(
            select(func.count(Jugador.id)).where(Jugador.estudio_id == estudio.id)
        ).scalar_one()
        if in_use:
            raise ValueError("Estudio is referenced by jugadores")
        self.session.delete(estudio)
        self.session.commit()
