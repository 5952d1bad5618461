"""
SQLAlchemy-based Jugador repository.
"""

from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from liga.core.errors import RosterFullError
from liga.models.equipo import Equipo
from liga.models.estudio import Estudio
from liga.models.jugador import Jugador


__all__ = ["SqlAlchemyJugadorRepo"]


class SqlAlchemyJugadorRepo:
    def __init__(self, session: Session) -> None:
        if not isinstance(session, Session):
            raise TypeError("session must be an instance of sqlalchemy.orm.Session")
        self.session = session

    def get_by_id(self, jugador_id: int) -> Optional[Jugador]:
        stmt = (
            select(Jugador)
            .options(
                selectinload(Jugador.equipo),
                selectinload(Jugador.estudio).selectinload(Estudio.centro),
                selectinload(Jugador.estudio).selectinload(Estudio.ciclo),
            )
            .where(Jugador.id == int(jugador_id))
        )
        return self.session.execute(stmt).scalars().first()

    def list_all(self) -> Sequence[Jugador]:
        stmt = (
            select(Jugador)
            .options(
                selectinload(Jugador.estudio).selectinload(Estudio.centro),
                selectinload(Jugador.estudio).selectinload(Estudio.ciclo),
            )
            .order_by(Jugador.id)
        )
        return list(self.session.execute(stmt).scalars().all())

    def create(
        self,
        *,
        equipo_id: int,
        nombre: str,
        apellido1: Optional[str] = None,
        apellido2: Optional[str] = None,
        tipo: str = "jugador",
        dni: Optional[str] = None,
        email: Optional[str] = None,
        telefono: Optional[str] = None,
        estudio_id: Optional[int] = None,
        max_jugadores: Optional[int] = None,
    ) -> Jugador:
        """
        Insert a player. With max_jugadores set, the team row is locked and the
        roster re-counted inside the same transaction; RosterFullError is raised
        (and nothing persisted) when the insert would go past the cap.
        """
        if not isinstance(nombre, str) or not nombre.strip():
            raise ValueError("nombre must be a non-empty string")
        jugador = Jugador(
            equipo_id=int(equipo_id),
            nombre=nombre.strip(),
            apellido1=apellido1,
            apellido2=apellido2,
            tipo=tipo,
            dni=dni,
            email=email,
            telefono=telefono,
            estudio_id=estudio_id,
        )
        try:
            if max_jugadores is not None:
                self._lock_equipo(jugador.equipo_id)
            self.session.add(jugador)
            self.session.flush()
            if max_jugadores is not None:
                self._check_cap(jugador.equipo_id, max_jugadores)
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("Jugador creation failed due to constraint violation") from exc
        return self.get_by_id(jugador.id)  # type: ignore[return-value]

    def update(self, jugador: Jugador, max_jugadores: Optional[int] = None, **fields) -> Jugador:
        moving = "equipo_id" in fields and fields["equipo_id"] != jugador.equipo_id
        try:
            if moving and max_jugadores is not None:
                self._lock_equipo(fields["equipo_id"])
            for k, v in fields.items():
                if hasattr(jugador, k):
                    setattr(jugador, k, v)
            self.session.flush()
            if moving and max_jugadores is not None:
                self._check_cap(jugador.equipo_id, max_jugadores)
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("Jugador update failed due to constraint violation") from exc
        # Reload so equipo/estudio reflect any moved foreign keys
        self.session.expire(jugador)
        return self.get_by_id(jugador.id)  # type: ignore[return-value]

    def delete(self, jugador: Jugador) -> None:
        self.session.delete(jugador)
        self.session.commit()

    # -------------------------------
    # Roster cap
    # -------------------------------

    def _lock_equipo(self, equipo_id: int) -> None:
        # FOR UPDATE serializes concurrent inserts on backends that support it;
        # SQLite ignores it and serializes on its write lock instead.
        stmt = select(Equipo.id).where(Equipo.id == int(equipo_id)).with_for_update()
        self.session.execute(stmt)

    def _check_cap(self, equipo_id: int, max_jugadores: int) -> None:
        stmt = select(func.count(Jugador.id)).where(Jugador.equipo_id == int(equipo_id))
        total = int(self.session.execute(stmt).scalar_one())
        if total > max_jugadores:
            self.session.rollback()
            raise RosterFullError(f"equipo {equipo_id} already has {max_jugadores} jugadores")
