"""
SQLAlchemy-based Equipo repository.

Implements team CRUD aligned with the EquipoRepo Protocol:
- get_by_id, get_by_nombre
- list_all (every team), list_with_estado (teams whose inscripcion has a given estado)
- create_with_jugadores (team and its initial roster in one transaction)
- update, delete (cascades to jugadores and inscripcion)
- count_jugadores
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from liga.models.equipo import Equipo
from liga.models.inscripcion import Inscripcion
from liga.models.jugador import Jugador


__all__ = ["SqlAlchemyEquipoRepo"]

_JUGADOR_FIELDS = ("nombre", "apellido1", "apellido2", "tipo", "dni", "email", "telefono", "estudio_id")


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SqlAlchemyEquipoRepo:
    """
    Concrete Equipo repository using SQLAlchemy ORM.
    """

    def __init__(self, session: Session) -> None:
        if not isinstance(session, Session):
            raise TypeError("session must be an instance of sqlalchemy.orm.Session")
        self.session = session

    # -------------------------------
    # Lookups
    # -------------------------------

    def _with_relations(self):
        return select(Equipo).options(
            selectinload(Equipo.jugadores).selectinload(Jugador.estudio),
            selectinload(Equipo.centro),
            selectinload(Equipo.inscripcion),
        )

    def get_by_id(self, equipo_id: int) -> Optional[Equipo]:
        stmt = self._with_relations().where(Equipo.id == int(equipo_id))
        return self.session.execute(stmt).scalars().first()

    def get_by_nombre(self, nombre: str) -> Optional[Equipo]:
        if not isinstance(nombre, str) or not nombre.strip():
            return None
        stmt = select(Equipo).where(Equipo.nombre == nombre.strip())
        return self.session.execute(stmt).scalars().first()

    def list_all(self) -> Sequence[Equipo]:
        stmt = self._with_relations().order_by(Equipo.id)
        return list(self.session.execute(stmt).scalars().all())

    def list_with_estado(self, estado: str) -> Sequence[Equipo]:
        stmt = (
            self._with_relations()
            .join(Inscripcion, Inscripcion.equipo_id == Equipo.id)
            .where(Inscripcion.estado == estado)
            .order_by(Equipo.id)
        )
        return list(self.session.execute(stmt).scalars().all())

    def count_jugadores(self, equipo_id: int) -> int:
        stmt = select(func.count(Jugador.id)).where(Jugador.equipo_id == int(equipo_id))
        return int(self.session.execute(stmt).scalar_one())

    # -------------------------------
    # Mutations
    # -------------------------------

    def create_with_jugadores(
        self,
        *,
        nombre: str,
        grupo: Optional[str] = None,
        centro_id: Optional[int] = None,
        jugadores: Sequence[Mapping[str, Any]] = (),
        usuario_id: Optional[int] = None,
    ) -> Equipo:
        """
        Create a team together with its players. Each player mapping may hold
        the Jugador columns (estudio_id already resolved); other keys are ignored.
        """
        if not isinstance(nombre, str) or not nombre.strip():
            raise ValueError("nombre must be a non-empty string")

        equipo = Equipo(
            nombre=nombre.strip(),
            grupo=grupo,
            centro_id=centro_id,
            usuario_id_creacion=usuario_id,
            fecha_creacion=_now(),
        )
        for data in jugadores:
            equipo.jugadores.append(Jugador(**{k: data[k] for k in _JUGADOR_FIELDS if k in data}))

        self.session.add(equipo)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("Equipo creation failed due to uniqueness constraint") from exc
        return self.get_by_id(equipo.id)  # type: ignore[return-value]

    def update(self, equipo: Equipo, *, usuario_id: Optional[int] = None, **fields) -> Equipo:
        for k, v in fields.items():
            if hasattr(equipo, k):
                setattr(equipo, k, v)
        equipo.usuario_id_actualizacion = usuario_id
        equipo.fecha_actualizacion = _now()
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("Equipo update failed due to uniqueness constraint") from exc
        self.session.refresh(equipo)
        return equipo

    def delete(self, equipo: Equipo) -> None:
        self.session.delete(equipo)
        self.session.commit()
