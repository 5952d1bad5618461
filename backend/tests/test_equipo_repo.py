import os
import sys

import pytest

# Ensure the 'backend' directory is on sys.path so imports work from repo root
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from sqlalchemy import func, select  # noqa: E402

from liga.core.errors import RosterFullError  # noqa: E402
from liga.models.inscripcion import Inscripcion  # noqa: E402
from liga.models.jugador import Jugador  # noqa: E402
from liga.repos.equipo_repo import SqlAlchemyEquipoRepo  # noqa: E402
from liga.repos.inscripcion_repo import SqlAlchemyInscripcionRepo  # noqa: E402
from liga.repos.jugador_repo import SqlAlchemyJugadorRepo  # noqa: E402
from liga.repos.user_repo import SqlAlchemyUserRepo  # noqa: E402


def test_create_with_jugadores_persists_roster_and_audit(db_session, catalog):
    user = SqlAlchemyUserRepo(db_session).create_user("Ana", "ana@example.com")
    repo = SqlAlchemyEquipoRepo(db_session)

    equipo = repo.create_with_jugadores(
        nombre="Rayos",
        grupo="A",
        centro_id=catalog["centro"].id,
        jugadores=[
            {"nombre": "Ana", "tipo": "capitan", "estudio_id": catalog["estudio"].id},
            {"nombre": "Luis", "unknown": "ignored"},
        ],
        usuario_id=user.id,
    )

    assert equipo.id is not None
    assert equipo.centro.nombre == catalog["centro"].nombre
    assert [j.nombre for j in equipo.jugadores] == ["Ana", "Luis"]
    assert equipo.jugadores[0].estudio.id == catalog["estudio"].id
    assert equipo.jugadores[1].tipo == "jugador"
    assert equipo.usuario_id_creacion == user.id
    assert equipo.fecha_creacion is not None
    assert equipo.fecha_actualizacion is None
    assert repo.count_jugadores(equipo.id) == 2

    with pytest.raises(ValueError):
        repo.create_with_jugadores(nombre="Rayos")


def test_update_stamps_audit_and_rejects_duplicate_name(db_session):
    repo = SqlAlchemyEquipoRepo(db_session)
    rayos = repo.create_with_jugadores(nombre="Rayos")
    repo.create_with_jugadores(nombre="Truenos")

    updated = repo.update(rayos, usuario_id=None, grupo="B")
    assert updated.grupo == "B"
    assert updated.fecha_actualizacion is not None

    with pytest.raises(ValueError):
        repo.update(rayos, nombre="Truenos")


def test_list_with_estado_filters_by_inscripcion(db_session):
    repo = SqlAlchemyEquipoRepo(db_session)
    inscripciones = SqlAlchemyInscripcionRepo(db_session)

    aprobado = repo.create_with_jugadores(nombre="Aprobado")
    pendiente = repo.create_with_jugadores(nombre="Pendiente")
    repo.create_with_jugadores(nombre="Sin inscripcion")

    inscripciones.update(inscripciones.create(aprobado.id), estado="aprobada")
    inscripciones.create(pendiente.id)

    assert [e.nombre for e in repo.list_all()] == ["Aprobado", "Pendiente", "Sin inscripcion"]
    assert [e.nombre for e in repo.list_with_estado("aprobada")] == ["Aprobado"]
    assert [e.nombre for e in repo.list_with_estado("pendiente")] == ["Pendiente"]


def test_delete_cascades_to_jugadores_and_inscripcion(db_session):
    repo = SqlAlchemyEquipoRepo(db_session)
    equipo = repo.create_with_jugadores(nombre="Rayos", jugadores=[{"nombre": "Ana"}])
    SqlAlchemyJugadorRepo(db_session).create(equipo_id=equipo.id, nombre="Luis")
    SqlAlchemyInscripcionRepo(db_session).create(equipo.id)

    repo.delete(equipo)

    assert repo.get_by_id(equipo.id) is None
    assert db_session.execute(select(func.count(Jugador.id))).scalar_one() == 0
    assert db_session.execute(select(func.count(Inscripcion.id))).scalar_one() == 0


def test_inscripcion_one_per_team_and_valid_estado(db_session):
    equipo = SqlAlchemyEquipoRepo(db_session).create_with_jugadores(nombre="Rayos")
    repo = SqlAlchemyInscripcionRepo(db_session)

    ins = repo.create(equipo.id, comentario="hola")
    assert ins.estado == "pendiente"
    assert repo.get_by_equipo_id(equipo.id).id == ins.id

    with pytest.raises(ValueError):
        repo.create(equipo.id)
    with pytest.raises(ValueError):
        repo.update(ins, estado="cancelada")


def test_capped_insert_and_move_are_refused_at_the_cap(db_session):
    equipos = SqlAlchemyEquipoRepo(db_session)
    repo = SqlAlchemyJugadorRepo(db_session)
    lleno = equipos.create_with_jugadores(nombre="Lleno", jugadores=[{"nombre": "A"}, {"nombre": "B"}])
    otro = equipos.create_with_jugadores(nombre="Otro", jugadores=[{"nombre": "C"}])
    movido_id = otro.jugadores[0].id

    with pytest.raises(RosterFullError):
        repo.create(equipo_id=lleno.id, nombre="D", max_jugadores=2)
    assert equipos.count_jugadores(lleno.id) == 2

    with pytest.raises(RosterFullError):
        repo.update(repo.get_by_id(movido_id), max_jugadores=2, equipo_id=lleno.id)
    db_session.expire_all()
    assert equipos.count_jugadores(lleno.id) == 2
    assert repo.get_by_id(movido_id).equipo_id == otro.id

    creado = repo.create(equipo_id=otro.id, nombre="E", max_jugadores=2)
    assert creado.equipo_id == otro.id
    assert equipos.count_jugadores(otro.id) == 2
