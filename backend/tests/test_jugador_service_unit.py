import os
import sys

import pytest

# Ensure the 'backend' directory is on sys.path so imports work from repo root
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from liga.core.errors import ConflictError, ForbiddenError, NotFoundError, UnprocessableError  # noqa: E402
from liga.models.user import PERMISSION_CREATE_PLAYER  # noqa: E402
from liga.services.auth_service import AuthService  # noqa: E402
from liga.services.jugador_service import JugadorService  # noqa: E402
from tests.fakes import (  # noqa: E402
    FakeEquipoRepo,
    FakeEstudioRepo,
    FakeJugadorRepo,
    FakeUserRepo,
    make_principal,
)


def _service(max_jugadores: int = 12):
    equipos = FakeEquipoRepo()
    jugadores = FakeJugadorRepo(equipos)
    service = JugadorService(
        jugador_repo=jugadores,
        equipo_repo=equipos,
        estudio_repo=FakeEstudioRepo(["DAW"]),
        auth_service=AuthService(FakeUserRepo()),
        max_jugadores=max_jugadores,
    )
    return service, equipos, jugadores


def _coach(**kwargs):
    return make_principal(roles=["entrenador"], permissions=[PERMISSION_CREATE_PLAYER], **kwargs)


def test_create_adds_player_to_named_team():
    service, equipos, _ = _service()
    equipo = equipos.seed("Rayos", jugadores=2)
    principal = _coach(abilities=["crear_jugador_equipo_Rayos"])

    jugador = service.create(principal, equipo="Rayos", nombre="Ana", ciclo="DAW", tipo="capitan", extra="x")

    assert jugador.equipo_id == equipo.id
    assert jugador.estudio_id == 1
    # Only known columns reach the repository
    assert jugador.fields == {"tipo": "capitan"}
    assert equipos.count_jugadores(equipo.id) == 3


def test_create_gates_on_team_and_ability():
    service, equipos, _ = _service()
    equipos.seed("Rayos")

    with pytest.raises(UnprocessableError):
        service.create(_coach(), equipo="Truenos", nombre="Ana")
    with pytest.raises(ForbiddenError):
        service.create(_coach(abilities=["crear_jugador_equipo_Truenos"]), equipo="Rayos", nombre="Ana")
    with pytest.raises(UnprocessableError):
        service.create(_coach(), equipo="Rayos", nombre="Ana", ciclo="ASIR")


def test_full_team_revokes_permission_and_delete_gives_it_back():
    service, equipos, jugadores = _service(max_jugadores=3)
    equipo = equipos.seed("Rayos", jugadores=2)
    principal = _coach()

    last = service.create(principal, equipo="Rayos", nombre="Tercero")
    assert principal.has_permission_to(PERMISSION_CREATE_PLAYER)

    with pytest.raises(ConflictError) as exc:
        service.create(principal, equipo="Rayos", nombre="Cuarto")
    assert exc.value.message == "Equipo lleno | No puedes crear más jugadores"
    assert not principal.has_permission_to(PERMISSION_CREATE_PLAYER)
    assert equipos.count_jugadores(equipo.id) == 3

    service.delete(principal, last.id)
    assert principal.has_permission_to(PERMISSION_CREATE_PLAYER)
    assert jugadores.get_by_id(last.id) is None


def test_update_moves_player_and_respects_cap():
    service, equipos, _ = _service(max_jugadores=1)
    origen = equipos.seed("Rayos")
    equipos.seed("Lleno", jugadores=1)
    destino = equipos.seed("Truenos")
    principal = _coach()
    jugador = service.create(principal, equipo="Rayos", nombre="Ana")

    with pytest.raises(ConflictError):
        service.update(principal, jugador.id, equipo="Lleno")

    moved = service.update(principal, jugador.id, equipo="Truenos", ciclo="DAW", nombre="Ana María")
    assert moved.equipo_id == destino.id != origen.id
    assert moved.estudio_id == 1
    assert moved.nombre == "Ana María"


def test_update_and_delete_check_existence_before_ability():
    service, equipos, _ = _service()
    equipos.seed("Rayos")
    jugador = service.create(_coach(), equipo="Rayos", nombre="Ana")
    no_abilities = _coach(abilities=[])

    with pytest.raises(NotFoundError):
        service.update(no_abilities, 12345, nombre="X")
    with pytest.raises(ForbiddenError):
        service.update(no_abilities, jugador.id, nombre="X")
    with pytest.raises(NotFoundError):
        service.delete(no_abilities, 12345)
    with pytest.raises(ForbiddenError):
        service.delete(no_abilities, jugador.id)


def test_cap_rechecked_when_count_is_stale(monkeypatch):
    service, equipos, _ = _service(max_jugadores=2)
    equipo = equipos.seed("Rayos", jugadores=2)
    principal = _coach()
    # Another request filled the team between the count and the insert
    monkeypatch.setattr(equipos, "count_jugadores", lambda equipo_id: 0)

    with pytest.raises(ConflictError) as exc:
        service.create(principal, equipo="Rayos", nombre="Tercero")
    assert exc.value.message == "Equipo lleno | No puedes crear más jugadores"
    assert not principal.has_permission_to(PERMISSION_CREATE_PLAYER)
    assert len(equipo.jugadores) == 2


def test_repository_failures_surface_domain_messages(monkeypatch):
    service, equipos, jugadores = _service()
    equipos.seed("Rayos")
    principal = _coach()
    jugador = service.create(principal, equipo="Rayos", nombre="Ana")

    def _fail(*args, **kwargs):
        raise ValueError("Jugador creation failed due to constraint violation")

    monkeypatch.setattr(jugadores, "create", _fail)
    monkeypatch.setattr(jugadores, "update", _fail)

    with pytest.raises(UnprocessableError) as exc:
        service.create(principal, equipo="Rayos", nombre="Luis")
    assert exc.value.message == "No se pudo crear el jugador"

    with pytest.raises(UnprocessableError) as exc:
        service.update(principal, jugador.id, nombre="Ana María")
    assert exc.value.message == "No se pudo actualizar el jugador"
