import os
import sys

import pytest

# Ensure the 'backend' directory is on sys.path so imports work from repo root
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from liga.core.errors import ConflictError, ForbiddenError, NotFoundError, UnprocessableError  # noqa: E402
from liga.services.inscripcion_service import InscripcionService  # noqa: E402
from tests.fakes import FakeEquipoRepo, FakeInscripcionRepo, make_principal  # noqa: E402


def test_enroll_then_approve():
    equipos = FakeEquipoRepo()
    equipo = equipos.seed("Rayos")
    service = InscripcionService(FakeInscripcionRepo(), equipos)
    coach = make_principal(roles=["entrenador"], abilities=[f"editar_equipo_{equipo.id}"])

    ins = service.create(coach, equipo="Rayos", comentario="Primera temporada")
    assert ins.estado == "pendiente"
    assert ins.equipo_id == equipo.id

    with pytest.raises(ConflictError):
        service.create(coach, equipo="Rayos")

    admin = make_principal(roles=["administrador"])
    assert service.update(admin, ins.id, estado="aprobada").estado == "aprobada"
    with pytest.raises(UnprocessableError):
        service.update(admin, ins.id, estado="cancelada")

    service.delete(admin, ins.id)
    with pytest.raises(NotFoundError):
        service.get(ins.id)


def test_enroll_requires_team_and_edit_ability():
    equipos = FakeEquipoRepo()
    equipos.seed("Rayos")
    service = InscripcionService(FakeInscripcionRepo(), equipos)

    with pytest.raises(UnprocessableError):
        service.create(make_principal(), equipo="Truenos")
    with pytest.raises(ForbiddenError):
        service.create(make_principal(abilities=["editar_equipo_99"]), equipo="Rayos")
