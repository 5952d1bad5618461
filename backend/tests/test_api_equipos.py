import os
import sys

# Ensure the 'backend' directory is on sys.path so imports work from repo root
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from liga.models.user import ROLE_ADMINISTRADOR, ROLE_ENTRENADOR  # noqa: E402
from liga.repos.equipo_repo import SqlAlchemyEquipoRepo  # noqa: E402
from liga.repos.inscripcion_repo import SqlAlchemyInscripcionRepo  # noqa: E402


def _equipo_payload(nombre="Rayos", jugadores=None, **extra):
    body = {
        "nombre": nombre,
        "grupo": "A",
        "jugadores": jugadores if jugadores is not None else [
            {"nombre": "Ana", "apellido1": "García", "tipo": "capitan", "ciclo": "DAW"},
            {"nombre": "Luis", "apellido1": "Pérez"},
        ],
    }
    body.update(extra)
    return body


def _seed_equipos(db_session):
    repo = SqlAlchemyEquipoRepo(db_session)
    inscripciones = SqlAlchemyInscripcionRepo(db_session)
    aprobado = repo.create_with_jugadores(nombre="Aprobado", jugadores=[{"nombre": "Ana"}])
    pendiente = repo.create_with_jugadores(nombre="Pendiente")
    inscripciones.update(inscripciones.create(aprobado.id), estado="aprobada")
    inscripciones.create(pendiente.id)
    return aprobado, pendiente


def test_index_empty_returns_204(client):
    resp = client.get("/api/equipos")
    assert resp.status_code == 204
    assert resp.content == b""


def test_index_visibility_by_role(client, db_session, make_user):
    _seed_equipos(db_session)
    _, admin_headers = make_user("admin@liga.test", roles=[ROLE_ADMINISTRADOR])
    _, coach_headers = make_user("coach@liga.test", roles=[ROLE_ENTRENADOR])

    anon = client.get("/api/equipos")
    assert anon.status_code == 200
    body = anon.json()
    assert body["success"] is True
    assert [e["nombre"] for e in body["equipos"]] == ["Aprobado"]
    assert body["equipos"][0]["jugadores"][0]["nombre"] == "Ana"

    coach = client.get("/api/equipos", headers=coach_headers)
    assert [e["nombre"] for e in coach.json()["equipos"]] == ["Aprobado"]

    admin = client.get("/api/equipos", headers=admin_headers)
    assert [e["nombre"] for e in admin.json()["equipos"]] == ["Aprobado", "Pendiente"]

    # An invalid token on a public route is treated as anonymous
    bad = client.get("/api/equipos", headers={"Authorization": "Bearer nope"})
    assert bad.status_code == 200
    assert [e["nombre"] for e in bad.json()["equipos"]] == ["Aprobado"]


def test_show_and_404(client, db_session):
    aprobado, _ = _seed_equipos(db_session)

    resp = client.get(f"/api/equipos/{aprobado.id}")
    assert resp.status_code == 200
    assert resp.json()["equipo"]["nombre"] == "Aprobado"

    missing = client.get("/api/equipos/999")
    assert missing.status_code == 404
    assert missing.json() == {
        "success": False,
        "message": "Equipo no encontrado",
        "code": "not_found",
        "details": {},
        "request_id": None,
    }


def test_store_creates_team_with_resolved_names(client, make_user, catalog):
    user, headers = make_user("coach@liga.test", roles=[ROLE_ENTRENADOR], abilities=["crear_equipo"])

    resp = client.post(
        "/api/equipos", json=_equipo_payload(centro="IES Miguel Catalán"), headers=headers
    )

    assert resp.status_code == 201, resp.text
    equipo = resp.json()["equipo"]
    assert equipo["nombre"] == "Rayos"
    assert equipo["centro"]["nombre"] == "IES Miguel Catalán"
    assert equipo["usuario_id_creacion"] == user.id
    assert equipo["fecha_creacion"] is not None
    ana, luis = equipo["jugadores"]
    assert ana["tipo"] == "capitan"
    assert ana["estudio"] == {
        "id": catalog["estudio"].id,
        "centro": {
            "id": catalog["centro"].id,
            "nombre": "IES Miguel Catalán",
            "direccion": "Isabel la Católica 3",
            "telefono": None,
            "email": None,
        },
        "curso": 2,
        "ciclo": {"id": catalog["ciclo"].id, "nombre": "DAW", "cod_ciclo": "IFC303", "familia": "Informática"},
    }
    assert luis["estudio"] is None


def test_store_guards(client, make_user, catalog):
    _, no_ability = make_user("a@liga.test", roles=[ROLE_ENTRENADOR], abilities=["editar_equipo_1"])
    _, admin = make_user("b@liga.test", roles=[ROLE_ADMINISTRADOR])
    _, coach = make_user("c@liga.test", roles=[ROLE_ENTRENADOR], abilities=["crear_equipo"])

    assert client.post("/api/equipos", json=_equipo_payload()).status_code == 401

    forbidden = client.post("/api/equipos", json=_equipo_payload(), headers=no_ability)
    assert forbidden.status_code == 403
    assert forbidden.json()["message"] == (
        "No tienes permisos para crear un nuevo equipo. Revisa si ya creaste uno"
    )

    wrong_role = client.post("/api/equipos", json=_equipo_payload(), headers=admin)
    assert wrong_role.status_code == 403
    assert wrong_role.json()["message"] == "El usuario no tiene el rol necesario"

    unknown_ciclo = client.post(
        "/api/equipos", json=_equipo_payload(jugadores=[{"nombre": "Ana", "ciclo": "ASIR"}]), headers=coach
    )
    assert unknown_ciclo.status_code == 422
    assert unknown_ciclo.json()["code"] == "unprocessable"

    unknown_centro = client.post("/api/equipos", json=_equipo_payload(centro="Nada"), headers=coach)
    assert unknown_centro.status_code == 422

    too_many = client.post(
        "/api/equipos",
        json=_equipo_payload(jugadores=[{"nombre": f"J{i}"} for i in range(13)]),
        headers=coach,
    )
    assert too_many.status_code == 422

    no_roster = client.post("/api/equipos", json={"nombre": "Rayos"}, headers=coach)
    assert no_roster.status_code == 422
    assert no_roster.json()["code"] == "validation_error"

    assert client.post("/api/equipos", json=_equipo_payload(), headers=coach).status_code == 201
    duplicate = client.post("/api/equipos", json=_equipo_payload(), headers=coach)
    assert duplicate.status_code == 409


def test_update_checks_existence_then_ability(client, db_session, make_user):
    equipo = SqlAlchemyEquipoRepo(db_session).create_with_jugadores(nombre="Rayos")
    _, outsider = make_user("a@liga.test", roles=[ROLE_ENTRENADOR], abilities=["editar_equipo_999999"])
    owner, owner_headers = make_user(
        "b@liga.test", roles=[ROLE_ENTRENADOR], abilities=[f"editar_equipo_{equipo.id}"]
    )

    assert client.put("/api/equipos/999999", json={"grupo": "B"}, headers=outsider).status_code == 404

    forbidden = client.put(f"/api/equipos/{equipo.id}", json={"grupo": "B"}, headers=outsider)
    assert forbidden.status_code == 403
    assert forbidden.json()["message"] == "No tienes permisos para actualizar este equipo"

    ok = client.put(f"/api/equipos/{equipo.id}", json={"grupo": "B"}, headers=owner_headers)
    assert ok.status_code == 200
    body = ok.json()["equipo"]
    assert body["grupo"] == "B"
    assert body["nombre"] == "Rayos"
    assert body["usuario_id_actualizacion"] == owner.id
    assert body["fecha_actualizacion"] is not None


def test_update_rejects_null_nombre(client, db_session, make_user):
    equipo = SqlAlchemyEquipoRepo(db_session).create_with_jugadores(nombre="Rayos", grupo="A")
    _, headers = make_user("b@liga.test", roles=[ROLE_ENTRENADOR], abilities=[f"editar_equipo_{equipo.id}"])

    resp = client.put(f"/api/equipos/{equipo.id}", json={"nombre": None, "grupo": "B"}, headers=headers)
    assert resp.status_code == 422
    assert resp.json()["code"] == "validation_error"

    db_session.expire_all()
    assert equipo.nombre == "Rayos"
    assert equipo.grupo == "A"

    # grupo is nullable, so an explicit null clears it
    cleared = client.put(f"/api/equipos/{equipo.id}", json={"grupo": None}, headers=headers)
    assert cleared.status_code == 200
    assert cleared.json()["equipo"]["grupo"] is None
    assert cleared.json()["equipo"]["nombre"] == "Rayos"


def test_destroy_cascades(client, db_session, make_user):
    equipo = SqlAlchemyEquipoRepo(db_session).create_with_jugadores(
        nombre="Rayos", jugadores=[{"nombre": "Ana"}, {"nombre": "Luis"}]
    )
    SqlAlchemyInscripcionRepo(db_session).create(equipo.id)
    _, no_ability = make_user("a@liga.test", roles=[ROLE_ADMINISTRADOR], abilities=["editar_equipo_1"])
    _, admin = make_user("b@liga.test", roles=[ROLE_ADMINISTRADOR], abilities=[f"borrar_equipo_{equipo.id}"])

    forbidden = client.delete(f"/api/equipos/{equipo.id}", headers=no_ability)
    assert forbidden.status_code == 403

    resp = client.delete(f"/api/equipos/{equipo.id}", headers=admin)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Equipo eliminado correctamente"}

    assert client.get(f"/api/equipos/{equipo.id}").status_code == 404
    assert client.get("/api/jugadores").status_code == 204
