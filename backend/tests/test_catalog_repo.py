import os
import sys

import pytest

# Ensure the 'backend' directory is on sys.path so imports work from repo root
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from liga.core.contracts import CentroRepo, CicloRepo, EstudioRepo  # noqa: E402
from liga.core.errors import UnprocessableError  # noqa: E402
from liga.repos.centro_repo import SqlAlchemyCentroRepo  # noqa: E402
from liga.repos.ciclo_repo import SqlAlchemyCicloRepo  # noqa: E402
from liga.repos.equipo_repo import SqlAlchemyEquipoRepo  # noqa: E402
from liga.repos.estudio_repo import SqlAlchemyEstudioRepo  # noqa: E402
from liga.services.lookups import resolve_ciclo_id  # noqa: E402


def test_first_estudio_for_ciclo_is_lowest_id(db_session, catalog):
    repo = SqlAlchemyEstudioRepo(db_session)
    otro_centro = SqlAlchemyCentroRepo(db_session).create("CPIFP Los Enlaces")
    repo.create(centro_id=otro_centro.id, ciclo_id=catalog["ciclo"].id, curso=1)

    found = repo.get_first_by_ciclo_nombre("DAW")
    assert found is not None
    assert found.id == catalog["estudio"].id
    assert found.centro.nombre == "IES Miguel Catalán"
    assert found.curso == 2

    assert repo.get_first_by_ciclo_nombre("ASIR") is None
    assert repo.get_first_by_ciclo_nombre("  ") is None


def test_ciclo_without_estudio_does_not_resolve(db_session):
    SqlAlchemyCicloRepo(db_session).create("SMR")
    assert SqlAlchemyEstudioRepo(db_session).get_first_by_ciclo_nombre("SMR") is None


def test_unique_names(db_session, catalog):
    with pytest.raises(ValueError):
        SqlAlchemyCentroRepo(db_session).create("IES Miguel Catalán")
    with pytest.raises(ValueError):
        SqlAlchemyCicloRepo(db_session).create("DAW")


def test_referenced_rows_cannot_be_deleted(db_session, catalog):
    centros = SqlAlchemyCentroRepo(db_session)
    ciclos = SqlAlchemyCicloRepo(db_session)
    estudios = SqlAlchemyEstudioRepo(db_session)

    with pytest.raises(ValueError):
        centros.delete(catalog["centro"])
    with pytest.raises(ValueError):
        ciclos.delete(catalog["ciclo"])

    estudios.delete(catalog["estudio"])
    ciclos.delete(catalog["ciclo"])
    assert ciclos.get_by_nombre("DAW") is None

    SqlAlchemyEquipoRepo(db_session).create_with_jugadores(nombre="Rayos", centro_id=catalog["centro"].id)
    with pytest.raises(ValueError):
        centros.delete(catalog["centro"])


def test_estudio_referenced_by_jugador_cannot_be_deleted(db_session, catalog):
    SqlAlchemyEquipoRepo(db_session).create_with_jugadores(
        nombre="Rayos", jugadores=[{"nombre": "Ana", "estudio_id": catalog["estudio"].id}]
    )
    with pytest.raises(ValueError):
        SqlAlchemyEstudioRepo(db_session).delete(catalog["estudio"])


def test_catalog_repos_satisfy_lookup_contracts(db_session, catalog):
    ciclos = SqlAlchemyCicloRepo(db_session)
    assert isinstance(SqlAlchemyCentroRepo(db_session), CentroRepo)
    assert isinstance(ciclos, CicloRepo)
    assert isinstance(SqlAlchemyEstudioRepo(db_session), EstudioRepo)

    assert resolve_ciclo_id(ciclos, "DAW") == catalog["ciclo"].id
    assert resolve_ciclo_id(ciclos, None) is None
    with pytest.raises(UnprocessableError):
        resolve_ciclo_id(ciclos, "ASIR")
