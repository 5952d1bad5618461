"""
Repository contracts (Protocols) for data access layers.

These Protocols define the minimal operations required by the services layer.
Concrete implementations use SQLAlchemy (liga.repos.*); tests may use in-memory
fakes as long as they satisfy these interfaces.

Protocols:
- UserRepo
- EquipoRepo
- JugadorRepo
- CentroRepo
- CicloRepo
- EstudioRepo
- InscripcionRepo
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Protocol, Sequence, Tuple, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    # Imported only for type checking to avoid runtime import cycles
    from liga.models.access_token import AccessToken
    from liga.models.centro import Centro
    from liga.models.ciclo import Ciclo
    from liga.models.equipo import Equipo
    from liga.models.estudio import Estudio
    from liga.models.inscripcion import Inscripcion
    from liga.models.jugador import Jugador
    from liga.models.user import User

__all__ = ["UserRepo", "EquipoRepo", "JugadorRepo", "CentroRepo", "CicloRepo", "EstudioRepo", "InscripcionRepo"]


# -------------------------------
# User Repository
# -------------------------------

@runtime_checkable
class UserRepo(Protocol):
    """
    Contract for users, permissions and access tokens.
    """

    def get_token_by_hash(self, token_hash: str) -> Optional["AccessToken"]:
        """Fetch an access token (with its user) by stored hash."""
        raise NotImplementedError()

    def touch_token(self, token: "AccessToken") -> "AccessToken":
        """Record that the token was just used."""
        raise NotImplementedError()

    def grant_permission(self, user: "User", name: str) -> "User":
        """Add a direct permission grant to the user."""
        raise NotImplementedError()

    def revoke_permission(self, user: "User", name: str) -> "User":
        """Remove a direct permission grant from the user."""
        raise NotImplementedError()

    def create_token(
        self, user: "User", *, name: str = "api", abilities: Iterable[str] = ("*",), expires_at: Any = None
    ) -> Tuple["AccessToken", str]:
        """Issue a token; returns (token, plain text)."""
        raise NotImplementedError()


# -------------------------------
# Team Repository
# -------------------------------

@runtime_checkable
class EquipoRepo(Protocol):
    """
    Contract for team data access.
    """

    def get_by_id(self, equipo_id: int) -> Optional["Equipo"]:
        raise NotImplementedError()

    def get_by_nombre(self, nombre: str) -> Optional["Equipo"]:
        raise NotImplementedError()

    def list_all(self) -> Sequence["Equipo"]:
        raise NotImplementedError()

    def list_with_estado(self, estado: str) -> Sequence["Equipo"]:
        """Teams whose inscripcion has the given estado."""
        raise NotImplementedError()

    def count_jugadores(self, equipo_id: int) -> int:
        raise NotImplementedError()

    def create_with_jugadores(
        self,
        *,
        nombre: str,
        grupo: Optional[str] = None,
        centro_id: Optional[int] = None,
        jugadores: Sequence[Mapping[str, Any]] = (),
        usuario_id: Optional[int] = None,
    ) -> "Equipo":
        raise NotImplementedError()

    def update(self, equipo: "Equipo", *, usuario_id: Optional[int] = None, **fields: Any) -> "Equipo":
        raise NotImplementedError()

    def delete(self, equipo: "Equipo") -> None:
        raise NotImplementedError()


# -------------------------------
# Player Repository
# -------------------------------

@runtime_checkable
class JugadorRepo(Protocol):
    """
    Contract for player data access.
    """

    def get_by_id(self, jugador_id: int) -> Optional["Jugador"]:
        raise NotImplementedError()

    def list_all(self) -> Sequence["Jugador"]:
        raise NotImplementedError()

    def create(self, *, equipo_id: int, nombre: str, **fields: Any) -> "Jugador":
        raise NotImplementedError()

    def update(self, jugador: "Jugador", **fields: Any) -> "Jugador":
        raise NotImplementedError()

    def delete(self, jugador: "Jugador") -> None:
        raise NotImplementedError()


# -------------------------------
# Catalog Repositories
# -------------------------------

@runtime_checkable
class CentroRepo(Protocol):
    def get_by_nombre(self, nombre: str) -> Optional["Centro"]:
        raise NotImplementedError()


@runtime_checkable
class CicloRepo(Protocol):
    def get_by_nombre(self, nombre: str) -> Optional["Ciclo"]:
        raise NotImplementedError()


@runtime_checkable
class EstudioRepo(Protocol):
    def get_first_by_ciclo_nombre(self, nombre: str) -> Optional["Estudio"]:
        """Resolve a cycle name to its first study record."""
        raise NotImplementedError()


@runtime_checkable
class InscripcionRepo(Protocol):
    def get_by_id(self, inscripcion_id: int) -> Optional["Inscripcion"]:
        raise NotImplementedError()

    def get_by_equipo_id(self, equipo_id: int) -> Optional["Inscripcion"]:
        raise NotImplementedError()

    def create(self, equipo_id: int, comentario: Optional[str] = None) -> "Inscripcion":
        raise NotImplementedError()

    def update(
        self, inscripcion: "Inscripcion", *, estado: Optional[str] = None, comentario: Optional[str] = None
    ) -> "Inscripcion":
        raise NotImplementedError()

    def delete(self, inscripcion: "Inscripcion") -> None:
        raise NotImplementedError()
