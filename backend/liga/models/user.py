"""
User, Role and Permission models.

Users hold roles (administrador, entrenador, ...) and permissions. A permission
can be granted directly to a user or through one of the user's roles; only
direct grants are added/removed at runtime (e.g. "create player" around the
roster cap).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Column, ForeignKey, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from liga.db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from liga.models.access_token import AccessToken


ROLE_ADMINISTRADOR = "administrador"
ROLE_ENTRENADOR = "entrenador"
PERMISSION_CREATE_PLAYER = "create player"


user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)

user_permissions = Table(
    "user_permissions",
    Base.metadata,
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("permission_id", ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True),
)

role_permissions = Table(
    "role_permissions",
    Base.metadata,
    Column("role_id", ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
    Column("permission_id", ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True),
)


class Permission(TimestampMixin, Base):
    __tablename__ = "permissions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, unique=True, index=True)

    def __repr__(self) -> str:
        return f"<Permission id={self.id!r} name={self.name!r}>"


class Role(TimestampMixin, Base):
    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)

    permissions: Mapped[list[Permission]] = relationship(
        Permission, secondary=role_permissions, lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<Role id={self.id!r} name={self.name!r}>"


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="1")

    roles: Mapped[list[Role]] = relationship(Role, secondary=user_roles, lazy="selectin")
    permissions: Mapped[list[Permission]] = relationship(
        Permission, secondary=user_permissions, lazy="selectin"
    )
    tokens: Mapped[list["AccessToken"]] = relationship(
        "AccessToken", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )

    def has_role(self, *names: str) -> bool:
        """True if the user holds any of the given roles."""
        wanted = set(names)
        return any(role.name in wanted for role in self.roles)

    def has_direct_permission(self, name: str) -> bool:
        return any(p.name == name for p in self.permissions)

    def has_permission_to(self, name: str) -> bool:
        """True if the permission is granted directly or through any role."""
        if self.has_direct_permission(name):
            return True
        return any(p.name == name for role in self.roles for p in role.permissions)

    def __repr__(self) -> str:
        return f"<User id={self.id!r} email={self.email!r} active={self.is_active!r}>"
