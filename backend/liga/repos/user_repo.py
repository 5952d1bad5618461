"""
SQLAlchemy-based User repository.

Covers users, their roles and permissions, and their access tokens:
- create_user, get_by_id, get_by_email
- ensure_role / ensure_permission (get-or-create by name)
- assign_role, grant_permission, revoke_permission (direct grants only)
- create_token (returns the plain token once), get_token_by_hash, touch_token
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from liga.core.auth import generate_token, hash_token
from liga.models.access_token import AccessToken
from liga.models.user import Permission, Role, User


__all__ = ["SqlAlchemyUserRepo"]


class SqlAlchemyUserRepo:
    """
    Concrete User repository using SQLAlchemy ORM.
    """

    def __init__(self, session: Session) -> None:
        if not isinstance(session, Session):
            raise TypeError("session must be an instance of sqlalchemy.orm.Session")
        self.session = session

    # -------------------------------
    # Users
    # -------------------------------

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.session.get(User, int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email.strip().lower())
        return self.session.execute(stmt).scalars().first()

    def create_user(self, name: str, email: str, roles: Iterable[str] = (), is_active: bool = True) -> User:
        if not isinstance(name, str) or not name.strip():
            raise ValueError("name must be a non-empty string")
        if not isinstance(email, str) or not email.strip():
            raise ValueError("email must be a non-empty string")

        user = User(name=name.strip(), email=email.strip().lower(), is_active=bool(is_active))
        user.roles = [self.ensure_role(r) for r in roles]
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValueError("User creation failed due to uniqueness constraint") from exc
        self.session.refresh(user)
        return user

    # -------------------------------
    # Roles & permissions
    # -------------------------------

    def ensure_role(self, name: str, permissions: Iterable[str] = ()) -> Role:
        """
        Return the role with this name, creating it if needed. Permissions are
        added to the role (never removed).
        """
        role = self.session.execute(select(Role).where(Role.name == name)).scalars().first()
        if role is None:
            role = Role(name=name)
            self.session.add(role)
        for perm_name in permissions:
            perm = self.ensure_permission(perm_name)
            if perm not in role.permissions:
                role.permissions.append(perm)
        self.session.flush()
        return role

    def ensure_permission(self, name: str) -> Permission:
        perm = self.session.execute(select(Permission).where(Permission.name == name)).scalars().first()
        if perm is None:
            perm = Permission(name=name)
            self.session.add(perm)
            self.session.flush()
        return perm

    def assign_role(self, user: User, name: str) -> User:
        role = self.ensure_role(name)
        if role not in user.roles:
            user.roles.append(role)
        self.session.commit()
        self.session.refresh(user)
        return user

    def grant_permission(self, user: User, name: str) -> User:
        """Add a direct permission grant. No-op if already granted directly."""
        perm = self.ensure_permission(name)
        if perm not in user.permissions:
            user.permissions.append(perm)
        self.session.commit()
        self.session.refresh(user)
        return user

    def revoke_permission(self, user: User, name: str) -> User:
        """Remove a direct permission grant. Role grants are left untouched."""
        user.permissions = [p for p in user.permissions if p.name != name]
        self.session.commit()
        self.session.refresh(user)
        return user

    # -------------------------------
    # Tokens
    # -------------------------------

    def create_token(
        self,
        user: User,
        *,
        name: str = "api",
        abilities: Iterable[str] = ("*",),
        expires_at: Optional[datetime] = None,
    ) -> Tuple[AccessToken, str]:
        """
        Issue a new token for the user.

        Returns:
            (persisted AccessToken, plain-text token). The plain token is not stored.
        """
        plain = generate_token()
        token = AccessToken(
            user_id=user.id,
            name=name,
            token_hash=hash_token(plain),
            abilities=list(abilities),
            expires_at=expires_at,
        )
        self.session.add(token)
        self.session.commit()
        self.session.refresh(token)
        return token, plain

    def get_token_by_hash(self, token_hash: str) -> Optional[AccessToken]:
        if not isinstance(token_hash, str) or not token_hash.strip():
            return None
        stmt = (
            select(AccessToken)
            .options(selectinload(AccessToken.user))
            .where(AccessToken.token_hash == token_hash.strip().lower())
        )
        return self.session.execute(stmt).scalars().first()

    def touch_token(self, token: AccessToken) -> AccessToken:
        token.last_used_at = datetime.now(timezone.utc)
        self.session.commit()
        return token
