"""
Bearer authentication and role/permission gates as FastAPI dependencies.

- get_current_principal: 401 unless a valid bearer token is presented.
- get_optional_principal: the principal when a valid token is presented,
  otherwise None. Never fails; used by public routes whose output depends on
  who is asking.
- require_roles(*names): 403 unless the principal holds one of the roles.
- require_permission(name): 403 unless the principal holds the permission
  directly or through a role.

Per-resource token abilities are checked by the services, since they depend
on the addressed record.
"""

from __future__ import annotations

from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from liga.core.deps import get_auth_service
from liga.core.errors import ForbiddenError, UnauthorizedError
from liga.core.logging import get_logger
from liga.services.auth_service import AuthError, AuthService, Principal

__all__ = ["bearer_scheme", "get_current_principal", "get_optional_principal", "require_roles", "require_permission"]

log = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> Principal:
    if credentials is None:
        raise UnauthorizedError("No autenticado")
    try:
        return auth.authenticate(credentials.credentials)
    except AuthError as e:
        raise UnauthorizedError(str(e)) from e


def get_optional_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> Optional[Principal]:
    if credentials is None:
        return None
    try:
        return auth.authenticate(credentials.credentials)
    except AuthError as e:
        log.debug("ignoring invalid optional token", extra={"reason": str(e)})
        return None


def require_roles(*role_names: str) -> Callable[..., Principal]:
    """Dependency factory: the principal must hold at least one of the given roles."""

    def _role_dependency(principal: Principal = Depends(get_current_principal)) -> Principal:
        if not principal.has_role(*role_names):
            raise ForbiddenError(
                "El usuario no tiene el rol necesario", details={"roles": list(role_names)}
            )
        return principal

    return _role_dependency


def require_permission(name: str) -> Callable[..., Principal]:
    """Dependency factory: the principal must hold the given permission."""

    def _permission_dependency(principal: Principal = Depends(get_current_principal)) -> Principal:
        if not principal.has_permission_to(name):
            raise ForbiddenError(
                "El usuario no tiene el permiso necesario", details={"permission": name}
            )
        return principal

    return _permission_dependency
