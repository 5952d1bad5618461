"""
Authentication and authorization service.

Depends only on:
- UserRepo Protocol (get_token_by_hash, touch_token, grant/revoke_permission)
- Core auth utilities (hash_token)

Behavior:
    authenticate(token) -> Principal
    - Hashes the incoming bearer token using HMAC-SHA256 (configured secret)
    - Looks up the stored token and its user
    - Rejects expired tokens and inactive users
    - Raises AuthError otherwise

A Principal bundles the user with the token used for the request so route
handlers can apply role, permission and token-ability gates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from liga.core.auth import hash_token
from liga.core.contracts import UserRepo
from liga.core.logging import get_logger

log = get_logger(__name__)


class AuthError(Exception):
    """Raised when bearer token authentication fails."""


@dataclass
class Principal:
    """The authenticated user and the token presented with the request."""

    user: Any
    token: Any

    @property
    def user_id(self) -> int:
        return self.user.id

    def has_role(self, *names: str) -> bool:
        return self.user.has_role(*names)

    def has_permission_to(self, name: str) -> bool:
        return self.user.has_permission_to(name)

    def token_can(self, ability: str) -> bool:
        return self.token.can(ability)

    def token_cant(self, ability: str) -> bool:
        return not self.token_can(ability)


class AuthService:
    """
    Small service to authenticate requests and mutate a principal's permissions.
    """

    def __init__(self, user_repo: UserRepo) -> None:
        self.user_repo = user_repo

    def authenticate(self, token: str) -> Principal:
        """
        Authenticate a request by bearer token.

        Args:
            token: Raw bearer token provided by the caller.

        Returns:
            A Principal when authentication succeeds.

        Raises:
            AuthError: If the token is missing, unknown or expired, or the user is inactive.
        """
        if not isinstance(token, str) or not token.strip():
            raise AuthError("Token is required")

        stored = self.user_repo.get_token_by_hash(hash_token(token.strip()))
        if stored is None:
            raise AuthError("Invalid token")
        if stored.is_expired():
            raise AuthError("Token expired")

        user = stored.user
        if user is None or not bool(getattr(user, "is_active", True)):
            raise AuthError("User is inactive")

        self.user_repo.touch_token(stored)
        return Principal(user=user, token=stored)

    def give_permission_to(self, principal: Principal, name: str) -> None:
        self.user_repo.grant_permission(principal.user, name)
        log.info("permission granted", extra={"user_id": principal.user_id, "permission": name})

    def revoke_permission_to(self, principal: Principal, name: str) -> None:
        self.user_repo.revoke_permission(principal.user, name)
        log.info("permission revoked", extra={"user_id": principal.user_id, "permission": name})
