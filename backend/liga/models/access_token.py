"""
AccessToken model.

A personal bearer token. Only the HMAC hash of the token is stored. Each token
carries a list of abilities (e.g. "crear_equipo", "editar_equipo_3"); the
wildcard "*" grants every ability.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import JSON, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from liga.db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from liga.models.user import User


WILDCARD_ABILITY = "*"


class AccessToken(TimestampMixin, Base):
    __tablename__ = "access_tokens"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="api")

    # HMAC-SHA256 hex digest (64 chars)
    token_hash: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)

    abilities: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    last_used_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    user: Mapped["User"] = relationship("User", back_populates="tokens")

    def can(self, ability: str) -> bool:
        abilities = self.abilities or []
        return WILDCARD_ABILITY in abilities or ability in abilities

    def cant(self, ability: str) -> bool:
        return not self.can(ability)

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        expires_at = self.expires_at
        # SQLite returns naive datetimes
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return expires_at <= now

    def __repr__(self) -> str:
        return f"<AccessToken id={self.id!r} user_id={self.user_id!r} name={self.name!r}>"
