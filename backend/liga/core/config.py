"""
Application configuration using pydantic-settings.

Loads settings from environment variables (and optional .env file) with sensible defaults.

Fields loaded (env var names in parentheses):
- app_env (APP_ENV)
- log_level (LOG_LEVEL)
- db_url (DB_URL or DATABASE_URL)
- auth_hmac_secret (AUTH_HMAC_SECRET, API_KEY_SECRET, AUTH_SECRET, SECRET_KEY)
- max_jugadores (MAX_JUGADORES)
- allow_origins (ALLOW_ORIGINS)

Usage:
    from liga.core.config import get_settings
    settings = get_settings()
    print(settings.db_url)
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Environment / logging
    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database URL (accept DB_URL or DATABASE_URL)
    db_url: str = Field(
        default="sqlite:///./liga.db",
        validation_alias=AliasChoices("DB_URL", "DATABASE_URL"),
    )

    # HMAC secret for access token hashing - support multiple env names
    auth_hmac_secret: str = Field(
        default="dev-secret",
        validation_alias=AliasChoices(
            "AUTH_HMAC_SECRET", "API_KEY_SECRET", "AUTH_SECRET", "SECRET_KEY"
        ),
    )

    # Roster cap per team
    max_jugadores: int = Field(default=12, alias="MAX_JUGADORES", ge=1)

    # Comma-separated CORS origins, "*" for any
    allow_origins: str = Field(default="*", alias="ALLOW_ORIGINS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return a cached Settings instance.
    """
    return Settings()  # type: ignore[call-arg]


__all__ = ["Settings", "get_settings"]
