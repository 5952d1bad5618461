"""
Access token generation, hashing and verification using HMAC-SHA256.

- generate_token(): Returns a new random plain-text bearer token.
- hash_token(raw): Derives a stable HMAC-SHA256 hex digest from the given raw token.
- verify_token(raw, hashed): Constant-time verification of a raw token against a stored hash.

Secret source:
- Loaded from the first defined environment variable among:
  AUTH_HMAC_SECRET, API_KEY_SECRET, AUTH_SECRET, SECRET_KEY
- Falls back to the application settings (which may read a .env file).

Only hashes are ever persisted; the plain token is shown once at issuance.
"""

from __future__ import annotations

import hashlib
import hmac
import os
import secrets

from liga.core.config import get_settings

__all__ = ["generate_token", "hash_token", "verify_token"]


# -------------------------------
# Secret loading
# -------------------------------

def _load_secret() -> str:
    """
    Load the HMAC secret from environment variables, then settings.
    """
    candidates = (
        os.getenv("AUTH_HMAC_SECRET"),
        os.getenv("API_KEY_SECRET"),
        os.getenv("AUTH_SECRET"),
        os.getenv("SECRET_KEY"),
    )
    for candidate in candidates:
        if candidate and candidate.strip():
            return candidate.strip()
    return get_settings().auth_hmac_secret


_SECRET: str = _load_secret()

# Bytes of entropy for newly issued tokens
_TOKEN_BYTES = 40


# -------------------------------
# Public API
# -------------------------------

def generate_token() -> str:
    """Return a new URL-safe random token."""
    return secrets.token_urlsafe(_TOKEN_BYTES)


def hash_token(raw: str) -> str:
    """
    Compute HMAC-SHA256 hex digest of the provided token using the configured secret.

    Args:
        raw: The plain-text bearer token.

    Returns:
        Lowercase hexadecimal HMAC-SHA256 digest string.
    """
    if not isinstance(raw, str):
        raise TypeError("raw must be a str")
    return hmac.new(_SECRET.encode("utf-8"), raw.encode("utf-8"), hashlib.sha256).hexdigest()


def verify_token(raw: str, hashed: str) -> bool:
    """
    Verify that the provided raw token matches the stored HMAC-SHA256 hash.
    """
    if not isinstance(raw, str):
        raise TypeError("raw must be a str")
    if not isinstance(hashed, str):
        raise TypeError("hashed must be a str")
    return hmac.compare_digest(hash_token(raw), hashed.lower())
