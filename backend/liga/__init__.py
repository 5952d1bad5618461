"""Liga API package root for the backend (explicit package marker)."""

__all__ = [
    "api",
    "core",
    "db",
    "models",
    "repos",
    "schemas",
    "services",
    "tools",
]
