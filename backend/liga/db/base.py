"""
SQLAlchemy declarative base and model import hook.

- Base: Declarative base class for all ORM models.
- TimestampMixin: created_at / updated_at columns shared by every entity.
- import_all_models(): Dynamically imports all modules under liga.models to register mappers.

SQLAlchemy needs model classes to be imported at least once so their tables are
registered on the metadata (create_all, sorted_tables in tests).
"""

from __future__ import annotations

import importlib
import pkgutil
from datetime import datetime
from typing import List

from sqlalchemy import DateTime, MetaData, func
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column

from liga.core.logging import get_logger

__all__ = ["Base", "TimestampMixin", "import_all_models"]

log = get_logger(__name__)


# -------------------------------
# Declarative Base with conventions
# -------------------------------

# Naming conventions for constraints & indexes (helpful for migrations)
_NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    # Attach a metadata object with naming conventions
    metadata = MetaData(naming_convention=_NAMING_CONVENTION)

    # Provide a default table name (lowercase class name) if not explicitly set
    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__.lower()


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )


# -------------------------------
# Dynamic model import
# -------------------------------

def import_all_models() -> List[str]:
    """
    Import all modules under liga.models so SQLAlchemy registers all model tables.

    Returns:
        A list of fully-qualified module names that were imported.
    """
    imported: list[str] = []
    models_pkg = importlib.import_module("liga.models")

    prefix = models_pkg.__name__ + "."
    for _finder, name, _ispkg in pkgutil.walk_packages(models_pkg.__path__, prefix):
        importlib.import_module(name)
        imported.append(name)

    log.debug("models imported", extra={"models": imported})
    return imported


# Register every model on import so relationships resolve regardless of import order
_IMPORTED_MODELS = import_all_models()
