"""
Shared Pydantic building blocks.

- ORMBase: reads attributes from SQLAlchemy objects.
- Envelope: every successful response carries {"success": true, "message": ...}
  plus a resource-specific payload key.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class Envelope(BaseModel):
    success: bool = Field(default=True)
    message: str = Field(..., description="Human-readable outcome")


class MessageResponse(Envelope):
    """Envelope with no payload (e.g. after a delete)."""


def reject_null(value, field_name: str):
    """Update bodies may omit a field, but an explicit null is not a value for a NOT NULL column."""
    if value is None:
        raise ValueError(f"{field_name} no puede ser nulo")
    return value
