"""
API error types and exception handlers.

- Defines a small hierarchy of ApiError exceptions.
- Maps errors to the same envelope used by successful responses:
  {"success": false, "message": ..., "code": ..., "details": {...}, "request_id": ...}
- Registers FastAPI exception handlers, including request validation errors.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from liga.core.logging import get_logger

__all__ = [
    "ApiError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "UnprocessableError",
    "RosterFullError",
    "ErrorResponse",
    "register_exception_handlers",
]

log = get_logger(__name__)


# -------------------------------
# Error response model
# -------------------------------

class ErrorResponse(BaseModel):
    success: bool = Field(default=False)
    message: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Stable machine-readable error code")
    details: dict = Field(default_factory=dict, description="Optional structured details")
    request_id: Optional[str] = Field(default=None, description="Client-supplied correlation/request id")


# -------------------------------
# Exception types
# -------------------------------

class ApiError(Exception):
    """
    Base API error with HTTP status and machine code.
    """
    status_code: int = 400
    code: str = "bad_request"

    def __init__(self, message: str, *, details: Optional[dict] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class UnauthorizedError(ApiError):
    status_code = 401
    code = "unauthenticated"


class ForbiddenError(ApiError):
    status_code = 403
    code = "forbidden"


class NotFoundError(ApiError):
    status_code = 404
    code = "not_found"


class ConflictError(ApiError):
    status_code = 409
    code = "conflict"


class UnprocessableError(ApiError):
    status_code = 422
    code = "unprocessable"


class RosterFullError(ValueError):
    """Raised by the data layer when an insert or move would exceed a team's roster cap."""


# -------------------------------
# Handlers
# -------------------------------

def _make_json_response(
    request: Request, *, status_code: int, code: str, message: str, details: Optional[dict] = None
) -> JSONResponse:
    # Accept common correlation headers
    req_id = request.headers.get("x-request-id") or request.headers.get("x-correlation-id")

    body = ErrorResponse(message=message, code=code, details=details or {}, request_id=req_id)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body), headers=headers)


async def api_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    FastAPI expects handlers typed as (Request, Exception) -> Response.
    """
    if isinstance(exc, ApiError):
        return _make_json_response(
            request,
            status_code=exc.status_code,
            code=exc.code,
            message=exc.message,
            details=exc.details,
        )
    return await unhandled_error_handler(request, exc)


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Map request/body validation failures (FastAPI or Pydantic) to 422.
    """
    errors: Any = exc.errors() if isinstance(exc, (RequestValidationError, ValidationError)) else str(exc)
    return _make_json_response(
        request,
        status_code=422,
        code="validation_error",
        message="Validation error",
        details={"errors": jsonable_encoder(errors)},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("unhandled error", extra={"path": request.url.path})
    return _make_json_response(
        request, status_code=500, code="server_error", message="Internal server error"
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers on the FastAPI app.
    """
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
