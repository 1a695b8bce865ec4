# app/api/v1/envelope.py
"""
Response envelope shared by every v1 endpoint and the error handlers.

Success:  {"status": "ok",    "data": {...}, "message": null, "errors": null}
Failure:  {"status": "error", "data": null,  "message": "...", "errors": [...]}

Money stays Decimal inside ``data``; the response serializer renders it.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    status: str = "ok"
    data: T | None = None
    message: str | None = None
    errors: list[dict[str, Any]] | None = None


def ok(data: Any = None, message: str | None = None) -> dict:
    """Build a success response dict."""
    return ApiResponse(status="ok", data=data, message=message).model_dump()


def error(message: str, errors: list[dict[str, Any]] | None = None) -> dict:
    return ApiResponse(status="error", message=message, errors=errors).model_dump()


def error_response(
    status_code: int,
    exc: Exception,
    errors: list[dict[str, Any]] | None = None,
) -> JSONResponse:
    """JSONResponse for a rejected request, tagged with the exception type."""
    details = errors if errors is not None else [{"type": type(exc).__name__}]
    message = str(exc) if errors is None else "Request validation failed"
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(error(message, errors=details)),
    )
