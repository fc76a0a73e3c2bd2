from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse
from pydantic import ValidationError

INTERNAL_ERROR_MESSAGE = "Internal server error"


def error_response(status_code: int, error: Any, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse({"error": error}, status_code=status_code, headers=headers)


def validation_details(exc: ValidationError) -> list[dict[str, Any]]:
    """Enumerable, JSON-safe view of a pydantic validation error."""
    return exc.errors(include_url=False, include_context=False, include_input=False)


def bad_request(error: Any) -> JSONResponse:
    return error_response(400, error)


def invalid_payload(exc: ValidationError) -> JSONResponse:
    return error_response(400, validation_details(exc))


def unauthorized(message: str) -> JSONResponse:
    return error_response(401, message, headers={"www-authenticate": "Bearer"})


def not_found(message: str) -> JSONResponse:
    return error_response(404, message)


def internal_error(reason: str | None = None) -> JSONResponse:
    body: dict[str, Any] = {"error": INTERNAL_ERROR_MESSAGE}
    if reason:
        body["reason"] = reason
    return JSONResponse(body, status_code=500)
