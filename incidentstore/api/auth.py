"""
Static bearer-token check for every non-public route.

``Authorization: Bearer <token>`` must match the configured secret exactly.
"""
from __future__ import annotations

import hmac
import logging

from fastapi import Request

from ..utils.logging_utils import structured_log
from ..utils.telemetry import telemetry
from .errors import unauthorized

logger = logging.getLogger("incidentstore.auth")

PUBLIC_PATHS = frozenset({"/healthz", "/readyz", "/metrics", "/docs", "/redoc", "/openapi.json"})


def parse_bearer(header: str) -> str | None:
    """Return the token of a ``Bearer <token>`` header, else None."""
    scheme, _, token = header.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return None
    return token


def bearer_auth_middleware(api_token: str):
    expected = api_token.encode("utf-8")

    async def auth_middleware(request: Request, call_next):
        if request.url.path in PUBLIC_PATHS:
            return await call_next(request)

        header = request.headers.get("authorization")
        if header is None:
            return _reject(request, "Missing API token")

        token = parse_bearer(header)
        if token is None or not hmac.compare_digest(token.encode("utf-8"), expected):
            return _reject(request, "Invalid API token")

        return await call_next(request)

    return auth_middleware


def _reject(request: Request, message: str):
    structured_log(logger, logging.WARNING, "auth_failed", path=request.url.path, method=request.method, reason=message)
    telemetry.incr("auth_failed_total")
    return unauthorized(message)
