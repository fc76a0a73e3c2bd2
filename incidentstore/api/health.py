from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from ..utils.system_health import collect_readiness
from ..utils.telemetry import telemetry
from .errors import error_response

router = APIRouter(tags=["system"])


@router.get("/healthz", include_in_schema=False)
async def healthz(request: Request):
    settings = request.app.state.settings
    return {"status": "ok", "system": settings.app_name, "version": settings.app_version}


@router.get("/readyz", include_in_schema=False)
def readyz(request: Request):
    settings = request.app.state.settings
    payload = collect_readiness(request.app.state.deps.session_factory)
    payload.update({"system": settings.app_name, "version": settings.app_version})
    code = 200 if payload["status"] == "ready" else 503
    return JSONResponse(payload, status_code=code)


@router.get("/metrics", include_in_schema=False)
async def metrics(request: Request):
    if not request.app.state.settings.enable_metrics:
        return error_response(503, "Metrics are disabled")
    return PlainTextResponse(telemetry.as_prometheus(), media_type="text/plain; version=0.0.4")
