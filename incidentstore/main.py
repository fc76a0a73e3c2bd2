"""
incidentstore runtime
=====================
Incident / service / alert storage API.
"""
from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from sqlalchemy import Engine
from sqlalchemy.orm import sessionmaker

from .api import alerts as alerts_api
from .api import health as health_api
from .api import incidents as incidents_api
from .api import services as services_api
from .api.auth import bearer_auth_middleware
from .api.errors import bad_request, internal_error
from .config import Settings
from .db import AlertsDb, IncidentsDb, ServicesDb
from .db.schema import init_db, make_engine, make_session_factory
from .services import AlertsService, IncidentsService, ServicesService
from .utils.logging_utils import clear_request_context, configure_logging, set_request_context, structured_log
from .utils.telemetry import telemetry

logger = logging.getLogger("incidentstore")


@dataclass
class Dependencies:
    engine: Engine
    session_factory: sessionmaker
    incidents: IncidentsService
    services: ServicesService
    alerts: AlertsService


def build_dependencies(settings: Settings, engine: Optional[Engine] = None) -> Dependencies:
    engine = engine if engine is not None else make_engine(settings)
    session_factory = make_session_factory(engine)
    return Dependencies(
        engine=engine,
        session_factory=session_factory,
        incidents=IncidentsService(IncidentsDb(session_factory)),
        services=ServicesService(ServicesDb(session_factory)),
        alerts=AlertsService(AlertsDb(session_factory)),
    )


def create_app(settings: Settings, deps: Optional[Dependencies] = None) -> FastAPI:
    configure_logging(settings.log_level, settings.log_file_path)
    deps = deps if deps is not None else build_dependencies(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("%s v%s starting up...", settings.app_name, settings.app_version)
        init_db(deps.engine)
        logger.info("Database ready: %s", deps.engine.url.render_as_string(hide_password=True))
        yield
        deps.engine.dispose()
        logger.info("%s shutdown complete.", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Incident, service and alert storage API.",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.deps = deps

    # Registered before the request-context middleware so it runs inside it.
    if settings.dev_mode:
        logger.warning("Dev mode enabled: bearer-token authentication is DISABLED")
    else:
        app.middleware("http")(bearer_auth_middleware(settings.api_token))

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        start = time.monotonic()
        request.state.request_id = request_id
        tokens = set_request_context(request_id=request_id)
        try:
            response = await call_next(request)
            elapsed_ms = int((time.monotonic() - start) * 1000)
            response.headers["x-request-id"] = request_id
            response.headers["x-elapsed-ms"] = str(elapsed_ms)
            telemetry.incr("http_requests_total")
            telemetry.incr(f"http_status_{response.status_code}_total")
            telemetry.timing("http_request", elapsed_ms / 1000.0)
            structured_log(
                logger, logging.INFO, "http_request",
                method=request.method, path=request.url.path, status_code=response.status_code, elapsed_ms=elapsed_ms
            )
            return response
        finally:
            clear_request_context(tokens)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        # Only reachable for bodies that are not parseable JSON.
        logger.debug("request validation failed: path=%s request_id=%s", request.url.path, getattr(request.state, "request_id", "-"))
        errors = [{k: v for k, v in e.items() if k not in ("input", "ctx", "url")} for e in exc.errors()]
        return bad_request(jsonable_encoder(errors))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled request error: path=%s request_id=%s", request.url.path, getattr(request.state, "request_id", "-"))
        telemetry.incr("unhandled_errors_total")
        return internal_error(str(exc) if settings.expose_internal_error_details else None)

    app.include_router(health_api.router)
    app.include_router(incidents_api.router, prefix=settings.api_prefix)
    app.include_router(services_api.router, prefix=settings.api_prefix)
    app.include_router(alerts_api.router, prefix=settings.api_prefix)

    return app
