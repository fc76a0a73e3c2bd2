from __future__ import annotations

from .resources import build_resource_router

router = build_resource_router("services", "Service", lambda deps: deps.services)
