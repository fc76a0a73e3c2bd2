from __future__ import annotations

from .resources import build_resource_router

router = build_resource_router("alerts", "Alert", lambda deps: deps.alerts)
