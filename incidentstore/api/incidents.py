from __future__ import annotations

from .resources import build_resource_router

router = build_resource_router("incidents", "Incident", lambda deps: deps.incidents)
