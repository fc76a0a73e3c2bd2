"""Sample data for local development and the test suite."""
from __future__ import annotations

import logging

from sqlalchemy.orm import sessionmaker

from .schema import Alert, Incident, Service

logger = logging.getLogger("incidentstore.db.seed")

INCIDENTS = [
    {
        "name": "Slow Response Times",
        "description": "Response times have been longer than 5 seconds for the last 5 minutes.",
        "status": "open",
    },
    {
        "name": "High CPU Usage",
        "description": "CPU usage has been above 80% for the last 10 minutes.",
        "status": "open",
    },
]

SERVICES = [
    {"name": "API Gateway", "description": "Main API Gateway service"},
    {"name": "User Service", "description": "User management service"},
]

ALERTS = [
    {
        "name": "API Gateway Alert",
        "description": "API Gateway service is experiencing high latency",
        "service_id": 1,
        "incident_id": 1,
    },
    {
        "name": "User Service Alert",
        "description": "User service is experiencing high latency",
        "service_id": 2,
        "incident_id": 1,
    },
]


def seed(session_factory: sessionmaker) -> dict[str, int]:
    """Insert the sample rows in one transaction. Returns inserted counts."""
    with session_factory() as db:
        db.add_all([Incident(**row) for row in INCIDENTS])
        db.add_all([Service(**row) for row in SERVICES])
        db.add_all([Alert(**row) for row in ALERTS])
        db.commit()
    counts = {"incidents": len(INCIDENTS), "services": len(SERVICES), "alerts": len(ALERTS)}
    logger.info("Database seeded: %s", counts)
    return counts
