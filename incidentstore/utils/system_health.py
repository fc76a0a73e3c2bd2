from __future__ import annotations

from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker


def collect_readiness(session_factory: sessionmaker) -> dict[str, Any]:
    checks: dict[str, bool] = {"db": False}
    details: dict[str, Any] = {}
    errors: list[str] = []

    try:
        with session_factory() as db:
            db.execute(text("SELECT 1"))
            checks["db"] = True
            bind = getattr(db, "bind", None)
            details["db"] = {"dialect": getattr(getattr(bind, "dialect", None), "name", None)}
    except SQLAlchemyError as e:
        errors.append(f"db:{e.__class__.__name__}")
        details["db"] = {"error": e.__class__.__name__}

    return {
        "status": "ready" if all(checks.values()) else "not_ready",
        "checks": checks,
        "details": details,
        "errors": errors,
    }
