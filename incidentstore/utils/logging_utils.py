from __future__ import annotations

import contextvars
import json
import logging
import os
from typing import Any, Optional

_request_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("request_id", default=None)

LOG_FORMAT = "%(asctime)s %(levelname)7s %(name)s [request_id=%(request_id)s] — %(message)s"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def set_request_context(request_id: str | None = None):
    tokens = {}
    if request_id is not None:
        tokens["request_id"] = _request_id_var.set(str(request_id))
    return tokens


def clear_request_context(tokens: dict[str, Any]) -> None:
    if not tokens:
        return
    if "request_id" in tokens:
        _request_id_var.reset(tokens["request_id"])


def get_request_context() -> dict[str, str | None]:
    return {"request_id": _request_id_var.get()}


class RequestContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        ctx = get_request_context()
        record.request_id = ctx.get("request_id") or "-"
        return True


def _has_context_filter(handler: logging.Handler) -> bool:
    return any(isinstance(f, RequestContextFilter) for f in handler.filters)


def configure_logging(level_name: str = "info", log_file: Optional[str] = None) -> None:
    """Console sink always, append-mode file sink when ``log_file`` is given."""
    root = logging.getLogger()
    level = _LEVELS.get((level_name or "info").lower(), logging.INFO)
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    root.setLevel(level)

    if log_file:
        exists = any(
            isinstance(h, logging.FileHandler) and h.baseFilename == os.path.abspath(log_file)
            for h in root.handlers
        )
        if not exists:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            root.addHandler(file_handler)

    for handler in root.handlers:
        if not _has_context_filter(handler):
            handler.addFilter(RequestContextFilter())


def structured_log(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, ensure_ascii=False, sort_keys=True, default=str))
