from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .config import Settings, load_settings
from .utils.logging_utils import configure_logging

logger = logging.getLogger("incidentstore.cli")


def _serve(settings: Settings) -> int:
    import uvicorn

    from .main import create_app

    app = create_app(settings)
    logger.info("Server is running on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    return 0


def _init_db(settings: Settings) -> int:
    from .db.schema import init_db, make_engine

    engine = make_engine(settings)
    try:
        init_db(engine)
    finally:
        engine.dispose()
    logger.info("Tables created")
    return 0


def _seed(settings: Settings) -> int:
    from .db.schema import init_db, make_engine, make_session_factory
    from .db.seed import seed

    engine = make_engine(settings)
    try:
        init_db(engine)
        seed(make_session_factory(engine))
    finally:
        engine.dispose()
    return 0


COMMANDS = {"serve": _serve, "init-db": _init_db, "seed": _seed}


def main(argv: Optional[Sequence[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="incidentstore", description="Incident, service and alert storage API")
    p.add_argument("command", nargs="?", choices=sorted(COMMANDS), default="serve")
    p.add_argument("--env-file", default=".env", help="dotenv file with fallback settings (default: .env)")
    args = p.parse_args(argv)

    loaded = load_settings(env_file=args.env_file or None)
    if loaded.err is not None:
        print(f"Invalid configuration:\n{loaded.err}", file=sys.stderr)
        return 1

    settings = loaded.data
    configure_logging(settings.log_level, settings.log_file_path)
    return COMMANDS[args.command](settings)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
