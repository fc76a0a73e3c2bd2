from __future__ import annotations

from typing import Callable

import pytest
from fastapi.testclient import TestClient

from incidentstore.config import Settings
from incidentstore.db.schema import init_db
from incidentstore.db.seed import seed
from incidentstore.main import Dependencies, build_dependencies, create_app
from incidentstore.utils.telemetry import telemetry

API_TOKEN = 'test-token'
AUTH = {'Authorization': f'Bearer {API_TOKEN}'}


def make_settings(**overrides) -> Settings:
    values = {
        'api_token': API_TOKEN,
        'database_url': 'sqlite://',
        'dev_mode': False,
        'log_level': 'debug',
        'log_file_path': None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(autouse=True)
def reset_telemetry():
    telemetry.reset()
    yield
    telemetry.reset()


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def deps(settings) -> Dependencies:
    """Fresh in-memory database per test, seeded with the sample rows."""
    d = build_dependencies(settings)
    init_db(d.engine)
    seed(d.session_factory)
    yield d
    d.engine.dispose()


@pytest.fixture
def empty_deps(settings) -> Dependencies:
    d = build_dependencies(settings)
    init_db(d.engine)
    yield d
    d.engine.dispose()


@pytest.fixture
def client(settings, deps) -> TestClient:
    with TestClient(create_app(settings, deps)) as c:
        c.headers.update(AUTH)
        yield c


@pytest.fixture
def empty_client(settings, empty_deps) -> TestClient:
    with TestClient(create_app(settings, empty_deps)) as c:
        c.headers.update(AUTH)
        yield c


@pytest.fixture
def anon_client(settings, deps) -> TestClient:
    with TestClient(create_app(settings, deps)) as c:
        yield c


@pytest.fixture
def spy(monkeypatch) -> Callable[[object, str], list]:
    """Record calls to ``obj.name`` while still delegating to it."""
    def _install(obj, name: str) -> list:
        calls: list = []
        original = getattr(obj, name)

        def wrapper(*args, **kwargs):
            calls.append((args, kwargs))
            return original(*args, **kwargs)

        monkeypatch.setattr(obj, name, wrapper)
        return calls
    return _install


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return dict(AUTH)
