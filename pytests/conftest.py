from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generator

import pytest
from flask.testing import FlaskClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from app import create_app
from crud.executor import CrudExecutor
from db import dispose_engine
from models.users import User
from pytests.common import add_dicts, app_config, create_empty_sqlite_db


@dataclass
class TestDb:
    __test__ = False

    path: Any
    session: Session
    engine: Engine


@pytest.fixture(autouse=True)
def _hermetic_env(monkeypatch):
    """Keep developer environment variables out of create_app()."""

    for key in (
        "DATABASE_URI",
        "DATABASE_ENGINE",
        "ADMIN_BASE_URL",
        "INIT_DB_ON_STARTUP",
        "STATEMENT_TIMEOUT_S",
        "SLOW_REQUEST_MS",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def db(tmp_path) -> Generator[TestDb, None, None]:
    """Temp SQLite database with the demo tables (empty)."""

    path = tmp_path / "admin.sqlite"
    session, engine = create_empty_sqlite_db(path)
    try:
        yield TestDb(path=path, session=session, engine=engine)
    finally:
        session.close()
        dispose_engine(engine)


@pytest.fixture()
def executor(db) -> CrudExecutor:
    return CrudExecutor(db.engine)


@pytest.fixture()
def seeded_db(db) -> TestDb:
    """Demo database with two users (ids 1 and 2)."""

    add_dicts(
        db.session,
        User,
        [
            {"name": "Ada", "email": "ada@example.com", "is_active": True},
            {"name": "Grace", "email": "grace@example.com", "is_active": False},
        ],
    )
    return db


@pytest.fixture()
def make_client(seeded_db) -> Callable[..., FlaskClient]:
    """Factory: `make_client(ADMIN_BASE_URL="/", ...)` -> Flask test client."""

    apps = []

    def _make(**overrides: Any) -> FlaskClient:
        app = create_app(app_config(seeded_db.path, **overrides))
        apps.append(app)
        return app.test_client()

    yield _make

    for app in apps:
        dispose_engine(app.extensions["crud_admin"].engine)


@pytest.fixture()
def client(make_client) -> FlaskClient:
    return make_client()
