"""Shared helpers for tests.

Intended usage:
- spin up a temporary SQLite database with the demo tables
- insert dict-like rows through the ORM models
- build the `create_app(...)` config pointing at that database

These utilities keep tests small and consistent.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from models import Base

__all__ = [
    "make_sqlite_engine",
    "create_empty_sqlite_db",
    "add_dicts",
    "execute_sql",
    "app_config",
]


def make_sqlite_engine(db_path: Path | str) -> Engine:
    """Create a SQLite engine suitable for tests."""

    if isinstance(db_path, Path):
        db_path = str(db_path)
    return create_engine(f"sqlite:///{db_path}")


def create_empty_sqlite_db(db_path: Path) -> tuple[Session, Engine]:
    """Create an empty SQLite DB file and initialize all demo tables.

    Returns (session, engine).
    """

    engine = make_sqlite_engine(db_path)
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    return SessionLocal(), engine


def add_dicts(session: Session, model, rows: Iterable[dict[str, Any]]) -> list[Any]:
    """Bulk insert a list of dicts into a SQLAlchemy model table.

    Returns the committed ORM objects (ids populated).
    """

    objs = [model(**row) for row in rows]
    session.add_all(objs)
    session.commit()
    return objs


def execute_sql(engine: Engine, *statements: str) -> None:
    """Run raw DDL/DML (tables the demo models do not declare)."""

    with engine.begin() as conn:
        for stmt in statements:
            conn.execute(text(stmt))


def app_config(db_path: Path | str, **overrides: Any) -> dict[str, Any]:
    """`create_app` config for a test database; keyword args override keys."""

    config: dict[str, Any] = {
        "TESTING": True,
        "DATABASE_URI": f"sqlite:///{db_path}",
        "INIT_DB_ON_STARTUP": False,
        "SLOW_REQUEST_MS": 0,
    }
    config.update(overrides)
    return config
