import os

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base


def _set_sqlite_pragmas(dbapi_connection, connection_record):
    """Configure SQLite for better concurrent read/write behavior."""
    cursor = dbapi_connection.cursor()
    try:
        # Wait for locks instead of failing immediately.
        cursor.execute("PRAGMA busy_timeout=5000")
        # Better concurrency (readers not blocked by writers).
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=NORMAL")
    finally:
        cursor.close()


DB_PATH = os.path.join(os.path.dirname(__file__), "data", "crud_admin.db")
DEFAULT_DATABASE_URI = f"sqlite:///{DB_PATH}"

# Declarative base for the demo models (see models/).
Base = declarative_base()


def make_engine(uri: str | None = None, engine_name: str | None = None) -> Engine:
    """Create an engine for `uri`.

    `engine_name` replaces the URL's driver name (e.g. "postgresql+psycopg2")
    so the database engine can be configured separately from the URI.
    """

    url = make_url(uri or DEFAULT_DATABASE_URI)
    if engine_name:
        url = url.set(drivername=engine_name)

    if url.get_backend_name() != "sqlite":
        return create_engine(url, pool_pre_ping=True)

    database = url.database or ""
    if database and database != ":memory:" and not database.startswith("file:"):
        os.makedirs(os.path.dirname(os.path.abspath(database)), exist_ok=True)

    engine = create_engine(
        url,
        connect_args={"check_same_thread": False, "timeout": 30},
        pool_pre_ping=True,
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


def init_db(engine: Engine) -> None:
    """Create the demo tables (idempotent)."""

    import models  # noqa: F401  (registers tables on Base.metadata)

    Base.metadata.create_all(bind=engine)


def dispose_engine(engine: Engine | None) -> None:
    """Close all pooled connections (shutdown, tests)."""

    if engine is not None:
        engine.dispose()
