"""Generic CRUD over arbitrary tables.

Every operation checks out its own connection and returns it before the call
ends. Statements are SQLAlchemy Core constructs built over lightweight
`table()`/`column()` clauses:
- values are always bound parameters, rendered in the driver's paramstyle
- identifiers are quoted by the dialect's identifier preparer
- writes are single autocommitted statements (no optimistic locking)

Reads are not a single round trip: after the SELECT, `list_rows`,
`get_by_id` and `empty_row` ask the dialect inspector for declared column types on the same
connection, since DB-API result descriptors carry no portable type names.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from sqlalchemy import delete, insert, text, update
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from crud.errors import ConnectionFailure, CrudError, DeadlineExceeded, NotFound, QueryFailure
from crud.rows import Column, Row
from crud.schema import SchemaIntrospector, build_select, table_clause
from crud.types import GenericType, decode_value
from logging_utils import get_logger

logger = get_logger(__name__)

_UNSET: Any = object()


def _error_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class StatementDeadline:
    """Cancel the in-flight statement on `connection` after `timeout` seconds.

    Uses the DB-API connection's own cancel hook: `cancel()` (psycopg) or
    `interrupt()` (sqlite3).
    """

    def __init__(self, connection: Connection, timeout: Optional[float]) -> None:
        self.timeout = timeout
        self._connection = connection
        self._expired = threading.Event()
        self._timer: Optional[threading.Timer] = None

    @property
    def expired(self) -> bool:
        return self._expired.is_set()

    def _cancel_hook(self):
        driver_conn = self._connection.connection.driver_connection
        return getattr(driver_conn, "cancel", None) or getattr(driver_conn, "interrupt", None)

    def _expire(self, cancel) -> None:
        self._expired.set()
        logger.warning("statement deadline of %.3fs expired; cancelling", self.timeout)
        cancel()

    def __enter__(self) -> "StatementDeadline":
        if not self.timeout or self.timeout <= 0:
            return self

        cancel = self._cancel_hook()
        if cancel is None:
            logger.debug("driver has no cancel hook; deadline not enforced")
            return self

        self._timer = threading.Timer(self.timeout, self._expire, args=(cancel,))
        self._timer.daemon = True
        self._timer.start()
        return self

    def __exit__(self, *exc_info) -> None:
        if self._timer is not None:
            self._timer.cancel()


class CrudExecutor:
    """Build and run parameterized CRUD statements for any table."""

    def __init__(
        self,
        engine: Engine,
        *,
        timeout: Optional[float] = None,
        introspector: Optional[SchemaIntrospector] = None,
    ) -> None:
        self.engine = engine
        self.timeout = timeout
        self.introspector = introspector or SchemaIntrospector()

    def ping(self) -> None:
        """Open a connection and run a trivial statement."""

        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise ConnectionFailure(_error_message(exc)) from exc

    @contextmanager
    def _connection(self, timeout: Any = _UNSET) -> Iterator[Connection]:
        if timeout is _UNSET:
            timeout = self.timeout

        try:
            conn = self.engine.connect()
        except SQLAlchemyError as exc:
            raise ConnectionFailure(_error_message(exc)) from exc

        with conn:
            deadline = StatementDeadline(conn, timeout)
            try:
                with deadline:
                    yield conn
            except CrudError:
                raise
            except SQLAlchemyError as exc:
                if deadline.expired:
                    raise DeadlineExceeded(
                        f"statement cancelled after {deadline.timeout}s"
                    ) from exc
                raise QueryFailure(_error_message(exc)) from exc

    def list_rows(
        self,
        table_name: str,
        primary_key: str,
        select_columns: Optional[Sequence[str]] = None,
        *,
        timeout: Any = _UNSET,
    ) -> Tuple[List[Row], List[str]]:
        """Select the given columns (or all) and return (rows, column names).

        No ORDER BY is applied; row order is whatever the engine returns.
        """

        stmt, _tbl = build_select(table_name, select_columns)
        logger.debug("list %s columns=%s", table_name, select_columns or "*")

        with self._connection(timeout) as conn:
            result = conn.execute(stmt)
            names = list(result.keys())
            raw_rows = result.fetchall()
            shape = self.introspector.describe(conn, table_name, names)
            generic_types = shape.generic_types
            rows = [self._row(conn, names, generic_types, r, primary_key) for r in raw_rows]

        return rows, names

    def get_by_id(
        self,
        table_name: str,
        primary_key: str,
        edit_columns: Optional[Sequence[str]],
        id_: Any,
        *,
        timeout: Any = _UNSET,
    ) -> Row:
        """Fetch one row by primary key; raise `NotFound` when nothing matches."""

        stmt, tbl = build_select(table_name, edit_columns, key=primary_key)
        stmt = stmt.where(tbl.c[primary_key] == id_).limit(1)
        logger.debug("get %s %s=%r", table_name, primary_key, id_)

        with self._connection(timeout) as conn:
            result = conn.execute(stmt)
            names = list(result.keys())
            raw = result.first()
            if raw is None:
                raise NotFound(f"{table_name}: no row with {primary_key}={id_!r}")
            shape = self.introspector.describe(conn, table_name, names)
            row = self._row(conn, names, shape.generic_types, raw, primary_key)

        if row.primary_key_value is None:
            # Primary key not among the selected columns.
            row.primary_key_value = id_
        return row

    def empty_row(
        self,
        table_name: str,
        primary_key: str,
        columns: Optional[Sequence[str]] = None,
        *,
        timeout: Any = _UNSET,
    ) -> Row:
        """Column shape (names and generic types, no values) for a creation form."""

        with self._connection(timeout) as conn:
            shape = self.introspector.discover(conn, table_name, columns)
        return shape.empty_row(primary_key)

    def create(
        self,
        table_name: str,
        primary_key: str,
        columns: Sequence[Column],
        *,
        timeout: Any = _UNSET,
    ) -> Any:
        """Insert one row and return its generated primary key (None if unknown).

        The primary key column is never written.
        """

        values, types = self._writable(columns, primary_key)
        if not values:
            raise QueryFailure(f"{table_name}: no writable columns to insert")

        tbl = table_clause(table_name, [primary_key, *values], types)
        stmt = insert(tbl).values(values)

        with self._connection(timeout) as conn:
            returning = bool(getattr(conn.dialect, "insert_returning", False))
            if returning:
                stmt = stmt.returning(tbl.c[primary_key])
            logger.debug("create %s columns=%s", table_name, list(values))
            result = conn.execute(stmt)
            new_id = result.scalar() if returning else result.lastrowid
            conn.commit()

        return new_id

    def update_by_id(
        self,
        table_name: str,
        primary_key: str,
        id_: Any,
        columns: Sequence[Column],
        *,
        timeout: Any = _UNSET,
    ) -> None:
        """Update one row in a single statement; the primary key is never written."""

        values, types = self._writable(columns, primary_key)
        if not values:
            return

        tbl = table_clause(table_name, [primary_key, *values], types)
        stmt = update(tbl).where(tbl.c[primary_key] == id_).values(values)

        with self._connection(timeout) as conn:
            logger.debug("update %s %s=%r columns=%s", table_name, primary_key, id_, list(values))
            result = conn.execute(stmt)
            conn.commit()
            if result.rowcount == 0:
                raise NotFound(f"{table_name}: no row with {primary_key}={id_!r}")

    def delete_by_id(
        self,
        table_name: str,
        primary_key: str,
        id_: Any,
        *,
        timeout: Any = _UNSET,
    ) -> None:
        tbl = table_clause(table_name, [primary_key])
        stmt = delete(tbl).where(tbl.c[primary_key] == id_)

        with self._connection(timeout) as conn:
            logger.debug("delete %s %s=%r", table_name, primary_key, id_)
            result = conn.execute(stmt)
            conn.commit()
            if result.rowcount == 0:
                raise NotFound(f"{table_name}: no row with {primary_key}={id_!r}")

    @staticmethod
    def _writable(columns: Sequence[Column], primary_key: str):
        values = {}
        types = {}
        for col in columns:
            if col.name == primary_key:
                continue
            values[col.name] = col.value
            types[col.name] = GenericType(col.generic_type)
        return values, types

    @staticmethod
    def _row(
        conn: Connection,
        names: Sequence[str],
        generic_types: Sequence[GenericType],
        raw: Sequence[Any],
        primary_key: str,
    ) -> Row:
        decoded = [decode_value(t, v, conn.dialect) for t, v in zip(generic_types, raw)]
        return Row.from_values(names, generic_types, decoded, primary_key)
