"""Runtime schema discovery.

Column names and their order come from the result descriptor of a query
against the table itself (`SELECT ... LIMIT 0` when no rows are wanted).
DB-API descriptors do not carry portable type names (sqlite3 reports none,
psycopg2 reports OIDs), so declared types are read through SQLAlchemy's
dialect inspector on the same connection.

Nothing is cached: every call builds a fresh inspector.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy import inspect as sa_inspect
from sqlalchemy import literal_column, select
from sqlalchemy.engine import Connection
from sqlalchemy.exc import CompileError, NoSuchTableError
from sqlalchemy.sql import Select, TableClause, column, table
from sqlalchemy.types import TypeEngine

from crud.rows import Row
from crud.types import GenericType, sa_type, to_generic
from logging_utils import get_logger

logger = get_logger(__name__)

ALL_COLUMNS = "*"


def split_table_name(table_name: str) -> Tuple[Optional[str], str]:
    """'public.users' -> ('public', 'users'); 'users' -> (None, 'users').

    Always splits on the last ".": dotted table names are read as
    schema-qualified.
    """

    schema, _, name = table_name.rpartition(".")
    return (schema or None), name


def is_all_columns(columns: Optional[Sequence[str]]) -> bool:
    return not columns or list(columns) == [ALL_COLUMNS]


def table_clause(
    table_name: str,
    column_names: Sequence[str] = (),
    column_types: Optional[Dict[str, GenericType]] = None,
) -> TableClause:
    """Lightweight table construct; identifiers are quoted by the dialect."""

    schema, name = split_table_name(table_name)
    column_types = column_types or {}
    cols = []
    seen = set()
    for col_name in column_names:
        if col_name == ALL_COLUMNS or col_name in seen:
            continue
        seen.add(col_name)
        generic = column_types.get(col_name, GenericType.UNKNOWN)
        cols.append(column(col_name, sa_type(generic)))
    return table(name, *cols, schema=schema)


def build_select(
    table_name: str,
    columns: Optional[Sequence[str]],
    *,
    key: Optional[str] = None,
) -> Tuple[Select, TableClause]:
    """SELECT <columns> FROM <table>; empty or ['*'] selects everything.

    Returns the statement and its table clause so callers can filter on `key`
    against the same FROM.
    """

    names: List[str] = []
    if not is_all_columns(columns):
        names = list(dict.fromkeys(columns))

    tbl = table_clause(table_name, names + ([key] if key else []))
    if not names:
        return select(literal_column(ALL_COLUMNS)).select_from(tbl), tbl
    return select(*[tbl.c[name] for name in names]).select_from(tbl), tbl


@dataclass
class TableShape:
    """Ordered column names and the native type declared for each."""

    table_name: str
    names: List[str]
    native_types: List[str]

    @property
    def generic_types(self) -> List[GenericType]:
        return [to_generic(t) for t in self.native_types]

    def types_by_name(self) -> Dict[str, GenericType]:
        return dict(zip(self.names, self.generic_types))

    def empty_row(self, primary_key: str) -> Row:
        return Row.from_values(self.names, self.generic_types, None, primary_key)


def _native_type_name(type_: TypeEngine, connection: Connection) -> str:
    try:
        return type_.compile(dialect=connection.dialect)
    except (CompileError, NotImplementedError):
        # NullType and friends have no DDL rendering.
        return type(type_).__name__


class SchemaIntrospector:
    """Discover column names/types of a table over a live connection."""

    def discover(
        self,
        connection: Connection,
        table_name: str,
        columns: Optional[Sequence[str]] = None,
    ) -> TableShape:
        """Run a zero-row select and describe the columns it reports."""

        stmt, _tbl = build_select(table_name, columns)
        result = connection.execute(stmt.limit(0))
        try:
            names = list(result.keys())
        finally:
            result.close()
        return self.describe(connection, table_name, names)

    def describe(
        self, connection: Connection, table_name: str, names: Sequence[str]
    ) -> TableShape:
        declared = self._declared_types(connection, table_name)
        native = [declared.get(name.lower(), "") for name in names]
        return TableShape(table_name=table_name, names=list(names), native_types=native)

    def _declared_types(self, connection: Connection, table_name: str) -> Dict[str, str]:
        schema, name = split_table_name(table_name)
        inspector = sa_inspect(connection)
        try:
            cols = inspector.get_columns(name, schema=schema)
        except NoSuchTableError:
            # The select itself succeeded, so this is something the inspector
            # cannot describe (e.g. a synonym); every column maps to unknown.
            logger.warning("inspector cannot describe %s", table_name)
            return {}
        return {c["name"].lower(): _native_type_name(c["type"], connection) for c in cols}
