"""Native column type <-> generic value kind mapping.

The mapping is a fixed lookup table. The reverse direction is lossy: several
native names collapse into one generic type, and `from_generic` only returns a
portable name suitable for synthesizing column definitions.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

from sqlalchemy import Boolean, DateTime, Float, Integer, String
from sqlalchemy.engine import Dialect
from sqlalchemy.types import NullType, TypeEngine

from logging_utils import get_logger

logger = get_logger(__name__)


class GenericType(str, Enum):
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    STRING = "string"
    UNKNOWN = "unknown"


_NATIVE_TO_GENERIC: dict[str, GenericType] = {}

for _name in (
    "int",
    "int2",
    "int4",
    "int8",
    "smallint",
    "integer",
    "bigint",
    "tinyint",
    "mediumint",
    "serial",
    "bigserial",
):
    _NATIVE_TO_GENERIC[_name] = GenericType.INTEGER

for _name in (
    "float",
    "float4",
    "float8",
    "decimal",
    "numeric",
    "real",
    "double",
    "double precision",
):
    _NATIVE_TO_GENERIC[_name] = GenericType.FLOAT

for _name in ("bool", "boolean"):
    _NATIVE_TO_GENERIC[_name] = GenericType.BOOLEAN

for _name in (
    "date",
    "datetime",
    "timestamp",
    "timestamptz",
    "timestamp with time zone",
    "timestamp without time zone",
):
    _NATIVE_TO_GENERIC[_name] = GenericType.TIMESTAMP

for _name in (
    "text",
    "varchar",
    "character varying",
    "character",
    "char",
    "nvarchar",
    "string",
    "clob",
):
    _NATIVE_TO_GENERIC[_name] = GenericType.STRING

_GENERIC_TO_NATIVE: dict[GenericType, str] = {
    GenericType.INTEGER: "integer",
    GenericType.FLOAT: "real",
    GenericType.BOOLEAN: "boolean",
    GenericType.TIMESTAMP: "timestamp",
    GenericType.STRING: "text",
    GenericType.UNKNOWN: "text",
}

_ARGS_RE = re.compile(r"\(.*?\)")


def normalize_native(native_type_name: str | None) -> str:
    """Normalize a native type name for lookup.

    'VARCHAR(120)' -> 'varchar', 'TIMESTAMP(6) WITH TIME ZONE' ->
    'timestamp with time zone', 'int4[]' -> 'int4'.
    """

    name = _ARGS_RE.sub("", (native_type_name or "").lower())
    name = name.replace("[]", "")
    return " ".join(name.split())


def to_generic(native_type_name: str | None) -> GenericType:
    """Translate a database engine's native type name into a `GenericType`."""

    generic = _NATIVE_TO_GENERIC.get(normalize_native(native_type_name))
    if generic is None:
        logger.warning("unknown column type %r; treating as unknown", native_type_name)
        return GenericType.UNKNOWN
    return generic


def from_generic(generic_type: GenericType) -> str:
    """Return a portable native type name for a generic type."""

    return _GENERIC_TO_NATIVE[GenericType(generic_type)]


def sa_type(generic_type: GenericType) -> TypeEngine:
    """SQLAlchemy type used to bind and decode values of `generic_type`."""

    generic_type = GenericType(generic_type)
    if generic_type is GenericType.INTEGER:
        return Integer()
    if generic_type is GenericType.FLOAT:
        return Float()
    if generic_type is GenericType.BOOLEAN:
        return Boolean()
    if generic_type is GenericType.TIMESTAMP:
        return DateTime()
    if generic_type is GenericType.STRING:
        return String()
    return NullType()


def decode_value(generic_type: GenericType, value: Any, dialect: Dialect) -> Any:
    """Turn a raw driver value into the Python value for its generic type.

    Uses the dialect's result processor, e.g. SQLite hands back timestamps as
    strings and booleans as 0/1. Values the processor rejects are returned as-is.
    """

    if value is None:
        return None

    impl = sa_type(generic_type).dialect_impl(dialect)
    processor = impl.result_processor(dialect, None)
    if processor is None:
        return value

    try:
        return processor(value)
    except (TypeError, ValueError):
        logger.debug("could not decode %r as %s", value, generic_type.value)
        return value
