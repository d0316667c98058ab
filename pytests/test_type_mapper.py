from __future__ import annotations

from datetime import datetime

import pytest
from sqlalchemy.dialects import sqlite

from crud.types import GenericType, decode_value, from_generic, normalize_native, to_generic


@pytest.mark.parametrize(
    "native, expected",
    [
        ("INTEGER", GenericType.INTEGER),
        ("int8", GenericType.INTEGER),
        ("BIGINT", GenericType.INTEGER),
        ("NUMERIC(10, 2)", GenericType.FLOAT),
        ("DOUBLE PRECISION", GenericType.FLOAT),
        ("BOOLEAN", GenericType.BOOLEAN),
        ("DATETIME", GenericType.TIMESTAMP),
        ("TIMESTAMP(6) WITH TIME ZONE", GenericType.TIMESTAMP),
        ("VARCHAR(120)", GenericType.STRING),
        ("character varying", GenericType.STRING),
        ("TEXT", GenericType.STRING),
    ],
)
def test_to_generic_known_types(native, expected):
    assert to_generic(native) is expected


@pytest.mark.parametrize("native", ["geometry", "jsonb", "", None])
def test_to_generic_unknown_types(native):
    assert to_generic(native) is GenericType.UNKNOWN


def test_normalize_native_strips_arguments_and_arrays():
    assert normalize_native("VARCHAR(120)") == "varchar"
    assert normalize_native("int4[]") == "int4"
    assert normalize_native("  Timestamp   WITHOUT  time zone ") == "timestamp without time zone"


def test_from_generic_maps_back_to_the_same_kind():
    for generic in GenericType:
        if generic is GenericType.UNKNOWN:
            continue
        assert to_generic(from_generic(generic)) is generic

    # Unknown columns are synthesized as text.
    assert to_generic(from_generic(GenericType.UNKNOWN)) is GenericType.STRING


def test_decode_value_uses_dialect_processors():
    dialect = sqlite.dialect()

    assert decode_value(GenericType.BOOLEAN, 1, dialect) is True
    assert decode_value(GenericType.BOOLEAN, 0, dialect) is False
    assert decode_value(GenericType.TIMESTAMP, "2024-01-02 10:30:00", dialect) == datetime(
        2024, 1, 2, 10, 30
    )
    assert decode_value(GenericType.INTEGER, 5, dialect) == 5
    assert decode_value(GenericType.STRING, None, dialect) is None


def test_decode_value_returns_raw_value_when_it_cannot_decode():
    dialect = sqlite.dialect()

    assert decode_value(GenericType.TIMESTAMP, "not a date", dialect) == "not a date"
    assert decode_value(GenericType.UNKNOWN, b"\x00\x01", dialect) == b"\x00\x01"
