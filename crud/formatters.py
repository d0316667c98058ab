"""Display formatting for column names and values.

Lookup order for a value: entity formatter for the column, then the
process-wide default for the column name, then `display_value`.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional

from crud.entities import Entity, Formatter
from crud.rows import Column
from crud.types import GenericType


def default_column_label(name: str) -> str:
    """'created_at' -> 'Created At'."""
    return name.replace("_", " ").strip().title()


def display_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    return str(value)


def format_value(
    entity: Optional[Entity],
    column: Column,
    defaults: Optional[Mapping[str, Formatter]] = None,
) -> str:
    formatter = None
    if entity is not None:
        formatter = entity.value_formatters.get(column.name)
    if formatter is None and defaults:
        formatter = defaults.get(column.name)
    if formatter is not None:
        return formatter(column.value)
    return display_value(column.value)


def format_column_name(entity: Optional[Entity], name: str) -> str:
    if entity is not None:
        formatter = entity.column_name_formatters.get(name)
        if formatter is not None:
            return formatter(name)
    return default_column_label(name)


def html_input_type(generic_type: GenericType) -> str:
    generic_type = GenericType(generic_type)
    if generic_type in (GenericType.INTEGER, GenericType.FLOAT):
        return "number"
    if generic_type is GenericType.BOOLEAN:
        return "checkbox"
    if generic_type is GenericType.TIMESTAMP:
        return "datetime-local"
    return "text"


def html_input_value(column: Column) -> str:
    value = column.value
    if value is None:
        return ""
    if isinstance(value, datetime):
        # Full precision; the form posts it back verbatim.
        if value.microsecond:
            return value.strftime("%Y-%m-%dT%H:%M:%S.%f")
        return value.strftime("%Y-%m-%dT%H:%M:%S")
    if isinstance(value, date):
        return value.strftime("%Y-%m-%dT00:00:00")
    return str(value)
