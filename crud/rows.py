from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from crud.types import GenericType


def json_value(value: Any) -> Any:
    """JSON-safe form of a column value.

    Binary values (BLOB, bytea) become `{"encoding": "base64", "data": ...}`;
    everything else is left for the JSON encoder.
    """

    if isinstance(value, (bytes, bytearray, memoryview)):
        return {"encoding": "base64", "data": base64.b64encode(bytes(value)).decode("ascii")}
    return value


@dataclass
class Column:
    """One field of a retrieved or to-be-written row."""

    name: str
    generic_type: GenericType = GenericType.UNKNOWN
    value: Any = None
    is_primary: bool = False

    def as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "generic_type": GenericType(self.generic_type).value,
            "value": json_value(self.value),
            "is_primary": self.is_primary,
        }


@dataclass
class Row:
    """Ordered columns of one record plus denormalized primary-key metadata.

    A row without a primary-key value is a placeholder used to render a
    creation form.
    """

    primary_key: str
    columns: List[Column] = field(default_factory=list)
    primary_key_value: Any = None

    @classmethod
    def from_values(
        cls,
        names: Sequence[str],
        generic_types: Sequence[GenericType],
        values: Optional[Sequence[Any]],
        primary_key: str,
    ) -> "Row":
        """Build a row from discovered names/types and (optionally) values.

        `values=None` builds a placeholder row with every value set to None.
        """

        if values is None:
            values = [None] * len(names)

        row = cls(primary_key=primary_key)
        for name, generic_type, value in zip(names, generic_types, values):
            is_primary = name == primary_key
            row.columns.append(
                Column(
                    name=name,
                    generic_type=generic_type,
                    value=value,
                    is_primary=is_primary,
                )
            )
            if is_primary:
                row.primary_key_value = value
        return row

    def column(self, name: str) -> Optional[Column]:
        for col in self.columns:
            if col.name == name:
                return col
        return None

    def primary_key_column(self) -> Optional[Column]:
        for col in self.columns:
            if col.is_primary:
                return col
        return None

    @property
    def is_placeholder(self) -> bool:
        return self.primary_key_value is None

    @property
    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]

    def values(self) -> Dict[str, Any]:
        return {c.name: c.value for c in self.columns}

    def as_dict(self) -> Dict[str, Any]:
        return {
            "primary_key": self.primary_key,
            "primary_key_value": json_value(self.primary_key_value),
            "columns": [c.as_dict() for c in self.columns],
        }
