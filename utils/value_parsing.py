from __future__ import annotations

from typing import Any

from crud.types import GenericType
from utils.time_utils import parse_form_datetime

_TRUE = {"1", "true", "yes", "y", "on"}
_FALSE = {"0", "false", "no", "n", "off", ""}


def parse_form_value(generic_type: GenericType, raw: str | None) -> Any:
    """Coerce a submitted form value to the Python value for `generic_type`.

    Heuristics:
    - booleans come from checkboxes: missing/"off"/"false" -> False
    - empty input -> None for every non-string column
    - ints, floats and ISO timestamps are parsed
    - anything that does not parse is returned unchanged, so the database
      reports the type mismatch

    Deliberately no business validation.
    """

    generic_type = GenericType(generic_type)

    if generic_type is GenericType.BOOLEAN:
        if raw is None:
            return False
        low = str(raw).strip().lower()
        if low in _TRUE:
            return True
        if low in _FALSE:
            return False
        return raw

    if raw is None:
        return None

    if generic_type in (GenericType.STRING, GenericType.UNKNOWN):
        return raw

    s = str(raw).strip()
    if s == "":
        return None

    if generic_type is GenericType.INTEGER:
        if s.isdigit() or (s.startswith("-") and s[1:].isdigit()):
            return int(s)
        return raw

    if generic_type is GenericType.FLOAT:
        try:
            return float(s)
        except ValueError:
            return raw

    # GenericType.TIMESTAMP
    try:
        return parse_form_datetime(s)
    except ValueError:
        return raw
