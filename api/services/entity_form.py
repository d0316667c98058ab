from __future__ import annotations

from typing import List, Mapping

from crud.rows import Column, Row
from crud.types import GenericType
from logging_utils import get_logger
from utils.value_parsing import parse_form_value

logger = get_logger(__name__)


def columns_from_form(shape: Row, form: Mapping[str, str]) -> List[Column]:
    """Build typed write columns from submitted form data.

    Only columns present in the discovered `shape` are written; any other
    field name is dropped, so identifiers never come from the request.
    The primary key is skipped. Unchecked checkboxes are not submitted by
    browsers, so a missing boolean field means False.
    """

    known = set(shape.column_names)
    ignored = [k for k in form.keys() if k not in known]
    if ignored:
        logger.debug("ignoring unknown form fields: %s", ", ".join(sorted(ignored)))

    columns = []
    for col in shape.columns:
        if col.is_primary or col.name == shape.primary_key:
            continue

        if col.generic_type is GenericType.BOOLEAN:
            raw = form.get(col.name)
        elif col.name in form:
            raw = form.get(col.name)
        else:
            continue

        columns.append(
            Column(
                name=col.name,
                generic_type=col.generic_type,
                value=parse_form_value(col.generic_type, raw),
            )
        )
    return columns
