from __future__ import annotations

from datetime import datetime

import pytest

from api.schemas.api_responses import error_kind, fail, fail_from, ok
from crud.errors import (
    ConnectionFailure,
    CrudError,
    DeadlineExceeded,
    NotFound,
    PermissionDenied,
    QueryFailure,
)


def test_ok_envelope_is_json_ready():
    payload = ok({"when": datetime(2024, 1, 2, 3, 4, 5), "n": 1})

    assert payload["ok"] is True
    assert payload["error"] is None
    assert payload["data"] == {"when": "2024-01-02T03:04:05", "n": 1}
    assert set(payload["meta"]) == {"request_id", "base_url"}


def test_fail_envelope():
    payload = fail("boom", code="query_failure")

    assert payload["ok"] is False
    assert payload["data"] is None
    assert payload["error"]["code"] == "query_failure"
    assert payload["error"]["message"] == "boom"


@pytest.mark.parametrize(
    "exc, code, status",
    [
        (NotFound("x"), "not_found", 404),
        (PermissionDenied("users", "delete"), "forbidden", 403),
        (DeadlineExceeded("x"), "deadline_exceeded", 500),
        (QueryFailure("x"), "query_failure", 500),
        (ConnectionFailure("x"), "connection_failure", 500),
        (CrudError("x"), "error", 500),
    ],
)
def test_error_kinds(exc, code, status):
    assert error_kind(exc) == (code, status)


def test_fail_from_carries_the_message():
    payload, status = fail_from(PermissionDenied("users", "delete"))

    assert status == 403
    assert payload["error"]["message"] == "not allowed to delete users"
