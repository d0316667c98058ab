from __future__ import annotations

import threading
from types import SimpleNamespace

import pytest

from crud.errors import DeadlineExceeded
from crud.executor import CrudExecutor, StatementDeadline
from pytests.common import execute_sql


class _FakeDriverConnection:
    def __init__(self):
        self.interrupted = threading.Event()

    def interrupt(self):
        self.interrupted.set()


def _fake_connection(driver):
    return SimpleNamespace(connection=SimpleNamespace(driver_connection=driver))


def test_deadline_interrupts_the_driver_connection():
    driver = _FakeDriverConnection()

    with StatementDeadline(_fake_connection(driver), 0.05) as deadline:
        assert driver.interrupted.wait(2.0)

    assert deadline.expired


def test_deadline_not_reached_does_not_interrupt():
    driver = _FakeDriverConnection()

    with StatementDeadline(_fake_connection(driver), 5.0) as deadline:
        pass

    assert not deadline.expired
    assert not driver.interrupted.wait(0.1)


@pytest.mark.parametrize("timeout", [None, 0])
def test_no_timeout_means_no_deadline(timeout):
    driver = _FakeDriverConnection()

    with StatementDeadline(_fake_connection(driver), timeout) as deadline:
        pass

    assert not deadline.expired
    assert not driver.interrupted.is_set()


def test_driver_without_cancel_hook_is_tolerated():
    with StatementDeadline(_fake_connection(object()), 0.01) as deadline:
        pass

    assert not deadline.expired


def test_runaway_statement_raises_deadline_exceeded(db):
    execute_sql(
        db.engine,
        "CREATE VIEW slow_counter AS "
        "WITH RECURSIVE c(x) AS (SELECT 1 UNION ALL SELECT x + 1 FROM c WHERE x < 2000000000) "
        "SELECT max(x) AS x FROM c",
    )
    executor = CrudExecutor(db.engine, timeout=0.2)

    with pytest.raises(DeadlineExceeded):
        executor.list_rows("slow_counter", "x", ["*"])

    # The connection is still usable afterwards.
    executor.timeout = None
    executor.list_rows("users", "id", ["*"])
