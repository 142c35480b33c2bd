from __future__ import annotations

import pytest
from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError, ProgrammingError

from src.visitor_management.visitor_management.database.connection import DBConfig
from src.visitor_management.visitor_management.database.context import DatabaseContext
from src.visitor_management.visitor_management.database.errors import PoolClosedError
CONFIG = DBConfig(host="db", port=3306, user="root", password="", database="visitor_management")


class CountingContext(DatabaseContext):
    """Records every reconnect attempt and its outcome."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.reconnects: list[bool] = []

    def ensure_connection(self) -> bool:
        ok = super().ensure_connection()
        self.reconnects.append(ok)
        return ok


@pytest.fixture
def db(pool_factory):
    ctx = CountingContext(CONFIG, pool_factory=pool_factory)
    ctx.ensure_connection()
    ctx.reconnects.clear()
    return ctx


def test_success_runs_once_without_reconnect(db):
    db.pool.rows = [{"id": 1}]

    assert db.safe_query("SELECT * FROM visitors WHERE id=%s", (1,)) == [{"id": 1}]
    assert len(db.pool.statements) == 1
    assert db.reconnects == []


def test_connection_error_reconnects_once_then_retries_once(db, lost_connection):
    db.pool.rows = [{"id": 7}]
    db.pool.failures = [lost_connection()]

    rows = db.safe_query("SELECT * FROM visitors")

    assert rows == [{"id": 7}]
    assert db.reconnects == [True]
    assert len(db.pool.statements) == 2


def test_retry_failure_is_not_retried_again(db, lost_connection):
    second = lost_connection()
    db.pool.failures = [lost_connection(), second]

    with pytest.raises(type(second)) as info:
        db.safe_query("SELECT * FROM visitors")

    assert info.value is second
    assert db.reconnects == [True]
    assert len(db.pool.statements) == 2


def test_failed_reconnect_propagates_original_error(db, pool_factory, lost_connection):
    original = lost_connection()
    db.pool.failures = [original]
    db.pool.healthy = False
    pool_factory.healthy = False

    with pytest.raises(type(original)) as info:
        db.safe_insert("INSERT INTO hosts (name) VALUES (%s)", ("A",))

    assert info.value is original
    assert db.reconnects == [False]
    assert db.is_connected is False


@pytest.mark.parametrize(
    "error",
    [
        IntegrityError(msg="Duplicate entry 'x' for key 'name'", errno=errorcode.ER_DUP_ENTRY),
        ProgrammingError(msg="You have an error in your SQL syntax", errno=errorcode.ER_PARSE_ERROR),
    ],
)
def test_query_errors_propagate_without_reconnect(db, error):
    db.pool.failures = [error]

    with pytest.raises(type(error)) as info:
        db.safe_execute("UPDATE visitors SET status=%s", ("checked_out",))

    assert info.value is error
    assert db.reconnects == []
    assert len(db.pool.statements) == 1


def test_insert_returns_last_row_id_after_retry(db, lost_connection):
    db.pool.failures = [lost_connection()]
    db.pool.next_insert_id = 41

    assert db.safe_insert("INSERT INTO hosts (name) VALUES (%s)", ("A",)) == 41


def test_query_on_a_pool_closed_underneath_is_rerun_on_the_new_pool(pool_factory):
    ctx = CountingContext(CONFIG, pool_factory=pool_factory)
    ctx.mark_connected()
    stale = ctx.pool

    def replaced_while_waiting(statement, params=()):
        # Another thread swapped the pool while this caller waited for a slot.
        ctx._replace_pool(expected=stale)
        raise PoolClosedError("visitor_pool_stale")

    stale.fetch_all = replaced_while_waiting

    rows = ctx.safe_query("SELECT 1")

    assert rows == []
    assert stale.closed is True
    assert ctx.pool is pool_factory.created[-1]
    assert ctx.pool.statements == [("SELECT 1", ())]
    assert ctx.reconnects == [True]


def test_closed_pool_error_triggers_reconnect(db):
    db.pool.failures = [PoolClosedError("visitor_pool_9")]
    db.pool.rows = [{"id": 2}]

    assert db.safe_query("SELECT * FROM visitors") == [{"id": 2}]
    assert db.reconnects == [True]
