from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest
from mysql.connector import errorcode
from mysql.connector.errors import OperationalError

from src.visitor_management.visitor_management.core.enums import VisitorStatus
from src.visitor_management.visitor_management.visitors.model import NewVisitor, Visitor


def connection_lost() -> OperationalError:
    return OperationalError(msg="Lost connection to MySQL server during query", errno=errorcode.CR_SERVER_LOST)


class FakePool:
    """Stands in for ConnectionPool: scripted failures, recorded statements."""

    def __init__(self, *, healthy: bool = True, rows=None):
        self.healthy = healthy
        self.rows = list(rows or [])
        self.failures: list[Exception] = []
        self.statements: list[tuple[str, tuple]] = []
        self.pings = 0
        self.closed = False
        self.next_insert_id = 1

    def ping(self) -> None:
        self.pings += 1
        if not self.healthy:
            raise OperationalError(msg="Can't connect to MySQL server", errno=errorcode.CR_CONN_HOST_ERROR)

    def _record(self, statement, params):
        self.statements.append((statement, tuple(params)))
        if self.failures:
            raise self.failures.pop(0)

    def fetch_all(self, statement, params=()):
        self._record(statement, params)
        return list(self.rows)

    def insert(self, statement, params=()):
        self._record(statement, params)
        self.next_insert_id += 1
        return self.next_insert_id - 1

    def execute(self, statement, params=()):
        self._record(statement, params)
        return 1

    def stats(self):
        return {"name": "fake", "size": 10, "inUse": 0, "initialized": True}

    def close(self):
        self.closed = True


class FakePoolFactory:
    """Hands out FakePools; ``healthy`` decides the state of the next pool built."""

    def __init__(self, *, healthy: bool = True):
        self.healthy = healthy
        self.created: list[FakePool] = []

    def __call__(self) -> FakePool:
        pool = FakePool(healthy=self.healthy)
        self.created.append(pool)
        return pool


class InMemoryVisitors:
    def __init__(self):
        self._by_id: dict[int, Visitor] = {}
        self._id = 0

    def add(self, visitor: Visitor) -> Visitor:
        self._by_id[visitor.id] = visitor
        self._id = max(self._id, visitor.id)
        return visitor

    def list_visitors(self, *, start_date: Optional[date] = None, end_date: Optional[date] = None, status=None):
        items = list(self._by_id.values())
        if start_date is not None:
            items = [v for v in items if v.check_in_time.date() >= start_date]
        if end_date is not None:
            items = [v for v in items if v.check_in_time.date() <= end_date]
        if status is not None:
            items = [v for v in items if v.status == status]
        items.sort(key=lambda v: v.check_in_time, reverse=True)
        return items

    def get_by_id(self, visitor_id: int) -> Optional[Visitor]:
        return self._by_id.get(int(visitor_id))

    def create_checkin(self, *, visitor: NewVisitor, check_in_time: datetime) -> int:
        self._id += 1
        fields = {k: getattr(visitor, k) for k in visitor.__dataclass_fields__}
        self._by_id[self._id] = Visitor(
            id=self._id,
            check_in_time=check_in_time,
            check_out_time=None,
            status=VisitorStatus.CHECKED_IN,
            **fields,
        )
        return self._id

    def update_checkout(self, *, visitor_id: int, check_out_time: datetime) -> None:
        v = self._by_id.get(int(visitor_id))
        if v:
            self._by_id[v.id] = replace(v, check_out_time=check_out_time, status=VisitorStatus.CHECKED_OUT)


def make_visitor(visitor_id: int, check_in_time: datetime, **overrides) -> Visitor:
    data = dict(
        id=visitor_id,
        name=f"Visitor {visitor_id}",
        purpose="Meeting",
        host_name="Alice Johnson",
        check_in_time=check_in_time,
        status=VisitorStatus.CHECKED_IN,
    )
    data.update(overrides)
    return Visitor(**data)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 1, 8, 30, 0)


@pytest.fixture
def pool_factory() -> FakePoolFactory:
    return FakePoolFactory()


@pytest.fixture
def visitors_repo() -> InMemoryVisitors:
    return InMemoryVisitors()


@pytest.fixture
def visitor_builder():
    return make_visitor


@pytest.fixture
def lost_connection():
    return connection_lost
