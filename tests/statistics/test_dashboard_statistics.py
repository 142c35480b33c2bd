from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from src.visitor_management.visitor_management.core.enums import VisitorStatus
from src.visitor_management.visitor_management.core.exceptions import ValidationError
from src.visitor_management.visitor_management.statistics.service import StatisticsService


class InMemoryStats:
    def __init__(self, visitors):
        self._visitors = visitors
        self.daily_args = None

    def count_checked_in_between(self, *, start: datetime, end: Optional[datetime] = None) -> int:
        return sum(1 for v in self._visitors if v.check_in_time >= start and (end is None or v.check_in_time < end))

    def count_by_status(self, status: VisitorStatus) -> int:
        return sum(1 for v in self._visitors if v.status == status)

    def daily_stats(self, *, start_date: date, end_date: date):
        self.daily_args = (start_date, end_date)
        return []


def test_dashboard_counts_respect_day_week_and_month_boundaries(visitor_builder):
    now = datetime(2026, 3, 10, 12, 0, 0)
    visitors = [
        visitor_builder(1, datetime(2026, 3, 10, 0, 0, 0)),  # today, first second
        visitor_builder(2, datetime(2026, 3, 10, 11, 59, 59), status=VisitorStatus.CHECKED_OUT),
        visitor_builder(3, datetime(2026, 3, 9, 23, 59, 59)),  # yesterday
        visitor_builder(4, datetime(2026, 3, 3, 12, 0, 0)),  # exactly 7 days ago
        visitor_builder(5, datetime(2026, 3, 3, 11, 59, 59), status=VisitorStatus.CHECKED_OUT),
        visitor_builder(6, datetime(2026, 3, 1, 0, 0, 0), status=VisitorStatus.CHECKED_OUT),
        visitor_builder(7, datetime(2026, 2, 28, 23, 59, 59), status=VisitorStatus.CHECKED_OUT),
    ]

    stats = StatisticsService(InMemoryStats(visitors)).dashboard(now=now)

    assert stats.today_visitors == 2
    assert stats.week_visitors == 4
    assert stats.month_visitors == 6
    assert stats.currently_checked_in == 3


def test_dashboard_month_window_in_december(visitor_builder):
    now = datetime(2026, 12, 31, 23, 0, 0)
    visitors = [
        visitor_builder(1, datetime(2026, 12, 1, 0, 0, 0)),
        visitor_builder(2, datetime(2026, 11, 30, 23, 59, 59)),
    ]

    stats = StatisticsService(InMemoryStats(visitors)).dashboard(now=now)

    assert stats.month_visitors == 1


def test_dashboard_json_uses_camel_case():
    stats = StatisticsService(InMemoryStats([])).dashboard(now=datetime(2026, 1, 1, 9, 0))

    assert stats.to_dict() == {"todayVisitors": 0, "currentlyCheckedIn": 0, "weekVisitors": 0, "monthVisitors": 0}


def test_daily_stats_require_both_dates():
    svc = StatisticsService(InMemoryStats([]))

    with pytest.raises(ValidationError):
        svc.daily(start_date=date(2026, 1, 1), end_date=None)
    with pytest.raises(ValidationError):
        svc.daily(start_date=date(2026, 1, 2), end_date=date(2026, 1, 1))


def test_daily_stats_forward_range():
    repo = InMemoryStats([])

    StatisticsService(repo).daily(start_date=date(2026, 1, 1), end_date=date(2026, 1, 31))

    assert repo.daily_args == (date(2026, 1, 1), date(2026, 1, 31))
