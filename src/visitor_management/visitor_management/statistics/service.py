from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.enums import VisitorStatus
from ..core.exceptions import ValidationError
from .model import DailyVisitStats, DashboardStats
from .repository import StatisticsRepository


def _month_bounds(day: date) -> tuple[datetime, datetime]:
    start = datetime.combine(day.replace(day=1), time.min)
    if day.month == 12:
        end = start.replace(year=day.year + 1, month=1)
    else:
        end = start.replace(month=day.month + 1)
    return start, end


class StatisticsService:
    """Dashboard counters and per-day aggregates.

    Windows are computed on the application clock:
    - today: [00:00 today, 00:00 tomorrow)
    - week: the last 7 x 24h up to now (no upper bound)
    - month: [1st of this month, 1st of next month)
    """

    def __init__(self, stats: StatisticsRepository):
        self._stats = stats

    def dashboard(self, *, now: Optional[datetime] = None) -> DashboardStats:
        now = now or now_local()
        today_start = datetime.combine(now.date(), time.min)
        month_start, month_end = _month_bounds(now.date())

        return DashboardStats(
            today_visitors=self._stats.count_checked_in_between(start=today_start, end=today_start + timedelta(days=1)),
            currently_checked_in=self._stats.count_by_status(VisitorStatus.CHECKED_IN),
            week_visitors=self._stats.count_checked_in_between(start=now - timedelta(days=7)),
            month_visitors=self._stats.count_checked_in_between(start=month_start, end=month_end),
        )

    def daily(self, *, start_date: Optional[date], end_date: Optional[date]) -> Sequence[DailyVisitStats]:
        if not start_date or not end_date:
            raise ValidationError("startDate and endDate are required")
        if start_date > end_date:
            raise ValidationError("startDate must not be after endDate")
        return self._stats.daily_stats(start_date=start_date, end_date=end_date)
