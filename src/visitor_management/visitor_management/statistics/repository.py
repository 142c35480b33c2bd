from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import VisitorStatus
from .model import DailyVisitStats


class StatisticsRepository(Protocol):
    def count_checked_in_between(self, *, start: datetime, end: Optional[datetime] = None) -> int:
        """Visitors with start <= check_in_time < end (end=None: no upper bound)."""

        raise NotImplementedError

    def count_by_status(self, status: VisitorStatus) -> int:
        raise NotImplementedError

    def daily_stats(self, *, start_date: date, end_date: date) -> Sequence[DailyVisitStats]:
        raise NotImplementedError
