from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import VisitorStatus
from ..database.context import DatabaseContext
from .model import DailyVisitStats
from .repository import StatisticsRepository


class MySQLStatisticsRepository(StatisticsRepository):
    def __init__(self, db: DatabaseContext):
        self._db = db

    def _count(self, statement: str, params: tuple) -> int:
        rows = self._db.safe_query(statement, params)
        return int(rows[0]["count"]) if rows else 0

    def count_checked_in_between(self, *, start: datetime, end: Optional[datetime] = None) -> int:
        if end is None:
            return self._count("SELECT COUNT(*) AS count FROM visitors WHERE check_in_time >= %s", (start,))
        return self._count(
            "SELECT COUNT(*) AS count FROM visitors WHERE check_in_time >= %s AND check_in_time < %s",
            (start, end),
        )

    def count_by_status(self, status: VisitorStatus) -> int:
        return self._count("SELECT COUNT(*) AS count FROM visitors WHERE status = %s", (status.value,))

    def daily_stats(self, *, start_date: date, end_date: date) -> Sequence[DailyVisitStats]:
        rows = self._db.safe_query(
            """
            SELECT visit_date, total_visitors, checked_in, checked_out, companies, departments
            FROM visitor_statistics
            WHERE visit_date BETWEEN %s AND %s
            ORDER BY visit_date DESC
            """,
            (start_date, end_date),
        )
        return [
            DailyVisitStats(
                visit_date=r["visit_date"],
                total_visitors=int(r["total_visitors"] or 0),
                checked_in=int(r["checked_in"] or 0),
                checked_out=int(r["checked_out"] or 0),
                companies=int(r["companies"] or 0),
                departments=int(r["departments"] or 0),
            )
            for r in rows
        ]
