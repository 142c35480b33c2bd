from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict


@dataclass(frozen=True)
class DashboardStats:
    today_visitors: int
    currently_checked_in: int
    week_visitors: int
    month_visitors: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "todayVisitors": self.today_visitors,
            "currentlyCheckedIn": self.currently_checked_in,
            "weekVisitors": self.week_visitors,
            "monthVisitors": self.month_visitors,
        }


@dataclass(frozen=True)
class DailyVisitStats:
    """Read-model over the visitor_statistics view (one row per check-in day)."""

    visit_date: date
    total_visitors: int
    checked_in: int
    checked_out: int
    companies: int
    departments: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "visit_date": self.visit_date.isoformat(),
            "total_visitors": self.total_visitors,
            "checked_in": self.checked_in,
            "checked_out": self.checked_out,
            "companies": self.companies,
            "departments": self.departments,
        }
