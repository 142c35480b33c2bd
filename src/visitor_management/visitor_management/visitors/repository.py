from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import VisitorStatus
from .model import NewVisitor, Visitor


class VisitorRepository(Protocol):
    def list_visitors(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[VisitorStatus] = None,
    ) -> Sequence[Visitor]:
        """Newest check-in first; dates compare against the check-in day, inclusive."""

        raise NotImplementedError

    def get_by_id(self, visitor_id: int) -> Optional[Visitor]:
        raise NotImplementedError

    def create_checkin(self, *, visitor: NewVisitor, check_in_time: datetime) -> int:
        raise NotImplementedError

    def update_checkout(self, *, visitor_id: int, check_out_time: datetime) -> None:
        raise NotImplementedError
