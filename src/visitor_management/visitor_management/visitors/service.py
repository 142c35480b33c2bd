from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence, Union

from ..common.datetime_utils import now_local
from ..common.validators import optional_str, require_fields
from ..core.enums import VisitorStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import NewVisitor, Visitor
from .repository import VisitorRepository

REQUIRED_CHECKIN_FIELDS = ("name", "purpose", "host_name")

_OPTIONAL_TEXT_FIELDS = (
    "email",
    "phone",
    "company",
    "host_department",
    "badge_number",
    "photo_url",
    "id_proof_type",
    "id_proof_number",
    "vehicle_number",
    "notes",
)

_LAPTOP_FIELDS = ("laptop_make", "laptop_model", "laptop_serial")


def parse_status(value: Optional[str]) -> Optional[VisitorStatus]:
    if not value:
        return None
    try:
        return VisitorStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in VisitorStatus)
        raise ValidationError(f"Invalid status '{value}' (expected one of: {allowed})")


def parse_visitor_id(value: Union[int, str]) -> int:
    """Ids arrive as raw path segments; anything that is not an integer matches no visitor."""
    try:
        return int(value)
    except (TypeError, ValueError):
        raise NotFoundError("Visitor not found")


def _parse_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def build_new_visitor(payload: Mapping[str, Any]) -> NewVisitor:
    require_fields(payload, *REQUIRED_CHECKIN_FIELDS)

    has_laptop = _parse_flag(payload.get("has_laptop", False))
    laptop = {name: optional_str(payload.get(name)) if has_laptop else None for name in _LAPTOP_FIELDS}

    return NewVisitor(
        name=str(payload["name"]).strip(),
        purpose=str(payload["purpose"]).strip(),
        host_name=str(payload["host_name"]).strip(),
        has_laptop=has_laptop,
        **{name: optional_str(payload.get(name)) for name in _OPTIONAL_TEXT_FIELDS},
        **laptop,
    )


class VisitorService:
    """Use cases: visitor check-in, checkout and lookup."""

    def __init__(self, visitors: VisitorRepository):
        self._visitors = visitors

    def list_visitors(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[VisitorStatus] = None,
    ) -> Sequence[Visitor]:
        if start_date and end_date and start_date > end_date:
            raise ValidationError("startDate must not be after endDate")
        return self._visitors.list_visitors(start_date=start_date, end_date=end_date, status=status)

    def get(self, visitor_id: Union[int, str]) -> Visitor:
        visitor = self._visitors.get_by_id(parse_visitor_id(visitor_id))
        if not visitor:
            raise NotFoundError("Visitor not found")
        return visitor

    def check_in(self, payload: Mapping[str, Any], *, now: Optional[datetime] = None) -> Visitor:
        new_visitor = build_new_visitor(payload)
        visitor_id = self._visitors.create_checkin(visitor=new_visitor, check_in_time=now or now_local())
        return self.get(visitor_id)

    def check_out(self, visitor_id: Union[int, str], *, now: Optional[datetime] = None) -> Visitor:
        visitor_id = parse_visitor_id(visitor_id)
        # Checking out twice is accepted and moves check_out_time forward.
        self._visitors.update_checkout(visitor_id=visitor_id, check_out_time=now or now_local())
        return self.get(visitor_id)
