from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import VisitorStatus


@dataclass(frozen=True)
class NewVisitor:
    """Fields a front desk supplies at check-in (no id, timestamps or status)."""

    name: str
    purpose: str
    host_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    host_department: Optional[str] = None
    badge_number: Optional[str] = None
    photo_url: Optional[str] = None
    id_proof_type: Optional[str] = None
    id_proof_number: Optional[str] = None
    vehicle_number: Optional[str] = None
    notes: Optional[str] = None
    has_laptop: bool = False
    laptop_make: Optional[str] = None
    laptop_model: Optional[str] = None
    laptop_serial: Optional[str] = None


@dataclass(frozen=True)
class Visitor:
    """Domain entity: one visit.

    check_out_time is set iff status is CHECKED_OUT.
    """

    id: int
    name: str
    purpose: str
    host_name: str
    check_in_time: datetime
    status: VisitorStatus
    check_out_time: Optional[datetime] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    host_department: Optional[str] = None
    badge_number: Optional[str] = None
    photo_url: Optional[str] = None
    id_proof_type: Optional[str] = None
    id_proof_number: Optional[str] = None
    vehicle_number: Optional[str] = None
    notes: Optional[str] = None
    has_laptop: bool = False
    laptop_make: Optional[str] = None
    laptop_model: Optional[str] = None
    laptop_serial: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        for key in ("check_in_time", "check_out_time", "created_at", "updated_at"):
            data[key] = isoformat_or_none(data[key])
        return data
