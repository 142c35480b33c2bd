from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import VisitorStatus
from ..database.context import DatabaseContext
from ..database.mysql_base import as_bool, first_or_none
from .model import NewVisitor, Visitor
from .repository import VisitorRepository

VISITOR_COLUMNS = """
    id, name, email, phone, company, purpose, host_name, host_department,
    badge_number, photo_url, id_proof_type, id_proof_number, vehicle_number, notes,
    has_laptop, laptop_make, laptop_model, laptop_serial,
    check_in_time, check_out_time, status, created_at, updated_at
"""


def _to_visitor(r: Dict[str, Any]) -> Visitor:
    return Visitor(
        id=int(r["id"]),
        name=r["name"],
        purpose=r["purpose"],
        host_name=r["host_name"],
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
        status=VisitorStatus(r["status"]),
        email=r.get("email"),
        phone=r.get("phone"),
        company=r.get("company"),
        host_department=r.get("host_department"),
        badge_number=r.get("badge_number"),
        photo_url=r.get("photo_url"),
        id_proof_type=r.get("id_proof_type"),
        id_proof_number=r.get("id_proof_number"),
        vehicle_number=r.get("vehicle_number"),
        notes=r.get("notes"),
        has_laptop=as_bool(r.get("has_laptop")),
        laptop_make=r.get("laptop_make"),
        laptop_model=r.get("laptop_model"),
        laptop_serial=r.get("laptop_serial"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def build_list_query(
    *,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    status: Optional[VisitorStatus] = None,
) -> tuple[str, tuple]:
    clauses = ["1=1"]
    params: list[object] = []

    if start_date is not None:
        clauses.append("DATE(check_in_time) >= %s")
        params.append(start_date)
    if end_date is not None:
        clauses.append("DATE(check_in_time) <= %s")
        params.append(end_date)
    if status is not None:
        clauses.append("status = %s")
        params.append(status.value)

    where = " AND ".join(clauses)
    statement = f"SELECT {VISITOR_COLUMNS} FROM visitors WHERE {where} ORDER BY check_in_time DESC"
    return statement, tuple(params)


class MySQLVisitorRepository(VisitorRepository):
    def __init__(self, db: DatabaseContext):
        self._db = db

    def list_visitors(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[VisitorStatus] = None,
    ) -> Sequence[Visitor]:
        statement, params = build_list_query(start_date=start_date, end_date=end_date, status=status)
        return [_to_visitor(r) for r in self._db.safe_query(statement, params)]

    def get_by_id(self, visitor_id: int) -> Optional[Visitor]:
        row = first_or_none(self._db.safe_query(f"SELECT {VISITOR_COLUMNS} FROM visitors WHERE id=%s", (int(visitor_id),)))
        return _to_visitor(row) if row else None

    def create_checkin(self, *, visitor: NewVisitor, check_in_time: datetime) -> int:
        return self._db.safe_insert(
            """
            INSERT INTO visitors
                (name, email, phone, company, purpose, host_name, host_department,
                 badge_number, photo_url, id_proof_type, id_proof_number, vehicle_number, notes,
                 has_laptop, laptop_make, laptop_model, laptop_serial,
                 check_in_time, check_out_time, status)
            VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,NULL,%s)
            """,
            (
                visitor.name,
                visitor.email,
                visitor.phone,
                visitor.company,
                visitor.purpose,
                visitor.host_name,
                visitor.host_department,
                visitor.badge_number,
                visitor.photo_url,
                visitor.id_proof_type,
                visitor.id_proof_number,
                visitor.vehicle_number,
                visitor.notes,
                1 if visitor.has_laptop else 0,
                visitor.laptop_make,
                visitor.laptop_model,
                visitor.laptop_serial,
                check_in_time,
                VisitorStatus.CHECKED_IN.value,
            ),
        )

    def update_checkout(self, *, visitor_id: int, check_out_time: datetime) -> None:
        # No status guard: a repeated checkout overwrites check_out_time.
        self._db.safe_execute(
            "UPDATE visitors SET check_out_time=%s, status=%s WHERE id=%s",
            (check_out_time, VisitorStatus.CHECKED_OUT.value, int(visitor_id)),
        )
