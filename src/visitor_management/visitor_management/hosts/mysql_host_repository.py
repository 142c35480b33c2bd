from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.context import DatabaseContext
from ..database.mysql_base import as_bool, first_or_none
from .model import Host
from .repository import HostRepository


def _to_host(r: Dict[str, Any]) -> Host:
    return Host(
        id=int(r["id"]),
        name=r["name"],
        email=r["email"],
        phone=r.get("phone"),
        department=r.get("department"),
        designation=r.get("designation"),
        is_active=as_bool(r.get("is_active", 1)),
    )


class MySQLHostRepository(HostRepository):
    def __init__(self, db: DatabaseContext):
        self._db = db

    def list_active(self) -> Sequence[Host]:
        rows = self._db.safe_query(
            """
            SELECT id, name, email, phone, department, designation, is_active
            FROM hosts
            WHERE is_active = TRUE
            ORDER BY name
            """
        )
        return [_to_host(r) for r in rows]

    def get_by_id(self, host_id: int) -> Optional[Host]:
        row = first_or_none(
            self._db.safe_query(
                "SELECT id, name, email, phone, department, designation, is_active FROM hosts WHERE id=%s",
                (int(host_id),),
            )
        )
        return _to_host(row) if row else None

    def create(
        self,
        *,
        name: str,
        email: str,
        phone: Optional[str] = None,
        department: Optional[str] = None,
        designation: Optional[str] = None,
    ) -> int:
        return self._db.safe_insert(
            "INSERT INTO hosts (name, email, phone, department, designation) VALUES (%s,%s,%s,%s,%s)",
            (name, email, phone, department, designation),
        )
