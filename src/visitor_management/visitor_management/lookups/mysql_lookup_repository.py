from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.context import DatabaseContext
from ..database.mysql_base import as_bool, first_or_none
from .model import LookupItem
from .repository import LookupRepository

LOOKUP_TABLES = frozenset({"departments", "visit_purposes"})


def _to_item(r: Dict[str, Any]) -> LookupItem:
    return LookupItem(
        id=int(r["id"]),
        name=r["name"],
        description=r.get("description"),
        is_active=as_bool(r.get("is_active", 1)),
    )


class MySQLLookupRepository(LookupRepository):
    def __init__(self, db: DatabaseContext, *, table: str):
        if table not in LOOKUP_TABLES:
            raise ValueError(f"Unsupported lookup table: {table}")
        self._db = db
        self._table = table

    def list_active(self) -> Sequence[LookupItem]:
        rows = self._db.safe_query(
            f"SELECT id, name, description, is_active FROM {self._table} WHERE is_active = TRUE ORDER BY name"
        )
        return [_to_item(r) for r in rows]

    def get_by_id(self, item_id: int) -> Optional[LookupItem]:
        row = first_or_none(
            self._db.safe_query(
                f"SELECT id, name, description, is_active FROM {self._table} WHERE id=%s",
                (int(item_id),),
            )
        )
        return _to_item(row) if row else None

    def create(self, *, name: str, description: Optional[str] = None) -> int:
        return self._db.safe_insert(
            f"INSERT INTO {self._table} (name, description) VALUES (%s,%s)",
            (name, description),
        )
