from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.context import DatabaseContext
from ..database.mysql_base import first_or_none
from .model import Setting
from .repository import SettingRepository


def _to_setting(r: Dict[str, Any]) -> Setting:
    return Setting(
        id=int(r["id"]),
        setting_key=r["setting_key"],
        setting_value=r.get("setting_value"),
        description=r.get("description"),
        updated_at=r.get("updated_at"),
    )


class MySQLSettingRepository(SettingRepository):
    def __init__(self, db: DatabaseContext):
        self._db = db

    def list_all(self) -> Sequence[Setting]:
        rows = self._db.safe_query(
            "SELECT id, setting_key, setting_value, description, updated_at FROM settings ORDER BY setting_key"
        )
        return [_to_setting(r) for r in rows]

    def get_by_key(self, key: str) -> Optional[Setting]:
        row = first_or_none(
            self._db.safe_query(
                "SELECT id, setting_key, setting_value, description, updated_at FROM settings WHERE setting_key=%s",
                (key,),
            )
        )
        return _to_setting(row) if row else None

    def upsert(self, *, key: str, value: Optional[str], description: Optional[str] = None) -> None:
        self._db.safe_execute(
            """
            INSERT INTO settings (setting_key, setting_value, description)
            VALUES (%s,%s,%s)
            ON DUPLICATE KEY UPDATE
                setting_value = VALUES(setting_value),
                description = COALESCE(VALUES(description), description)
            """,
            (key, value, description),
        )
