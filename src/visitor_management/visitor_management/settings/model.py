from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ..common.datetime_utils import isoformat_or_none


@dataclass(frozen=True)
class Setting:
    """A key/value system preference (company name, notification toggles, ...)."""

    id: int
    setting_key: str
    setting_value: Optional[str] = None
    description: Optional[str] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "setting_key": self.setting_key,
            "setting_value": self.setting_value,
            "description": self.description,
            "updated_at": isoformat_or_none(self.updated_at),
        }
