from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..common.validators import optional_str, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import Setting
from .repository import SettingRepository


class SettingService:
    def __init__(self, settings: SettingRepository):
        self._settings = settings

    def list_all(self) -> Sequence[Setting]:
        return self._settings.list_all()

    def get(self, key: str) -> Setting:
        setting = self._settings.get_by_key(key)
        if not setting:
            raise NotFoundError("Setting not found")
        return setting

    def update(self, key: str, payload: Mapping[str, Any]) -> Setting:
        key = require_non_empty(key, "key")
        if "value" not in payload:
            raise ValidationError("Missing required field(s): value")

        value = payload.get("value")
        if isinstance(value, bool):
            # Stored as text; keep booleans readable for the settings page toggles.
            value = "true" if value else "false"
        elif value is not None:
            value = str(value)

        self._settings.upsert(key=key, value=value, description=optional_str(payload.get("description")))
        return self.get(key)
