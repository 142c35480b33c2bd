from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..common.validators import optional_str, require_non_empty
from ..core.exceptions import NotFoundError
from .model import LookupItem
from .repository import LookupRepository


class LookupService:
    def __init__(self, departments: LookupRepository, purposes: LookupRepository):
        self._departments = departments
        self._purposes = purposes

    def list_departments(self) -> Sequence[LookupItem]:
        return self._departments.list_active()

    def list_purposes(self) -> Sequence[LookupItem]:
        return self._purposes.list_active()

    def create_department(self, payload: Mapping[str, Any]) -> LookupItem:
        name = require_non_empty(payload.get("name"), "name")
        dept_id = self._departments.create(name=name, description=optional_str(payload.get("description")))
        dept = self._departments.get_by_id(dept_id)
        if not dept:
            raise NotFoundError("Department not found")
        return dept
