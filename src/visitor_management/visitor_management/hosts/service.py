from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..common.validators import optional_str, require_fields
from ..core.exceptions import NotFoundError
from .model import Host
from .repository import HostRepository


class HostService:
    """Use case: manage the people visitors come to see."""

    def __init__(self, hosts: HostRepository):
        self._hosts = hosts

    def list_active(self) -> Sequence[Host]:
        return self._hosts.list_active()

    def create(self, payload: Mapping[str, Any]) -> Host:
        require_fields(payload, "name", "email")
        host_id = self._hosts.create(
            name=str(payload["name"]).strip(),
            email=str(payload["email"]).strip(),
            phone=optional_str(payload.get("phone")),
            department=optional_str(payload.get("department")),
            designation=optional_str(payload.get("designation")),
        )
        host = self._hosts.get_by_id(host_id)
        if not host:
            raise NotFoundError("Host not found")
        return host
