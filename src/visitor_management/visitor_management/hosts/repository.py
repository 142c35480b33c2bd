from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Host


class HostRepository(Protocol):
    def list_active(self) -> Sequence[Host]:
        raise NotImplementedError

    def get_by_id(self, host_id: int) -> Optional[Host]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        email: str,
        phone: Optional[str] = None,
        department: Optional[str] = None,
        designation: Optional[str] = None,
    ) -> int:
        raise NotImplementedError
