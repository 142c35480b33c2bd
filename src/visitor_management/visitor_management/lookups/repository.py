from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import LookupItem


class LookupRepository(Protocol):
    def list_active(self) -> Sequence[LookupItem]:
        raise NotImplementedError

    def get_by_id(self, item_id: int) -> Optional[LookupItem]:
        raise NotImplementedError

    def create(self, *, name: str, description: Optional[str] = None) -> int:
        raise NotImplementedError
