from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Setting


class SettingRepository(Protocol):
    def list_all(self) -> Sequence[Setting]:
        raise NotImplementedError

    def get_by_key(self, key: str) -> Optional[Setting]:
        raise NotImplementedError

    def upsert(self, *, key: str, value: Optional[str], description: Optional[str] = None) -> None:
        raise NotImplementedError
