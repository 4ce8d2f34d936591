from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import TapLog


class TapLogRepository(Protocol):
    """Append-only ledger of taps.

    Every list method returns logs newest first unless ``ascending`` is set.
    """

    def append(self, log: TapLog) -> int:
        raise NotImplementedError

    def get_by_id(self, log_id: int) -> Optional[TapLog]:
        raise NotImplementedError

    def list_for_uid_and_date(self, uid: str, day: date) -> Sequence[TapLog]:
        raise NotImplementedError

    def list_for_date(self, day: date, *, ascending: bool = False) -> Sequence[TapLog]:
        raise NotImplementedError

    def list_for_uid(self, uid: str, *, limit: Optional[int] = None) -> Sequence[TapLog]:
        raise NotImplementedError

    def list_recent(self, limit: Optional[int] = None) -> Sequence[TapLog]:
        raise NotImplementedError

    def count_all(self) -> int:
        raise NotImplementedError

    def delete_by_id(self, log_id: int) -> bool:
        """Admin-only removal; taps are otherwise never mutated."""

        raise NotImplementedError
