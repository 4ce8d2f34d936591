from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import isoformat_utc
from ..core.enums import TapType


@dataclass(frozen=True)
class TapLog:
    """Domain entity: one accepted tap in the attendance ledger.

    ``name`` is captured when the tap is written and is never re-resolved.
    """

    log_id: Optional[int]
    uid: str
    name: str
    date: date
    type: TapType
    timestamp: datetime

    def to_json(self) -> dict:
        return {
            "id": self.log_id,
            "uid": self.uid,
            "name": self.name,
            "date": self.date.isoformat(),
            "type": self.type.value,
            "timestamp": isoformat_utc(self.timestamp),
        }
