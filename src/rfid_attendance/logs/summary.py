from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable

from ..common.datetime_utils import isoformat_utc
from ..core.enums import TapType
from .model import TapLog


@dataclass
class DailySummary:
    """Per-UID rollup of one day's taps. Derived on demand, never stored."""

    uid: str
    name: str
    tap_in_count: int = 0
    tap_out_count: int = 0
    logs: list[tuple[TapType, datetime]] = field(default_factory=list)

    @property
    def total_taps(self) -> int:
        return len(self.logs)

    @property
    def is_complete(self) -> bool:
        return self.tap_in_count == self.tap_out_count and self.tap_in_count > 0

    def to_json(self) -> dict:
        return {
            "uid": self.uid,
            "name": self.name,
            "tapInCount": self.tap_in_count,
            "tapOutCount": self.tap_out_count,
            "totalTaps": self.total_taps,
            "isComplete": self.is_complete,
            "logs": [{"type": t.value, "timestamp": isoformat_utc(ts)} for t, ts in self.logs],
        }


@dataclass(frozen=True)
class DaySummaryReport:
    day: date
    users: list[DailySummary]

    def to_json(self) -> dict:
        return {
            "date": self.day.isoformat(),
            "totalUsers": len(self.users),
            "users": [u.to_json() for u in self.users],
        }


def summarize_day(logs: Iterable[TapLog]) -> list[DailySummary]:
    """Group a day's taps by UID.

    Expects ``logs`` in ascending timestamp order; the name kept for each UID is
    the one on its earliest tap.
    """
    summary_map: dict[str, DailySummary] = {}

    for log in logs:
        s = summary_map.get(log.uid)
        if not s:
            s = DailySummary(uid=log.uid, name=log.name)
            summary_map[log.uid] = s

        if log.type == TapType.TAP_IN:
            s.tap_in_count += 1
        else:
            s.tap_out_count += 1
        s.logs.append((log.type, log.timestamp))

    return list(summary_map.values())
