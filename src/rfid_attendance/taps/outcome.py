"""Tagged results of resolving one tap.

Unregistered badges and the daily limit are ordinary outcomes rendered as
successful responses; only ``Rejected`` maps to a client error.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from ..common.datetime_utils import isoformat_utc
from ..core.enums import Gender, TapCode
from ..logs.model import TapLog


@dataclass(frozen=True)
class Rejected:
    code: TapCode
    message: str

    status_code = 400

    def to_json(self) -> dict:
        return {"error": True, "message": self.message, "code": self.code.value}


@dataclass(frozen=True)
class Unregistered:
    uid: str

    status_code = 200

    def to_json(self) -> dict:
        return {
            "error": False,
            "message": f"UID {self.uid} not registered. Please register this UID first.",
            "code": TapCode.NOT_REGISTERED.value,
            "uid": self.uid,
            "registrationHelp": {
                "message": "To register this UID, use: POST /api/users",
                "example": {
                    "name": "Your Name",
                    "uid": self.uid,
                    "email": "your.email@example.com",
                    "phoneNumber": "+639123456789",
                    "gender": Gender.MALE.value,
                },
            },
        }


@dataclass(frozen=True)
class LimitReached:
    uid: str
    name: str
    limit: int

    status_code = 200

    def to_json(self) -> dict:
        return {
            "error": False,
            "message": f"Daily tap limit reached ({self.limit} taps).",
            "name": self.name,
            "code": TapCode.LIMIT_REACHED.value,
        }


@dataclass(frozen=True)
class Recorded:
    log: TapLog
    recent_logs: list[TapLog] = field(default_factory=list)

    status_code = 200

    def to_json(self) -> dict:
        return {
            "error": False,
            "message": f"{self.log.type.value} recorded successfully",
            "name": self.log.name,
            "type": self.log.type.value,
            "timestamp": isoformat_utc(self.log.timestamp),
            "date": self.log.date.isoformat(),
            "code": TapCode.SUCCESS.value,
            "uid": self.log.uid,
            "id": self.log.log_id,
            "logs": [r.to_json() for r in self.recent_logs],
        }


TapOutcome = Union[Rejected, Unregistered, LimitReached, Recorded]
