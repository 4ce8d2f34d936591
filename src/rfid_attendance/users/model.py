from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat_utc
from ..core.enums import Gender


@dataclass(frozen=True)
class User:
    """Domain entity: a badge holder.

    Plain data object (no DB access code here).
    """

    user_id: int
    name: str
    uid: str
    gender: Gender
    email: str
    phone_number: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_json(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "uid": self.uid,
            "gender": self.gender.value,
            "email": self.email,
            "phoneNumber": self.phone_number,
            "createdAt": isoformat_utc(self.created_at) if self.created_at else None,
            "updatedAt": isoformat_utc(self.updated_at) if self.updated_at else None,
        }


@dataclass(frozen=True)
class UserDraft:
    """Validated field values for create/update, before the store assigns an id."""

    name: str
    uid: str
    gender: Gender
    email: str
    phone_number: str
