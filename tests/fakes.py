from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from rfid_attendance.core.enums import Gender
from rfid_attendance.core.exceptions import DuplicateError
from rfid_attendance.logs.model import TapLog
from rfid_attendance.users.model import User, UserDraft


class InMemoryUsers:
    def __init__(self, users: Optional[list[User]] = None):
        self._by_id: dict[int, User] = {u.user_id: u for u in users or []}
        self._id = max(self._by_id, default=0)

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_uid(self, uid: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.uid == uid), None)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.email == email), None)

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda u: u.user_id, reverse=True)

    def _check_unique(self, draft: UserDraft, user_id: Optional[int]) -> None:
        for u in self._by_id.values():
            if u.user_id == user_id:
                continue
            if u.uid == draft.uid:
                raise DuplicateError("uid", draft.uid)
            if u.email == draft.email:
                raise DuplicateError("email", draft.email)

    def create_user(self, draft: UserDraft, *, now: datetime) -> int:
        self._check_unique(draft, None)
        self._id += 1
        self._by_id[self._id] = User(
            user_id=self._id,
            name=draft.name,
            uid=draft.uid,
            gender=draft.gender,
            email=draft.email,
            phone_number=draft.phone_number,
            created_at=now,
            updated_at=now,
        )
        return self._id

    def update_user(self, user_id: int, draft: UserDraft, *, now: datetime) -> bool:
        current = self._by_id.get(int(user_id))
        if not current:
            return False
        self._check_unique(draft, user_id)
        self._by_id[int(user_id)] = replace(
            current,
            name=draft.name,
            uid=draft.uid,
            gender=draft.gender,
            email=draft.email,
            phone_number=draft.phone_number,
            updated_at=now,
        )
        return True

    def delete_by_id(self, user_id: int) -> bool:
        return self._by_id.pop(int(user_id), None) is not None


class InMemoryTapLogs:
    def __init__(self):
        self.logs: list[TapLog] = []
        self._id = 0
        self.fail_on_append = False
        self.fail_on_list_recent = False

    def _sorted(self, items, *, ascending: bool = False):
        return sorted(items, key=lambda r: (r.timestamp, r.log_id), reverse=not ascending)

    def append(self, log: TapLog) -> int:
        if self.fail_on_append:
            raise RuntimeError("ledger unavailable")
        self._id += 1
        self.logs.append(replace(log, log_id=self._id))
        return self._id

    def get_by_id(self, log_id: int) -> Optional[TapLog]:
        return next((r for r in self.logs if r.log_id == log_id), None)

    def list_for_uid_and_date(self, uid: str, day: date):
        return self._sorted(r for r in self.logs if r.uid == uid and r.date == day)

    def list_for_date(self, day: date, *, ascending: bool = False):
        return self._sorted((r for r in self.logs if r.date == day), ascending=ascending)

    def list_for_uid(self, uid: str, *, limit: Optional[int] = None):
        items = self._sorted(r for r in self.logs if r.uid == uid)
        return items if limit is None else items[:limit]

    def list_recent(self, limit: Optional[int] = None):
        if self.fail_on_list_recent:
            raise RuntimeError("ledger unavailable")
        items = self._sorted(self.logs)
        return items if limit is None else items[:limit]

    def count_all(self) -> int:
        return len(self.logs)

    def delete_by_id(self, log_id: int) -> bool:
        before = len(self.logs)
        self.logs = [r for r in self.logs if r.log_id != log_id]
        return len(self.logs) < before


class RecordingNotifier:
    def __init__(self):
        self.published: list[tuple[str, dict]] = []

    def publish(self, topic: str, payload: dict) -> None:
        self.published.append((topic, payload))


class ExplodingNotifier:
    def publish(self, topic: str, payload: dict) -> None:
        raise RuntimeError("socket gone")


def make_user(user_id: int = 1, *, uid: str = "AB12CD", name: str = "Juan Dela Cruz", email: str | None = None) -> User:
    return User(
        user_id=user_id,
        name=name,
        uid=uid,
        gender=Gender.MALE,
        email=email or f"user{user_id}@example.com",
        phone_number="+639123456789",
    )
