from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.validators import require_length, require_match, require_non_empty
from ..core.constants import (
    DEFAULT_PHONE_PATTERN,
    EMAIL_PATTERN,
    MAX_NAME_LENGTH,
    MAX_UID_LENGTH,
    MIN_NAME_LENGTH,
    MIN_UID_LENGTH,
)
from ..core.enums import Gender
from ..core.exceptions import DuplicateError, NotFoundError, ValidationError
from .model import User, UserDraft
from .repository import UserRepository

logger = logging.getLogger(__name__)

_UID_PATTERN = r"^[0-9A-F]{%d,%d}$" % (MIN_UID_LENGTH, MAX_UID_LENGTH)


class UserService:
    """Use case: manage the user directory (register, edit, delete, look up)."""

    def __init__(self, users: UserRepository, *, phone_pattern: str = DEFAULT_PHONE_PATTERN):
        self._users = users
        self._phone_pattern = phone_pattern

    # -- validation -------------------------------------------------------

    def _validate(self, data: Mapping[str, Any]) -> UserDraft:
        name = require_non_empty(data.get("name"), "Name")
        require_length(name, "Name", MIN_NAME_LENGTH, MAX_NAME_LENGTH)

        uid = require_non_empty(data.get("uid"), "UID").upper()
        require_match(uid, _UID_PATTERN, "UID must be a valid hexadecimal string (6-20 characters)")

        gender_s = require_non_empty(data.get("gender"), "Gender")
        try:
            gender = Gender(gender_s)
        except ValueError:
            raise ValidationError("Gender must be Male, Female, or Other")

        email = require_non_empty(data.get("email"), "Email").lower()
        require_match(email, EMAIL_PATTERN, "Email must be valid")

        phone = require_non_empty(data.get("phoneNumber"), "Phone number")
        require_match(
            phone,
            self._phone_pattern,
            "Phone number must start with +63 and be 13 characters long (e.g., +639123456789)",
        )

        return UserDraft(name=name, uid=uid, gender=gender, email=email, phone_number=phone)

    def _ensure_unique(self, draft: UserDraft, *, user_id: Optional[int] = None) -> None:
        by_uid = self._users.get_by_uid(draft.uid)
        if by_uid and by_uid.user_id != user_id:
            raise DuplicateError("uid", draft.uid)

        by_email = self._users.get_by_email(draft.email)
        if by_email and by_email.user_id != user_id:
            raise DuplicateError("email", draft.email)

    # -- queries ----------------------------------------------------------

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def get(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def find_by_uid(self, uid: str) -> Optional[User]:
        """Directory lookup used at tap time. A miss is a normal outcome."""
        return self._users.get_by_uid(uid)

    # -- mutations --------------------------------------------------------

    def register(self, data: Mapping[str, Any], *, now: datetime | None = None) -> User:
        if not data.get("name") or not data.get("uid"):
            raise ValidationError("Name and UID are required")

        draft = self._validate(data)
        self._ensure_unique(draft)

        user_id = self._users.create_user(draft, now=now or now_utc())
        logger.info("Created new user %s (UID %s)", user_id, draft.uid)
        return self.get(user_id)

    def update(self, user_id: int, data: Mapping[str, Any], *, now: datetime | None = None) -> User:
        """Apply a partial update; fields left out keep their current value."""
        current = self.get(user_id)

        merged = {
            "name": current.name,
            "uid": current.uid,
            "gender": current.gender.value,
            "email": current.email,
            "phoneNumber": current.phone_number,
        }
        merged.update({k: v for k, v in data.items() if k in merged and v is not None})

        draft = self._validate(merged)
        self._ensure_unique(draft, user_id=user_id)

        if not self._users.update_user(user_id, draft, now=now or now_utc()):
            raise NotFoundError("User not found")
        logger.info("Updated user %s", user_id)
        return self.get(user_id)

    def delete(self, user_id: int) -> User:
        user = self.get(user_id)
        if not self._users.delete_by_id(user_id):
            raise NotFoundError("User not found")
        logger.info("Deleted user %s", user_id)
        return user
