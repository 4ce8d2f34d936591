from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import User, UserDraft


class UserRepository(Protocol):
    """Repository interface for the user directory.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    Implementations raise DuplicateError when uid or email is already taken.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_uid(self, uid: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        """All users, newest first."""

        raise NotImplementedError

    def create_user(self, draft: UserDraft, *, now: datetime) -> int:
        raise NotImplementedError

    def update_user(self, user_id: int, draft: UserDraft, *, now: datetime) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError
