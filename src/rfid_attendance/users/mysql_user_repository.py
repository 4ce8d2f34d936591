from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import Gender
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    duplicate_error_from,
    fetchall,
    fetchone,
    from_db_datetime,
    to_db_datetime,
)
from .model import User, UserDraft
from .repository import UserRepository

_COLUMNS = "user_id, name, uid, gender, email, phone_number, created_at, updated_at"


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        name=row["name"],
        uid=row["uid"],
        gender=Gender(row["gender"]),
        email=row["email"],
        phone_number=row["phone_number"],
        created_at=from_db_datetime(row.get("created_at")),
        updated_at=from_db_datetime(row.get("updated_at")),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, column: str, value: object) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE {column}=%s", (value,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._get_one("user_id", int(user_id))

    def get_by_uid(self, uid: str) -> Optional[User]:
        return self._get_one("uid", uid)

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one("email", email)

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY created_at DESC, user_id DESC")
            return [_to_user(r) for r in fetchall(cur)]

    def create_user(self, draft: UserDraft, *, now: datetime) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(name, uid, gender, email, phone_number, created_at, updated_at)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        draft.name,
                        draft.uid,
                        draft.gender.value,
                        draft.email,
                        draft.phone_number,
                        to_db_datetime(now),
                        to_db_datetime(now),
                    ),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            dup = duplicate_error_from(e)
            if dup is None:
                raise
            raise dup from e

    def update_user(self, user_id: int, draft: UserDraft, *, now: datetime) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE users
                    SET name=%s, uid=%s, gender=%s, email=%s, phone_number=%s, updated_at=%s
                    WHERE user_id=%s
                    """,
                    (
                        draft.name,
                        draft.uid,
                        draft.gender.value,
                        draft.email,
                        draft.phone_number,
                        to_db_datetime(now),
                        int(user_id),
                    ),
                )
                return cur.rowcount > 0
        except IntegrityError as e:
            dup = duplicate_error_from(e)
            if dup is None:
                raise
            raise dup from e

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (int(user_id),))
            return cur.rowcount > 0
