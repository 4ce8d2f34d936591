from __future__ import annotations

import re
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, List, Optional

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..common.datetime_utils import to_utc
from ..core.exceptions import DuplicateError
from .connection import DatabaseConnection

_DUP_KEY_RE = re.compile(r"Duplicate entry '(?P<value>.*)' for key '(?:[\w]+\.)?(?:uq_\w+?_)?(?P<field>\w+)'")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def to_db_datetime(value: datetime) -> datetime:
    """MySQL DATETIME has no zone; we always store naive UTC."""
    return to_utc(value).replace(tzinfo=None)


def from_db_datetime(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    return to_utc(value)


def duplicate_error_from(exc: IntegrityError) -> Optional[DuplicateError]:
    """Translate a MySQL duplicate-key error into a DuplicateError.

    Returns None for other integrity errors (e.g. NOT NULL violations).
    """

    if exc.errno != errorcode.ER_DUP_ENTRY:
        return None
    match = _DUP_KEY_RE.search(str(exc.msg or exc))
    if not match:
        return DuplicateError("record")
    return DuplicateError(match.group("field"), match.group("value"))
