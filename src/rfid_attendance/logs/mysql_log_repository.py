from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import TapType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import TapLog
from .repository import TapLogRepository

_COLUMNS = "log_id, uid, name, date, type, timestamp"


def _to_log(row: dict) -> TapLog:
    return TapLog(
        log_id=int(row["log_id"]),
        uid=row["uid"],
        name=row["name"],
        date=row["date"],
        type=TapType(row["type"]),
        timestamp=from_db_datetime(row["timestamp"]),
    )


class MySQLTapLogRepository(TapLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str, params: tuple, *, ascending: bool = False, limit: Optional[int] = None) -> list[TapLog]:
        order = "ASC" if ascending else "DESC"
        sql = f"SELECT {_COLUMNS} FROM tap_logs {where} ORDER BY timestamp {order}, log_id {order}"
        if limit is not None:
            sql += " LIMIT %s"
            params = params + (int(limit),)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_to_log(r) for r in fetchall(cur)]

    def append(self, log: TapLog) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tap_logs(uid, name, date, type, timestamp)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (log.uid, log.name, log.date, log.type.value, to_db_datetime(log.timestamp)),
            )
            return int(cur.lastrowid)

    def get_by_id(self, log_id: int) -> Optional[TapLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM tap_logs WHERE log_id=%s", (int(log_id),))
            row = fetchone(cur)
            return _to_log(row) if row else None

    def list_for_uid_and_date(self, uid: str, day: date) -> Sequence[TapLog]:
        return self._select("WHERE uid=%s AND date=%s", (uid, day))

    def list_for_date(self, day: date, *, ascending: bool = False) -> Sequence[TapLog]:
        return self._select("WHERE date=%s", (day,), ascending=ascending)

    def list_for_uid(self, uid: str, *, limit: Optional[int] = None) -> Sequence[TapLog]:
        return self._select("WHERE uid=%s", (uid,), limit=limit)

    def list_recent(self, limit: Optional[int] = None) -> Sequence[TapLog]:
        return self._select("", (), limit=limit)

    def count_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM tap_logs")
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def delete_by_id(self, log_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM tap_logs WHERE log_id=%s", (int(log_id),))
            return cur.rowcount > 0
