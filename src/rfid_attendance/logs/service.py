from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import local_date, now_utc
from ..core.constants import DEFAULT_RECENT_LOGS_LIMIT, DEFAULT_TIME_ZONE
from ..core.exceptions import NotFoundError
from ..identifiers.normalizer import canonicalize_uid
from .model import TapLog
from .repository import TapLogRepository
from .summary import DaySummaryReport, summarize_day

logger = logging.getLogger(__name__)


class LogService:
    """Read side of the attendance ledger, plus admin deletion."""

    def __init__(
        self,
        logs: TapLogRepository,
        *,
        time_zone: str = DEFAULT_TIME_ZONE,
        recent_limit: int = DEFAULT_RECENT_LOGS_LIMIT,
    ):
        self._logs = logs
        self._time_zone = time_zone
        self._recent_limit = int(recent_limit)

    def today(self, now: datetime | None = None) -> date:
        return local_date(now or now_utc(), self._time_zone)

    def list_all(self) -> Sequence[TapLog]:
        return self._logs.list_recent()

    def list_recent(self, limit: Optional[int] = None) -> Sequence[TapLog]:
        return self._logs.list_recent(self._recent_limit if limit is None else limit)

    def list_for_date(self, day: date) -> Sequence[TapLog]:
        return self._logs.list_for_date(day)

    def list_today(self, now: datetime | None = None) -> Sequence[TapLog]:
        return self._logs.list_for_date(self.today(now))

    def list_for_uid(self, uid: str, *, limit: Optional[int] = None) -> Sequence[TapLog]:
        return self._logs.list_for_uid(canonicalize_uid(uid), limit=limit)

    def list_for_uid_today(self, uid: str, now: datetime | None = None) -> Sequence[TapLog]:
        return self._logs.list_for_uid_and_date(canonicalize_uid(uid), self.today(now))

    def count_all(self) -> int:
        return self._logs.count_all()

    def delete(self, log_id: int) -> TapLog:
        log = self._logs.get_by_id(log_id)
        if not log or not self._logs.delete_by_id(log_id):
            raise NotFoundError("Log not found")
        logger.info("Deleted log %s (%s %s on %s)", log_id, log.uid, log.type.value, log.date)
        return log

    def summary_for(self, day: date) -> DaySummaryReport:
        logs = self._logs.list_for_date(day, ascending=True)
        users = summarize_day(logs)
        logger.info("Summary generated for %d users on %s", len(users), day)
        return DaySummaryReport(day=day, users=users)
