from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime
from typing import Any, Iterator, Optional, Sequence

from ..common.datetime_utils import local_date, to_utc
from ..core.constants import (
    DEFAULT_DAILY_TAP_LIMIT,
    DEFAULT_RECENT_LOGS_LIMIT,
    DEFAULT_TIME_ZONE,
    NEW_LOG_TOPIC,
)
from ..core.enums import TapType
from ..core.exceptions import UidRejectedError
from ..identifiers.normalizer import normalize_uid
from ..logs.model import TapLog
from ..logs.repository import TapLogRepository
from ..realtime.broker import Notifier, NullNotifier
from ..users.repository import UserRepository
from .outcome import LimitReached, Recorded, Rejected, TapOutcome, Unregistered

logger = logging.getLogger(__name__)


def next_tap_type(todays_logs: Sequence[TapLog]) -> TapType:
    """Alternation rule. ``todays_logs`` is newest first."""
    if not todays_logs or todays_logs[0].type == TapType.TAP_OUT:
        return TapType.TAP_IN
    return TapType.TAP_OUT


class _KeyedLocks:
    """One lock per UID so two taps of the same badge cannot interleave."""

    def __init__(self):
        self._guard = threading.Lock()
        # key -> [lock, holders + waiters]; dropped when nobody needs it
        self._locks: dict[str, list] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]


class TapResolver:
    """Turns a raw badge scan into an attendance outcome.

    ``now`` is always passed in; the calendar day is derived from it in the
    configured time zone, so callers (and tests) control the clock.
    """

    def __init__(
        self,
        users: UserRepository,
        logs: TapLogRepository,
        notifier: Optional[Notifier] = None,
        *,
        time_zone: str = DEFAULT_TIME_ZONE,
        daily_limit: int = DEFAULT_DAILY_TAP_LIMIT,
        recent_limit: int = DEFAULT_RECENT_LOGS_LIMIT,
    ):
        self._users = users
        self._logs = logs
        self._notifier = notifier or NullNotifier()
        self._time_zone = time_zone
        self._daily_limit = int(daily_limit)
        self._recent_limit = int(recent_limit)
        self._locks = _KeyedLocks()

    def resolve_tap(self, raw: Any, now: datetime) -> TapOutcome:
        try:
            uid = normalize_uid(raw)
        except UidRejectedError as e:
            logger.info("Tap rejected (%s): %s", e.code.value, e)
            return Rejected(code=e.code, message=str(e))

        user = self._users.get_by_uid(uid)
        if not user:
            logger.info("Unregistered UID tapped: %s", uid)
            return Unregistered(uid=uid)

        today = local_date(now, self._time_zone)
        logger.debug("Processing tap for %s on %s", user.name, today)

        with self._locks.hold(uid):
            todays_logs = self._logs.list_for_uid_and_date(uid, today)
            if len(todays_logs) >= self._daily_limit:
                logger.info("Daily tap limit reached for %s (UID %s)", user.name, uid)
                return LimitReached(uid=uid, name=user.name, limit=self._daily_limit)

            log = TapLog(
                log_id=None,
                uid=uid,
                name=user.name,
                date=today,
                type=next_tap_type(todays_logs),
                timestamp=to_utc(now),
            )
            log = replace(log, log_id=self._logs.append(log))

        logger.info("%s recorded for %s (UID %s)", log.type.value, user.name, uid)

        outcome = Recorded(log=log, recent_logs=self._recent_logs())
        self._publish(outcome)
        return outcome

    def _recent_logs(self) -> list[TapLog]:
        try:
            return list(self._logs.list_recent(self._recent_limit))
        except Exception:
            # tap is already committed
            logger.exception("Failed to load recent logs after recording a tap")
            return []

    def _publish(self, outcome: Recorded) -> None:
        try:
            self._notifier.publish(NEW_LOG_TOPIC, outcome.to_json())
        except Exception:
            # tap is already committed
            logger.exception("Failed to publish %s event", NEW_LOG_TOPIC)
