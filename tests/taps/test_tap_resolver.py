from __future__ import annotations

import threading
from datetime import date, datetime, timedelta, timezone

import pytest

from fakes import ExplodingNotifier, InMemoryTapLogs, InMemoryUsers, RecordingNotifier, make_user
from rfid_attendance.core.enums import TapCode, TapType
from rfid_attendance.logs.model import TapLog
from rfid_attendance.taps.outcome import LimitReached, Recorded, Rejected, Unregistered
from rfid_attendance.taps.resolver import TapResolver, _KeyedLocks, next_tap_type

# 09:00 in Manila
NOW = datetime(2026, 2, 2, 1, 0, 0, tzinfo=timezone.utc)
TODAY = date(2026, 2, 2)


def _resolver(logs=None, notifier=None, **kwargs):
    users = InMemoryUsers([make_user(1, uid="AB12CD", name="Juan Dela Cruz")])
    return TapResolver(users, logs if logs is not None else InMemoryTapLogs(), notifier, **kwargs)


def _seed(logs: InMemoryTapLogs, n: int, *, uid: str = "AB12CD", day: date = TODAY) -> None:
    for i in range(n):
        logs.append(
            TapLog(
                log_id=None,
                uid=uid,
                name="Juan Dela Cruz",
                date=day,
                type=TapType.TAP_IN if i % 2 == 0 else TapType.TAP_OUT,
                timestamp=NOW - timedelta(minutes=60 - i),
            )
        )


def test_first_tap_of_day_is_tap_in():
    logs = InMemoryTapLogs()
    outcome = _resolver(logs).resolve_tap(b'{"uid": "AB12CD"}', NOW)

    assert isinstance(outcome, Recorded)
    assert outcome.log.type == TapType.TAP_IN
    assert outcome.log.date == TODAY
    assert outcome.log.name == "Juan Dela Cruz"
    assert logs.count_all() == 1


def test_tap_after_tap_in_is_tap_out():
    logs = InMemoryTapLogs()
    _seed(logs, 1)

    outcome = _resolver(logs).resolve_tap(b'{"uid": "AB12CD"}', NOW)

    assert isinstance(outcome, Recorded)
    assert outcome.log.type == TapType.TAP_OUT


def test_taps_alternate_through_the_day():
    logs = InMemoryTapLogs()
    resolver = _resolver(logs)

    kinds = [resolver.resolve_tap({"uid": "ab12cd"}, NOW + timedelta(minutes=i)).log.type for i in range(8)]

    assert kinds == [TapType.TAP_IN, TapType.TAP_OUT] * 4


def test_ninth_tap_hits_daily_limit_without_writing():
    logs = InMemoryTapLogs()
    _seed(logs, 8)

    outcome = _resolver(logs).resolve_tap(b'{"uid": "AB12CD"}', NOW)

    assert isinstance(outcome, LimitReached)
    assert outcome.to_json()["code"] == "LIMIT_REACHED"
    assert outcome.to_json()["name"] == "Juan Dela Cruz"
    assert logs.count_all() == 8


def test_daily_limit_is_configurable():
    logs = InMemoryTapLogs()
    _seed(logs, 2)

    outcome = _resolver(logs, daily_limit=2).resolve_tap({"uid": "AB12CD"}, NOW)

    assert isinstance(outcome, LimitReached)


def test_recovered_uid_from_garbage_body():
    users = InMemoryUsers([make_user(1, uid="123ABCDE7", name="Maria Santos")])
    logs = InMemoryTapLogs()

    outcome = TapResolver(users, logs).resolve_tap(b"garbage123ABCDE7more", NOW)

    assert isinstance(outcome, Recorded)
    assert outcome.log.uid == "123ABCDE7"


def test_body_without_hex_run_is_rejected():
    logs = InMemoryTapLogs()
    outcome = _resolver(logs).resolve_tap(b"no card here", NOW)

    assert outcome == Rejected(code=TapCode.MALFORMED_BODY, message="Malformed body and UID could not be extracted")
    assert outcome.status_code == 400
    assert logs.count_all() == 0


def test_unregistered_uid_does_not_write():
    logs = InMemoryTapLogs()
    notifier = RecordingNotifier()

    outcome = _resolver(logs, notifier).resolve_tap(b'{"uid": "FFEE0011"}', NOW)

    assert isinstance(outcome, Unregistered)
    body = outcome.to_json()
    assert body["code"] == "NOT_REGISTERED"
    assert body["error"] is False
    assert body["registrationHelp"]["example"]["uid"] == "FFEE0011"
    assert logs.count_all() == 0
    assert notifier.published == []


def test_previous_day_logs_do_not_count():
    logs = InMemoryTapLogs()
    _seed(logs, 8, day=TODAY - timedelta(days=1))

    outcome = _resolver(logs).resolve_tap({"uid": "AB12CD"}, NOW)

    assert isinstance(outcome, Recorded)
    assert outcome.log.type == TapType.TAP_IN


def test_day_boundary_follows_configured_time_zone():
    # 17:30 UTC on Feb 1 is already Feb 2 in Manila
    now = datetime(2026, 2, 1, 17, 30, tzinfo=timezone.utc)

    manila = _resolver().resolve_tap({"uid": "AB12CD"}, now)
    utc = _resolver(time_zone="UTC").resolve_tap({"uid": "AB12CD"}, now)

    assert manila.log.date == date(2026, 2, 2)
    assert utc.log.date == date(2026, 2, 1)


def test_recorded_tap_is_published_with_recent_logs():
    logs = InMemoryTapLogs()
    notifier = RecordingNotifier()
    _seed(logs, 12, uid="0A0B0C0D", day=TODAY - timedelta(days=1))

    outcome = _resolver(logs, notifier).resolve_tap({"uid": "AB12CD"}, NOW)

    assert len(notifier.published) == 1
    topic, payload = notifier.published[0]
    assert topic == "new-log"
    assert payload == outcome.to_json()
    assert payload["code"] == "SUCCESS"
    assert payload["type"] == "tap-in"
    assert payload["date"] == "2026-02-02"
    assert payload["timestamp"] == "2026-02-02T01:00:00.000Z"
    assert len(payload["logs"]) == 10
    assert payload["logs"][0]["id"] == outcome.log.log_id


def test_notifier_failure_does_not_fail_the_tap():
    logs = InMemoryTapLogs()

    outcome = _resolver(logs, ExplodingNotifier()).resolve_tap({"uid": "AB12CD"}, NOW)

    assert isinstance(outcome, Recorded)
    assert logs.count_all() == 1


def test_ledger_failure_propagates():
    logs = InMemoryTapLogs()
    logs.fail_on_append = True

    with pytest.raises(RuntimeError):
        _resolver(logs).resolve_tap({"uid": "AB12CD"}, NOW)


def test_next_tap_type_uses_latest_event():
    out = TapLog(log_id=2, uid="AB12CD", name="x", date=TODAY, type=TapType.TAP_OUT, timestamp=NOW)
    tap_in = TapLog(log_id=1, uid="AB12CD", name="x", date=TODAY, type=TapType.TAP_IN, timestamp=NOW)

    assert next_tap_type([]) == TapType.TAP_IN
    assert next_tap_type([out, tap_in]) == TapType.TAP_IN
    assert next_tap_type([tap_in]) == TapType.TAP_OUT


def test_concurrent_taps_for_one_badge_still_alternate():
    logs = InMemoryTapLogs()
    resolver = _resolver(logs)
    barrier = threading.Barrier(6)

    def tap():
        barrier.wait()
        resolver.resolve_tap({"uid": "AB12CD"}, NOW)

    threads = [threading.Thread(target=tap) for _ in range(6)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    kinds = [r.type for r in sorted(logs.logs, key=lambda r: r.log_id)]
    assert kinds == [TapType.TAP_IN, TapType.TAP_OUT] * 3
    assert len(resolver._locks) == 0


def test_keyed_locks_are_released_after_use():
    locks = _KeyedLocks()

    with locks.hold("AB12CD"):
        with locks.hold("CAFE0123"):
            assert len(locks) == 2
    assert len(locks) == 0

    with pytest.raises(RuntimeError):
        with locks.hold("AB12CD"):
            raise RuntimeError("boom")
    assert len(locks) == 0


def test_recent_logs_failure_still_reports_the_recorded_tap():
    logs = InMemoryTapLogs()
    logs.fail_on_list_recent = True
    notifier = RecordingNotifier()

    outcome = _resolver(logs, notifier).resolve_tap({"uid": "AB12CD"}, NOW)

    assert isinstance(outcome, Recorded)
    assert outcome.to_json()["logs"] == []
    assert outcome.log.type == TapType.TAP_IN
    assert logs.count_all() == 1
    assert len(notifier.published) == 1
