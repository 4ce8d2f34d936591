from __future__ import annotations

import time

from flask import Flask, jsonify

from ..common.datetime_utils import isoformat_utc, now_utc
from ..container import Container
from ..identifiers.normalizer import canonicalize_uid

_STARTED = time.monotonic()


def register(app: Flask, container: Container) -> None:
    logs = container.log_service

    @app.route("/api/health", endpoint="health")
    def health():
        now = now_utc()
        return jsonify(
            {
                "status": "OK",
                "timestamp": isoformat_utc(now),
                "message": "Server is running",
                "today": logs.today(now).isoformat(),
                "uptime": round(time.monotonic() - _STARTED, 3),
            }
        )

    if not app.config.get("ENABLE_DEBUG_ENDPOINTS", False):
        return

    @app.route("/api/debug/logs", endpoint="debug_logs")
    def debug_logs():
        today = logs.today()
        today_logs = logs.list_for_date(today)
        return jsonify(
            {
                "today": today.isoformat(),
                "todayLogsCount": len(today_logs),
                "todayLogs": [log.to_json() for log in today_logs[:10]],
                "recentLogs": [log.to_json() for log in logs.list_recent(10)],
                "totalLogsInDB": logs.count_all(),
            }
        )

    @app.route("/api/debug/uid/<uid>", endpoint="debug_uid")
    def debug_uid(uid: str):
        clean = canonicalize_uid(uid)
        user = container.user_service.find_by_uid(clean)
        today_logs = logs.list_for_uid_today(clean)
        return jsonify(
            {
                "uid": clean,
                "today": logs.today().isoformat(),
                "userExists": user is not None,
                "user": {"name": user.name, "uid": user.uid} if user else None,
                "todayLogsCount": len(today_logs),
                "todayLogs": [log.to_json() for log in today_logs],
                "recentUserLogs": [log.to_json() for log in logs.list_for_uid(clean, limit=10)],
            }
        )
