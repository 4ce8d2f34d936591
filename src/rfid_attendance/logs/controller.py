from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.exceptions import NotFoundError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    svc = container.log_service

    def _parse_date(value: str):
        try:
            return parse_iso_date(value)
        except ValueError:
            return None

    def _bad_date(value: str):
        return jsonify({"message": "Date must be in YYYY-MM-DD format", "error": f"Invalid date: {value}"}), 400

    @app.route("/api/logs", methods=["GET"], endpoint="logs_all")
    def logs_all():
        logs = svc.list_all()
        logger.info("Retrieved %d logs", len(logs))
        return jsonify([log.to_json() for log in logs])

    @app.route("/api/logs/today", methods=["GET"], endpoint="logs_today")
    def logs_today():
        logs = svc.list_today()
        logger.info("Retrieved %d logs for today", len(logs))
        return jsonify([log.to_json() for log in logs])

    @app.route("/api/logs/date/<day>", methods=["GET"], endpoint="logs_for_date")
    def logs_for_date(day: str):
        parsed = _parse_date(day)
        if parsed is None:
            return _bad_date(day)
        logs = svc.list_for_date(parsed)
        logger.info("Retrieved %d logs for %s", len(logs), day)
        return jsonify([log.to_json() for log in logs])

    @app.route("/api/logs/user/<uid>", methods=["GET"], endpoint="logs_for_user")
    def logs_for_user(uid: str):
        logs = svc.list_for_uid(uid)
        logger.info("Retrieved %d logs for UID %s", len(logs), uid)
        return jsonify([log.to_json() for log in logs])

    @app.route("/api/logs/<int:log_id>", methods=["DELETE"], endpoint="delete_log")
    def delete_log(log_id: int):
        try:
            log = svc.delete(log_id)
        except NotFoundError as e:
            return jsonify({"message": str(e)}), 404
        return jsonify({"message": "Log deleted successfully", "deletedLog": log.to_json()})

    @app.route("/api/logs/summary/<day>", methods=["GET"], endpoint="logs_summary")
    def logs_summary(day: str):
        parsed = _parse_date(day)
        if parsed is None:
            return _bad_date(day)
        return jsonify(svc.summary_for(parsed).to_json())
