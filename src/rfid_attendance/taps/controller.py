from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_utc
from ..container import Container
from ..core.enums import TapCode

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/tap", methods=["POST"], endpoint="tap")
    def tap():
        # Raw body on purpose: readers send JSON, plain text or junk-wrapped bytes
        raw = request.get_data(cache=False)
        logger.debug("Incoming tap body: %r", raw)

        try:
            outcome = container.tap_resolver.resolve_tap(raw, now_utc())
        except Exception:
            logger.exception("Tap processing failed")
            return (
                jsonify({"error": True, "message": "Internal server error", "code": TapCode.SERVER_ERROR.value}),
                500,
            )

        return jsonify(outcome.to_json()), outcome.status_code
