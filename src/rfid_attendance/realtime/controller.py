from __future__ import annotations

from flask import Flask, Response, stream_with_context

from ..container import Container
from .broker import stream_events


def register(app: Flask, container: Container) -> None:
    keepalive = float(app.config.get("STREAM_KEEPALIVE_SECONDS", 15))

    @app.route("/api/stream", endpoint="stream")
    def stream():
        """Server-sent events: one ``new-log`` event per recorded tap."""
        return Response(
            stream_with_context(stream_events(container.broker, keepalive_seconds=keepalive)),
            mimetype="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )
