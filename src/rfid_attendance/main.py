from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .logs.controller import register as register_logs
from .realtime.controller import register as register_realtime
from .system.controller import register as register_system
from .taps.controller import register as register_taps
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

_SETTINGS_KEYS = (
    "DEBUG",
    "TESTING",
    "TIME_ZONE",
    "DAILY_TAP_LIMIT",
    "RECENT_LOGS_LIMIT",
    "PHONE_PATTERN",
    "ENABLE_DEBUG_ENDPOINTS",
    "STREAM_QUEUE_SIZE",
    "STREAM_KEEPALIVE_SECONDS",
)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": True, "message": e.description, "code": e.name.upper().replace(" ", "_")}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": True, "message": "Something went wrong!", "code": "GLOBAL_ERROR"}), 500


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    for key in _SETTINGS_KEYS:
        if hasattr(settings, key):
            app.config[key] = getattr(settings, key)

    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    CORS(app, origins=getattr(settings, "CORS_ORIGINS", "*"))

    if container is None:
        db_config = dict(getattr(settings, "DB_CONFIG"))
        container = build_container(
            db_config=db_config,
            time_zone=app.config["TIME_ZONE"],
            daily_limit=int(app.config["DAILY_TAP_LIMIT"]),
            recent_limit=int(app.config["RECENT_LOGS_LIMIT"]),
            phone_pattern=app.config["PHONE_PATTERN"],
            queue_size=int(app.config["STREAM_QUEUE_SIZE"]),
        )
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn)
            logger.info("Schema ready (tables=%d)", len(list_tables(container.conn)))

    app.extensions["rfid_attendance"] = container

    @app.before_request
    def log_request():
        logger.info("%s %s - Content-Type: %s", request.method, request.path, request.content_type or "none")

    _register_error_handlers(app)

    register_taps(app, container)
    register_logs(app, container)
    register_users(app, container)
    register_realtime(app, container)
    register_system(app, container)

    return app
