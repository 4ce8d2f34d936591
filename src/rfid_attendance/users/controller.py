from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import DuplicateError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    svc = container.user_service

    def _body() -> dict:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    def _client_error(e: ValidationError):
        if isinstance(e, DuplicateError):
            return jsonify({"message": str(e), "error": f"Duplicate {e.field}: {e.value}"}), 400
        return jsonify({"message": "Validation failed", "error": str(e)}), 400

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    def list_users():
        return jsonify([u.to_json() for u in svc.list_users()])

    @app.route("/api/users/<int:user_id>", methods=["GET"], endpoint="get_user")
    def get_user(user_id: int):
        try:
            return jsonify(svc.get(user_id).to_json())
        except NotFoundError as e:
            logger.warning("User not found: %s", user_id)
            return jsonify({"message": str(e)}), 404

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    def create_user():
        try:
            user = svc.register(_body())
        except ValidationError as e:
            logger.info("Rejected user registration: %s", e)
            return _client_error(e)
        return jsonify(user.to_json()), 201

    @app.route("/api/users/<int:user_id>", methods=["PUT"], endpoint="update_user")
    def update_user(user_id: int):
        try:
            user = svc.update(user_id, _body())
        except NotFoundError as e:
            logger.warning("User not found: %s", user_id)
            return jsonify({"message": str(e)}), 404
        except ValidationError as e:
            logger.info("Rejected update of user %s: %s", user_id, e)
            return _client_error(e)
        return jsonify(user.to_json())

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    def delete_user(user_id: int):
        try:
            user = svc.delete(user_id)
        except NotFoundError as e:
            logger.warning("User not found: %s", user_id)
            return jsonify({"message": str(e)}), 404
        return jsonify({"message": "User deleted successfully", "user": user.to_json()})
