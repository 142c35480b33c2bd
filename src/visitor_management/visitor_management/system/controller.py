from __future__ import annotations

import time
from datetime import datetime, timezone

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..container import Container
from ..core.constants import VISITOR_SCHEMA_VERSION
from ..core.exceptions import NotFoundError, ValidationError

HEALTH_PATH = "/api/health"


def register(app: Flask, container: Container) -> None:
    started = time.monotonic()

    @app.before_request
    def require_database():
        """Answer 503 for API calls while the database is unreachable."""

        if not request.path.startswith("/api/") or request.path == HEALTH_PATH:
            return None
        if container.db.is_connected:
            return None

        app.logger.warning("Database disconnected, attempting reconnect before %s %s", request.method, request.path)
        if container.db.ensure_connection():
            return None

        return jsonify({"error": "Database connection lost. Reconnecting...", "retrying": True}), 503

    @app.route(HEALTH_PATH, methods=["GET"], endpoint="health")
    def health():
        body = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.monotonic() - started, 3),
            "schemaVersion": VISITOR_SCHEMA_VERSION,
        }
        try:
            container.db.pool.ping()
        except Exception as e:
            container.db.mark_disconnected()
            body.update(status="error", database="disconnected", message=str(e), pool=container.db.stats())
            return jsonify(body), 500

        container.db.mark_connected()
        body.update(status="ok", database="connected", pool=container.db.stats())
        return jsonify(body)

    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(NotFoundError)
    def handle_not_found(e: NotFoundError):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        if isinstance(e, HTTPException):
            return jsonify({"error": e.description}), e.code
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": str(e)}), 500
