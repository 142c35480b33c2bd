from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import require_json_object
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/hosts", methods=["GET"], endpoint="list_hosts")
    def list_hosts():
        return jsonify([h.to_dict() for h in container.host_service.list_active()])

    @app.route("/api/hosts", methods=["POST"], endpoint="create_host")
    def create_host():
        host = container.host_service.create(require_json_object(request.get_json(silent=True)))
        return jsonify(host.to_dict()), 201
