from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import require_json_object
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/departments", methods=["GET"], endpoint="list_departments")
    def list_departments():
        return jsonify([d.to_dict() for d in container.lookup_service.list_departments()])

    @app.route("/api/departments", methods=["POST"], endpoint="create_department")
    def create_department():
        dept = container.lookup_service.create_department(require_json_object(request.get_json(silent=True)))
        return jsonify(dept.to_dict()), 201

    @app.route("/api/purposes", methods=["GET"], endpoint="list_purposes")
    def list_purposes():
        return jsonify([p.to_dict() for p in container.lookup_service.list_purposes()])
