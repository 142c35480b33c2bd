from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import require_json_object
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/settings", methods=["GET"], endpoint="list_settings")
    def list_settings():
        return jsonify([s.to_dict() for s in container.setting_service.list_all()])

    @app.route("/api/settings/<key>", methods=["GET"], endpoint="get_setting")
    def get_setting(key: str):
        return jsonify(container.setting_service.get(key).to_dict())

    @app.route("/api/settings/<key>", methods=["PUT"], endpoint="update_setting")
    def update_setting(key: str):
        setting = container.setting_service.update(key, require_json_object(request.get_json(silent=True)))
        app.logger.info("Setting %s updated", setting.setting_key)
        return jsonify(setting.to_dict())
