from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_optional_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/statistics/dashboard", methods=["GET"], endpoint="dashboard_statistics")
    def dashboard_statistics():
        return jsonify(container.statistics_service.dashboard().to_dict())

    @app.route("/api/statistics/visitors", methods=["GET"], endpoint="visitor_statistics")
    def visitor_statistics():
        rows = container.statistics_service.daily(
            start_date=parse_optional_date(request.args.get("startDate"), "startDate"),
            end_date=parse_optional_date(request.args.get("endDate"), "endDate"),
        )
        return jsonify([r.to_dict() for r in rows])
