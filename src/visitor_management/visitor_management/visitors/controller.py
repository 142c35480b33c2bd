from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_optional_date
from ..common.validators import require_json_object
from ..container import Container
from .csv_export import export_filename, visitors_to_csv
from .service import parse_status


def register(app: Flask, container: Container) -> None:
    def _filters() -> dict:
        return {
            "start_date": parse_optional_date(request.args.get("startDate"), "startDate"),
            "end_date": parse_optional_date(request.args.get("endDate"), "endDate"),
            "status": parse_status(request.args.get("status")),
        }

    @app.route("/api/visitors", methods=["GET"], endpoint="list_visitors")
    def list_visitors():
        visitors = container.visitor_service.list_visitors(**_filters())
        return jsonify([v.to_dict() for v in visitors])

    @app.route("/api/visitors/export/csv", methods=["GET"], endpoint="export_visitors_csv")
    def export_visitors_csv():
        visitors = container.visitor_service.list_visitors(**_filters())
        body = visitors_to_csv(visitors)
        filename = export_filename(now_local().date())
        return app.response_class(
            body.encode("utf-8"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/visitors/<visitor_id>", methods=["GET"], endpoint="get_visitor")
    def get_visitor(visitor_id: str):
        return jsonify(container.visitor_service.get(visitor_id).to_dict())

    @app.route("/api/visitors/checkin", methods=["POST"], endpoint="checkin_visitor")
    def checkin_visitor():
        payload = require_json_object(request.get_json(silent=True))
        visitor = container.visitor_service.check_in(payload)
        app.logger.info("Visitor %s checked in (id=%s)", visitor.name, visitor.id)
        return jsonify(visitor.to_dict()), 201

    @app.route("/api/visitors/<visitor_id>/checkout", methods=["PUT"], endpoint="checkout_visitor")
    def checkout_visitor(visitor_id: str):
        visitor = container.visitor_service.check_out(visitor_id)
        app.logger.info("Visitor %s checked out (id=%s)", visitor.name, visitor.id)
        return jsonify(visitor.to_dict())
