from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.web import admin_required, json_error
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _reference_date() -> date:
        value = request.args.get("date")
        return parse_iso_date(value) if value else now_local().date()

    @app.route("/admin/timesheet", endpoint="admin_timesheet")
    @admin_required
    def admin_timesheet():
        try:
            reference = _reference_date()
        except ValueError:
            return json_error("date must be YYYY-MM-DD", 400)

        week = container.timesheet_service.build_week(reference)
        return jsonify(week.to_dict())

    @app.route("/admin/timesheet.csv", endpoint="admin_timesheet_csv")
    @admin_required
    def admin_timesheet_csv():
        try:
            reference = _reference_date()
        except ValueError:
            return json_error("date must be YYYY-MM-DD", 400)

        export = container.timesheet_service.export_week(reference)
        return app.response_class(
            export.content.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={export.filename}"},
        )
