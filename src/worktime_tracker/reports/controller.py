from __future__ import annotations

import csv
import io
from datetime import timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import reference_from_args
from ..common.validators import require_int
from ..core.constants import DEFAULT_EXPORT_DAYS
from ..container import Container
from .service import ReportData

EXPORT_FIELDS = [
    "session_id",
    "employee_id",
    "display_name",
    "role",
    "work_date",
    "started_at",
    "ended_at",
    "duration_minutes",
    "worked_hours",
    "status",
]


def register(app: Flask, container: Container) -> None:
    def _write_report_csv(*, data: ReportData, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=EXPORT_FIELDS)
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/hours", methods=["GET"], endpoint="team_hours")
    def team_hours():
        board = container.team_report_service.build_team_board(
            reference=reference_from_args(),
            search=request.args.get("search", ""),
            status=request.args.get("status", "all"),
        )
        return jsonify({"employees": board.rows, "stats": board.stats})

    @app.route("/api/hours/export.csv", methods=["GET"], endpoint="team_hours_csv")
    def team_hours_csv():
        reference = reference_from_args()
        end_s = request.args.get("end")
        start_s = request.args.get("start")
        end = parse_iso_date(end_s) if end_s else reference.date()
        start = parse_iso_date(start_s) if start_s else end - timedelta(days=DEFAULT_EXPORT_DAYS - 1)

        employee_s = request.args.get("employee_id")
        data = container.team_report_service.build_session_report(
            start=start,
            end=end,
            reference=reference,
            employee_id=require_int(employee_s, "employee_id") if employee_s else None,
        )

        filename = f"work_sessions_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return _write_report_csv(data=data, filename=filename)
