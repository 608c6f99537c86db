from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_instant, now_local, parse_iso_date
from ..common.http import reference_from_args
from ..common.validators import require_int
from ..core.enums import StartStatus, StopStatus
from ..core.exceptions import EmployeeNotFound, ValidationError
from ..container import Container
from .duration import elapsed_minutes
from .session_controller import StartResult, StopResult


def _start_payload(result: StartResult) -> dict:
    return {
        "session_id": result.session.session_id,
        "started_at": format_instant(result.session.started_at),
        "status": result.status.value,
    }


def _stop_payload(result: StopResult) -> dict:
    return {
        "session_id": result.session.session_id,
        "started_at": format_instant(result.session.started_at),
        "ended_at": format_instant(result.session.ended_at),
        "duration_minutes": result.duration_minutes,
        "status": result.status.value,
    }


def register(app: Flask, container: Container) -> None:
    def _require_employee(employee_id: int) -> None:
        employee = container.employees_repo.get_by_id(employee_id)
        if not employee or not employee.is_active:
            raise EmployeeNotFound(employee_id)

    @app.route("/api/employees/<int:employee_id>/time-tracking/start", methods=["POST"], endpoint="tracking_start")
    def tracking_start(employee_id: int):
        result = container.session_controller.start(employee_id, now=now_local())
        code = 201 if result.status == StartStatus.STARTED else 200
        return jsonify(_start_payload(result)), code

    @app.route("/api/employees/<int:employee_id>/time-tracking/stop", methods=["POST"], endpoint="tracking_stop")
    def tracking_stop(employee_id: int):
        result = container.session_controller.stop(employee_id, now=now_local())
        return jsonify(_stop_payload(result)), 200

    @app.route("/api/employees/<int:employee_id>/time-tracking/toggle", methods=["POST"], endpoint="tracking_toggle")
    def tracking_toggle(employee_id: int):
        """Single start/stop button: flips the state unless is_working is given."""
        data = request.get_json(silent=True) or {}
        want = data.get("is_working") if isinstance(data, dict) else data
        if want is not None and not isinstance(want, bool):
            raise ValidationError("is_working must be true, false or omitted")
        result = container.session_controller.toggle(
            employee_id,
            now=now_local(),
            want_working=want,
        )

        # Nothing changed: report the state the same way start/stop do.
        idle = StartStatus.ALREADY_WORKING if result.is_working else StopStatus.NOT_WORKING
        payload: dict = {"is_working": result.is_working, "status": idle.value}
        if result.start:
            payload.update(_start_payload(result.start))
        if result.stop:
            payload.update(_stop_payload(result.stop))
        return jsonify(payload), 200

    @app.route("/api/employees/<int:employee_id>/time-tracking/status", methods=["GET"], endpoint="tracking_status")
    def tracking_status(employee_id: int):
        state = container.session_controller.status(employee_id)
        now = now_local()
        return jsonify(
            {
                "is_working": state.is_working,
                "status": state.status.value,
                "open_since": format_instant(state.open_since),
                "current_session_minutes": elapsed_minutes(state.open_since, now) if state.open_since else 0,
            }
        )

    @app.route("/api/employees/<int:employee_id>/time-tracking/totals", methods=["GET"], endpoint="tracking_totals")
    def tracking_totals(employee_id: int):
        _require_employee(employee_id)
        totals = container.aggregator.totals(employee_id, reference_from_args())
        return jsonify(
            {
                "today_minutes": totals.today_minutes,
                "week_minutes": totals.week_minutes,
                "month_minutes": totals.month_minutes,
            }
        )

    @app.route("/api/employees/<int:employee_id>/time-tracking/progress", methods=["GET"], endpoint="tracking_progress")
    def tracking_progress(employee_id: int):
        raw_target = request.args.get("weekly_target_minutes")
        target = require_int(raw_target, "weekly_target_minutes") if raw_target else None

        progress = container.target_tracker.progress(employee_id, target, reference_from_args())
        return jsonify(
            {
                "percentage": progress.percentage,
                "week_minutes": progress.week_minutes,
                "weekly_target_minutes": progress.weekly_target_minutes,
            }
        )

    @app.route("/api/employees/<int:employee_id>/time-tracking/sessions", methods=["GET"], endpoint="tracking_sessions")
    def tracking_sessions(employee_id: int):
        """Time entries of one day (today by default), newest first."""
        _require_employee(employee_id)
        reference = reference_from_args()
        day_s = request.args.get("day")
        day = parse_iso_date(day_s) if day_s else reference.date()

        data = container.aggregator.sessions_for_day(employee_id, day, reference)

        def _entry(e) -> dict:
            return {
                "session_id": e.session_id,
                "started_at": format_instant(e.started_at),
                "ended_at": format_instant(e.ended_at),
                "duration_minutes": e.duration_minutes,
                "is_active": e.is_active,
            }

        return jsonify(
            {
                "day": data.day.isoformat(),
                "entries": [_entry(e) for e in data.entries],
                "completed_entries": data.completed_entries,
                "active_entry": _entry(data.active_entry) if data.active_entry else None,
                "total_minutes": data.total_minutes,
            }
        )
