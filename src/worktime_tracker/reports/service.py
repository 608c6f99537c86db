from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from ..core.enums import WorkStatus
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from ..productivity.service import ProductivityService
from ..sessions.repository import SessionRepository
from ..tracking.aggregator import Aggregator
from ..tracking.duration import elapsed_minutes, format_minutes
from ..tracking.target import completion_percentage

STATUS_FILTERS = {"all", WorkStatus.WORKING.value, WorkStatus.OFFLINE.value}


@dataclass(frozen=True)
class TeamBoard:
    rows: list[dict]
    stats: dict


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


class TeamReportService:
    """Read-side views over the whole team: hours board and session export."""

    def __init__(
        self,
        employees: EmployeeRepository,
        sessions: SessionRepository,
        aggregator: Aggregator,
        productivity: ProductivityService,
    ):
        self._employees = employees
        self._sessions = sessions
        self._aggregator = aggregator
        self._productivity = productivity

    def build_team_board(self, *, reference: datetime, search: str = "", status: str = "all") -> TeamBoard:
        status = (status or "all").lower()
        if status not in STATUS_FILTERS:
            raise ValidationError(f"Unknown status filter: {status!r}")

        open_by_employee = {s.employee_id: s for s in self._sessions.list_open()}

        all_rows: list[dict] = []
        for e in self._employees.list_active():
            current = open_by_employee.get(e.employee_id)
            totals = self._aggregator.totals(e.employee_id, reference)
            signal = self._productivity.signal_for_employee(e, reference)

            all_rows.append(
                {
                    "employee_id": e.employee_id,
                    "display_name": e.display_name,
                    "role": e.role.value,
                    "status": (WorkStatus.WORKING if current else WorkStatus.OFFLINE).value,
                    "is_working": current is not None,
                    "open_since": current.started_at.isoformat() if current else None,
                    "current_session_minutes": elapsed_minutes(current.started_at, reference) if current else 0,
                    "today_minutes": totals.today_minutes,
                    "week_minutes": totals.week_minutes,
                    "month_minutes": totals.month_minutes,
                    "weekly_target_minutes": e.weekly_target_minutes,
                    "progress_percentage": completion_percentage(totals.week_minutes, e.weekly_target_minutes),
                    "productivity": signal.score,
                    "productivity_band": signal.band.value,
                    "streak_days": signal.streak_days,
                }
            )

        # Working employees first, like the live board.
        all_rows.sort(key=lambda r: (not r["is_working"], r["display_name"].lower()))

        needle = (search or "").strip().lower()
        rows = [
            r
            for r in all_rows
            if (not needle or needle in r["display_name"].lower() or needle in r["role"].lower())
            and (status == "all" or r["status"] == status)
        ]

        return TeamBoard(rows=rows, stats=self._team_stats(all_rows))

    @staticmethod
    def _team_stats(rows: list[dict]) -> dict:
        total_target = sum(r["weekly_target_minutes"] for r in rows)
        total_week = sum(r["week_minutes"] for r in rows)
        return {
            "employees": len(rows),
            "active_count": sum(1 for r in rows if r["is_working"]),
            "team_today_minutes": sum(r["today_minutes"] for r in rows),
            "average_productivity": round(sum(r["productivity"] for r in rows) / len(rows)) if rows else 0,
            "team_weekly_progress": round(total_week * 100 / total_target) if total_target else 0,
        }

    def build_session_report(
        self,
        *,
        start: date,
        end: date,
        reference: datetime,
        employee_id: int | None = None,
    ) -> ReportData:
        if end < start:
            raise ValidationError("end must not be before start")

        range_start = datetime.combine(start, time.min)
        range_end = min(datetime.combine(end + timedelta(days=1), time.min), reference)
        sessions = self._sessions.list_overlapping(start=range_start, end=range_end, employee_id=employee_id)

        names = {e.employee_id: e for e in self._employees.list_active()}
        summary_map: dict[int, dict] = {}
        out_rows: list[dict] = []

        for s in sessions:
            if s.employee_id not in names:
                # Deactivated since: keep the name on historical rows.
                names[s.employee_id] = self._employees.get_by_id(s.employee_id)
            employee = names[s.employee_id]
            minutes = elapsed_minutes(s.started_at, s.end_or(reference))

            out_rows.append(
                {
                    "session_id": s.session_id,
                    "employee_id": s.employee_id,
                    "display_name": employee.display_name if employee else "-",
                    "role": employee.role.value if employee else "-",
                    "work_date": s.started_at.strftime("%Y-%m-%d"),
                    "started_at": s.started_at.strftime("%H:%M:%S"),
                    "ended_at": s.ended_at.strftime("%H:%M:%S") if s.ended_at else "-",
                    "duration_minutes": minutes,
                    "worked_hours": format_minutes(minutes),
                    "status": "open" if s.is_open else "closed",
                }
            )

            summary = summary_map.get(s.employee_id)
            if not summary:
                summary = {
                    "employee_id": s.employee_id,
                    "display_name": employee.display_name if employee else "-",
                    "total_minutes": 0,
                }
                summary_map[s.employee_id] = summary
            summary["total_minutes"] += minutes

        summary_rows = [
            {**s, "total_hours": format_minutes(s["total_minutes"])}
            for s in sorted(summary_map.values(), key=lambda x: x["total_minutes"], reverse=True)
        ]
        return ReportData(rows=out_rows, summary=summary_rows)
