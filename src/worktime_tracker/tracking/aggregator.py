from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..core.constants import DEFAULT_WEEK_START
from ..core.enums import WindowKind
from ..core.exceptions import ValidationError
from ..sessions.model import WorkSession
from ..sessions.repository import SessionRepository
from .duration import elapsed_minutes
from .windows import Window, day_window, window_for


@dataclass(frozen=True)
class AggregateWindow:
    """Derived, never stored: minutes worked by one employee in one window."""

    employee_id: int
    window_kind: WindowKind
    anchor: date
    total_minutes: int


@dataclass(frozen=True)
class Totals:
    employee_id: int
    today_minutes: int
    week_minutes: int
    month_minutes: int


@dataclass(frozen=True)
class SessionEntry:
    session_id: int
    started_at: datetime
    ended_at: Optional[datetime]
    duration_minutes: int
    is_active: bool


@dataclass(frozen=True)
class DaySessions:
    day: date
    entries: list[SessionEntry]
    completed_entries: int
    active_entry: Optional[SessionEntry]
    total_minutes: int


def overlap_seconds(session: WorkSession, start: datetime, end: datetime, reference: datetime) -> int:
    """Seconds of the session inside [start, min(end, reference)).

    An open session counts up to the reference instant.
    """
    lo = max(session.started_at, start)
    hi = min(session.end_or(reference), end, reference)
    if hi <= lo:
        return 0
    return int((hi - lo).total_seconds())


class Aggregator:
    """Rolls sessions up into day/week/month totals.

    Reads are lock-free: the session set is fetched once per call and every
    total of that call is computed from the same snapshot.

    Each window counts [window_start, min(window_end, reference)). Overlaps
    are summed in seconds and truncated to whole minutes once per window.
    """

    def __init__(self, sessions: SessionRepository, *, week_start: int = DEFAULT_WEEK_START):
        self._sessions = sessions
        self._week_start = int(week_start)

    @property
    def week_start(self) -> int:
        return self._week_start

    def window(self, kind: WindowKind, reference: datetime) -> Window:
        return window_for(kind, reference, week_start=self._week_start)

    def _snapshot(self, employee_id: int, start: datetime, reference: datetime) -> Sequence[WorkSession]:
        return self._sessions.list_overlapping(start=start, end=reference, employee_id=employee_id)

    @staticmethod
    def _sum_minutes(snapshot: Sequence[WorkSession], window: Window, reference: datetime) -> int:
        seconds = sum(overlap_seconds(s, window.start, window.end, reference) for s in snapshot)
        return seconds // 60

    def total_for(self, employee_id: int, window_kind: WindowKind, reference: datetime) -> AggregateWindow:
        window = self.window(WindowKind(window_kind), reference)
        snapshot = self._snapshot(employee_id, window.start, reference)
        return AggregateWindow(
            employee_id=employee_id,
            window_kind=window.kind,
            anchor=window.anchor,
            total_minutes=self._sum_minutes(snapshot, window, reference),
        )

    def totals(self, employee_id: int, reference: datetime) -> Totals:
        day = self.window(WindowKind.DAY, reference)
        week = self.window(WindowKind.WEEK, reference)
        month = self.window(WindowKind.MONTH, reference)

        snapshot = self._snapshot(employee_id, min(week.start, month.start), reference)
        return Totals(
            employee_id=employee_id,
            today_minutes=self._sum_minutes(snapshot, day, reference),
            week_minutes=self._sum_minutes(snapshot, week, reference),
            month_minutes=self._sum_minutes(snapshot, month, reference),
        )

    def daily_totals(self, employee_id: int, start_day: date, end_day: date, reference: datetime) -> dict[date, int]:
        """Minutes per calendar day for start_day..end_day (inclusive), oldest first."""
        if end_day < start_day:
            raise ValidationError("end_day must not be before start_day")

        snapshot = self._snapshot(employee_id, day_window(start_day).start, reference)

        out: dict[date, int] = {}
        current = start_day
        while current <= end_day:
            out[current] = self._sum_minutes(snapshot, day_window(current), reference)
            current += timedelta(days=1)
        return out

    def sessions_for_day(self, employee_id: int, day: date, reference: datetime) -> DaySessions:
        window = day_window(day)
        if window.start >= reference:
            snapshot: Sequence[WorkSession] = []
        else:
            snapshot = self._sessions.list_overlapping(
                start=window.start,
                end=min(window.end, reference),
                employee_id=employee_id,
            )

        entries = [
            SessionEntry(
                session_id=s.session_id,
                started_at=s.started_at,
                ended_at=s.ended_at,
                duration_minutes=elapsed_minutes(s.started_at, s.end_or(reference)),
                is_active=s.is_open,
            )
            for s in snapshot
        ]
        entries.sort(key=lambda e: e.started_at, reverse=True)

        return DaySessions(
            day=day,
            entries=entries,
            completed_entries=sum(1 for e in entries if not e.is_active),
            active_entry=next((e for e in entries if e.is_active), None),
            total_minutes=self._sum_minutes(snapshot, window, reference),
        )
