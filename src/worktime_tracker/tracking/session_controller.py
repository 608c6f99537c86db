from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import floor_to_minute
from ..core.enums import StartStatus, StopStatus, WorkStatus
from ..core.exceptions import EmployeeNotFound, NotWorking, StoreUnavailable
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..sessions.model import WorkSession
from ..sessions.repository import SessionRepository
from .duration import elapsed_minutes
from .locks import KeyedLock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StartResult:
    session: WorkSession
    status: StartStatus


@dataclass(frozen=True)
class StopResult:
    session: WorkSession
    duration_minutes: int
    status: StopStatus = StopStatus.STOPPED


@dataclass(frozen=True)
class ToggleResult:
    is_working: bool
    start: Optional[StartResult] = None
    stop: Optional[StopResult] = None


@dataclass(frozen=True)
class WorkState:
    employee_id: int
    status: WorkStatus
    open_session: Optional[WorkSession] = None

    @property
    def is_working(self) -> bool:
        return self.status == WorkStatus.WORKING

    @property
    def open_since(self) -> Optional[datetime]:
        return self.open_session.started_at if self.open_session else None


class SessionController:
    """Use case: clock in / clock out.

    The only writer of the session store. start/stop/toggle run their
    check-then-write sequence under a per-employee lock; the store's
    conditional writes cover concurrent writers in other processes.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        employees: EmployeeRepository,
        *,
        locks: KeyedLock | None = None,
    ):
        self._sessions = sessions
        self._employees = employees
        self._locks = locks or KeyedLock()

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee or not employee.is_active:
            raise EmployeeNotFound(employee_id)
        return employee

    def start(self, employee_id: int, *, now: datetime) -> StartResult:
        self._require_employee(employee_id)
        with self._locks.hold(employee_id):
            return self._start_locked(employee_id, now)

    def stop(self, employee_id: int, *, now: datetime) -> StopResult:
        self._require_employee(employee_id)
        with self._locks.hold(employee_id):
            return self._stop_locked(employee_id, now)

    def toggle(self, employee_id: int, *, now: datetime, want_working: Optional[bool] = None) -> ToggleResult:
        """Flip the state, or move to want_working when given.

        Asking for the state the employee is already in changes nothing.
        """
        self._require_employee(employee_id)
        with self._locks.hold(employee_id):
            current = self._sessions.get_open(employee_id)
            target = current is None if want_working is None else bool(want_working)

            if target and current is None:
                return ToggleResult(is_working=True, start=self._start_locked(employee_id, now))
            if not target and current is not None:
                return ToggleResult(is_working=False, stop=self._stop_locked(employee_id, now))

            return ToggleResult(is_working=current is not None)

    def status(self, employee_id: int) -> WorkState:
        self._require_employee(employee_id)
        current = self._sessions.get_open(employee_id)
        if current is None:
            return WorkState(employee_id=employee_id, status=WorkStatus.OFFLINE)
        return WorkState(employee_id=employee_id, status=WorkStatus.WORKING, open_session=current)

    def _start_locked(self, employee_id: int, now: datetime) -> StartResult:
        now = floor_to_minute(now)
        existing = self._sessions.get_open(employee_id)
        if existing:
            logger.info("Employee %s already working since %s", employee_id, existing.started_at)
            return StartResult(session=existing, status=StartStatus.ALREADY_WORKING)

        created = self._sessions.create_open(employee_id=employee_id, started_at=now)
        if created is None:
            # Another writer opened a session between our read and insert.
            existing = self._sessions.get_open(employee_id)
            if existing is None:
                raise StoreUnavailable(f"Open session of employee {employee_id} could not be read back")
            return StartResult(session=existing, status=StartStatus.ALREADY_WORKING)

        logger.info("Employee %s started working at %s (session %s)", employee_id, now, created.session_id)
        return StartResult(session=created, status=StartStatus.STARTED)

    def _stop_locked(self, employee_id: int, now: datetime) -> StopResult:
        now = floor_to_minute(now)
        current = self._sessions.get_open(employee_id)
        if current is None:
            raise NotWorking(employee_id)

        ended_at = now
        if ended_at < current.started_at:
            logger.warning(
                "Clock skew on stop for employee %s: now %s is before start %s, clamped",
                employee_id,
                now,
                current.started_at,
            )
            ended_at = current.started_at

        if not self._sessions.close_open(session_id=current.session_id, ended_at=ended_at):
            # Closed by another writer in the meantime.
            raise NotWorking(employee_id)

        closed = replace(current, ended_at=ended_at)
        duration = elapsed_minutes(closed.started_at, ended_at)
        logger.info(
            "Employee %s stopped working at %s (session %s, %s min)",
            employee_id,
            ended_at,
            closed.session_id,
            duration,
        )
        return StopResult(session=closed, duration_minutes=duration)
