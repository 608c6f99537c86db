from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import WorkSession


class SessionRepository(Protocol):
    """Clock store: durable record of work sessions (open + closed).

    Writes are conditional so the store itself refuses a second open
    session per employee and a second close of the same session.
    """

    def get_by_id(self, session_id: int) -> Optional[WorkSession]:
        raise NotImplementedError

    def get_open(self, employee_id: int) -> Optional[WorkSession]:
        raise NotImplementedError

    def list_open(self) -> Sequence[WorkSession]:
        raise NotImplementedError

    def create_open(self, *, employee_id: int, started_at: datetime) -> Optional[WorkSession]:
        """Insert an open session; None if the employee already has one."""

        raise NotImplementedError

    def close_open(self, *, session_id: int, ended_at: datetime) -> bool:
        """Set ended_at only if the session is still open."""

        raise NotImplementedError

    def list_overlapping(
        self,
        *,
        start: datetime,
        end: datetime,
        employee_id: Optional[int] = None,
    ) -> Sequence[WorkSession]:
        """Sessions with started_at < end and (open or ended_at > start), oldest first."""

        raise NotImplementedError
