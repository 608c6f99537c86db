from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from .model import WorkSession
from .repository import SessionRepository


class InMemorySessionRepository(SessionRepository):
    """Process-local clock store. Every method is atomic under one lock."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: dict[int, WorkSession] = {}
        self._next_id = 1

    def get_by_id(self, session_id: int) -> Optional[WorkSession]:
        with self._lock:
            return self._by_id.get(int(session_id))

    def get_open(self, employee_id: int) -> Optional[WorkSession]:
        with self._lock:
            return self._find_open(employee_id)

    def list_open(self) -> Sequence[WorkSession]:
        with self._lock:
            items = [s for s in self._by_id.values() if s.is_open]
        items.sort(key=lambda s: s.started_at)
        return items

    def create_open(self, *, employee_id: int, started_at: datetime) -> Optional[WorkSession]:
        with self._lock:
            if self._find_open(employee_id) is not None:
                return None
            session = WorkSession(
                session_id=self._next_id,
                employee_id=int(employee_id),
                started_at=started_at,
                ended_at=None,
            )
            self._by_id[session.session_id] = session
            self._next_id += 1
            return session

    def close_open(self, *, session_id: int, ended_at: datetime) -> bool:
        with self._lock:
            session = self._by_id.get(int(session_id))
            if session is None or not session.is_open or ended_at < session.started_at:
                return False
            self._by_id[session.session_id] = replace(session, ended_at=ended_at)
            return True

    def list_overlapping(
        self,
        *,
        start: datetime,
        end: datetime,
        employee_id: Optional[int] = None,
    ) -> Sequence[WorkSession]:
        with self._lock:
            items = [
                s
                for s in self._by_id.values()
                if (employee_id is None or s.employee_id == employee_id)
                and s.started_at < end
                and (s.ended_at is None or s.ended_at > start)
            ]
        items.sort(key=lambda s: (s.started_at, s.session_id))
        return items

    def _find_open(self, employee_id: int) -> Optional[WorkSession]:
        return next(
            (s for s in self._by_id.values() if s.employee_id == employee_id and s.is_open),
            None,
        )
