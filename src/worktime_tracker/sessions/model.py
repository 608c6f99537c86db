from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class WorkSession:
    """Domain entity: one clock-in/clock-out interval of an employee.

    ended_at is None while the session is open (employee is working).
    Closing is the only mutation and happens once.
    """

    session_id: int
    employee_id: int
    started_at: datetime
    ended_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.ended_at is None

    def end_or(self, reference: datetime) -> datetime:
        """Effective end: ended_at, or the reference instant for an open session."""
        return self.ended_at if self.ended_at is not None else reference
