from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.validators import require_positive
from ..core.enums import WindowKind
from ..core.exceptions import EmployeeNotFound
from ..employees.repository import EmployeeRepository
from .aggregator import Aggregator


@dataclass(frozen=True)
class Progress:
    employee_id: int
    week_minutes: int
    weekly_target_minutes: int
    percentage: float


def completion_percentage(worked_minutes: int, target_minutes: float) -> float:
    """Worked / target as a percentage. Not capped: over 100 means target exceeded."""
    require_positive(target_minutes, "weekly_target_minutes")
    return round(worked_minutes * 100 / target_minutes, 2)


class TargetTracker:
    """Weekly progress against the employee's target."""

    def __init__(self, aggregator: Aggregator, employees: EmployeeRepository):
        self._aggregator = aggregator
        self._employees = employees

    def progress(
        self,
        employee_id: int,
        weekly_target_minutes: Optional[int],
        reference: datetime,
    ) -> Progress:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise EmployeeNotFound(employee_id)
        if weekly_target_minutes is None:
            weekly_target_minutes = employee.weekly_target_minutes

        require_positive(weekly_target_minutes, "weekly_target_minutes")
        week = self._aggregator.total_for(employee_id, WindowKind.WEEK, reference)

        return Progress(
            employee_id=employee_id,
            week_minutes=week.total_minutes,
            weekly_target_minutes=int(weekly_target_minutes),
            percentage=completion_percentage(week.total_minutes, weekly_target_minutes),
        )
