from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..core.constants import STREAK_LOOKBACK_DAYS, WORKDAYS_PER_WEEK
from ..core.enums import ProductivityBand
from ..core.exceptions import EmployeeNotFound
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..tracking.aggregator import Aggregator
from .calculator.base import ProductivityCalculator, WorkHistory
from .calculator.standard_calculator import StandardProductivityCalculator


@dataclass(frozen=True)
class ProductivitySignal:
    employee_id: int
    score: int
    band: ProductivityBand
    streak_days: int


def band_for(score: int) -> ProductivityBand:
    if score >= 95:
        return ProductivityBand.EXCELLENT
    if score >= 85:
        return ProductivityBand.VERY_GOOD
    if score >= 75:
        return ProductivityBand.GOOD
    return ProductivityBand.NEEDS_IMPROVEMENT


class ProductivityService:
    def __init__(
        self,
        aggregator: Aggregator,
        employees: EmployeeRepository,
        *,
        calculator: Optional[ProductivityCalculator] = None,
        lookback_days: int = STREAK_LOOKBACK_DAYS,
    ):
        self._aggregator = aggregator
        self._employees = employees
        self._calculator = calculator or StandardProductivityCalculator()
        self._lookback_days = int(lookback_days)

    def signal_for(self, employee_id: int, reference: datetime) -> ProductivitySignal:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise EmployeeNotFound(employee_id)
        return self.signal_for_employee(employee, reference)

    def signal_for_employee(self, employee: Employee, reference: datetime) -> ProductivitySignal:
        today = reference.date()
        daily = self._aggregator.daily_totals(
            employee.employee_id,
            today - timedelta(days=self._lookback_days - 1),
            today,
            reference,
        )
        history = WorkHistory(
            daily_minutes=daily,
            daily_target_minutes=employee.weekly_target_minutes / WORKDAYS_PER_WEEK,
            reference_day=today,
        )

        score = self._calculator.score(history)
        return ProductivitySignal(
            employee_id=employee.employee_id,
            score=score,
            band=band_for(score),
            streak_days=self._calculator.streak(history),
        )
