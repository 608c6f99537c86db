from __future__ import annotations

from datetime import timedelta

from ...core.constants import (
    PRODUCTIVITY_COMPLETION_WEIGHT,
    PRODUCTIVITY_CONSISTENCY_WEIGHT,
    PRODUCTIVITY_WINDOW_DAYS,
    WORKDAYS_PER_WEEK,
)
from .base import ProductivityCalculator, WorkHistory

# Saturday, Sunday
DEFAULT_REST_DAYS = frozenset({5, 6})


class StandardProductivityCalculator(ProductivityCalculator):
    """Standard rule.

    score = 70 * completion + 30 * consistency over the trailing window, where
    completion is worked / expected minutes (capped at 1) and consistency is
    the share of expected workdays with any work (capped at 1).

    streak = consecutive days meeting the daily target, newest first. A rest
    day without work is skipped; today is skipped while still below target.
    """

    def __init__(self, *, window_days: int = PRODUCTIVITY_WINDOW_DAYS, rest_days=DEFAULT_REST_DAYS):
        self._window_days = int(window_days)
        self._rest_days = frozenset(rest_days)

    def _window(self, history: WorkHistory) -> list[int]:
        first = history.reference_day - timedelta(days=self._window_days - 1)
        return [m for d, m in history.daily_minutes.items() if first <= d <= history.reference_day]

    def score(self, history: WorkHistory) -> int:
        window = self._window(history)
        if not window or history.daily_target_minutes <= 0:
            return 0

        expected_days = len(window) * WORKDAYS_PER_WEEK / 7
        expected_minutes = history.daily_target_minutes * expected_days

        completion = min(1.0, sum(window) / expected_minutes)
        consistency = min(1.0, sum(1 for m in window if m > 0) / expected_days)

        value = PRODUCTIVITY_COMPLETION_WEIGHT * completion + PRODUCTIVITY_CONSISTENCY_WEIGHT * consistency
        return max(0, min(100, round(value)))

    def streak(self, history: WorkHistory) -> int:
        target = history.daily_target_minutes
        if target <= 0:
            return 0

        count = 0
        for day in sorted(history.daily_minutes, reverse=True):
            minutes = history.daily_minutes[day]
            if minutes >= target:
                count += 1
                continue
            if day == history.reference_day:
                continue
            if minutes == 0 and day.weekday() in self._rest_days:
                continue
            break
        return count
