from datetime import datetime, timedelta

import pytest

from worktime_tracker.core.exceptions import EmployeeNotFound, ValidationError
from worktime_tracker.tracking.target import TargetTracker, completion_percentage


def _work(sessions, employee_id, start, minutes):
    s = sessions.create_open(employee_id=employee_id, started_at=start)
    sessions.close_open(session_id=s.session_id, ended_at=start + timedelta(minutes=minutes))


def test_progress_half_of_target(sessions, aggregator, employees):
    _work(sessions, 1, datetime(2025, 3, 3, 8, 0), 600)
    _work(sessions, 1, datetime(2025, 3, 4, 8, 0), 600)

    progress = TargetTracker(aggregator, employees).progress(1, 2400, datetime(2025, 3, 5, 8, 0))

    assert progress.week_minutes == 1200
    assert progress.percentage == 50.0


def test_progress_over_target_is_not_capped(sessions, aggregator, employees):
    for day in range(5):
        _work(sessions, 1, datetime(2025, 3, 3 + day, 8, 0), 600)

    progress = TargetTracker(aggregator, employees).progress(1, 2400, datetime(2025, 3, 8, 8, 0))

    assert progress.week_minutes == 3000
    assert progress.percentage == 125.0


def test_progress_uses_configured_target(sessions, aggregator, employees):
    # Bruno: 30 h/week
    _work(sessions, 2, datetime(2025, 3, 3, 8, 0), 450)

    progress = TargetTracker(aggregator, employees).progress(2, None, datetime(2025, 3, 3, 20, 0))

    assert progress.weekly_target_minutes == 1800
    assert progress.percentage == 25.0


def test_non_positive_target_is_rejected(aggregator, employees):
    with pytest.raises(ValidationError):
        TargetTracker(aggregator, employees).progress(1, 0, datetime(2025, 3, 3))
    with pytest.raises(ValidationError):
        completion_percentage(10, -5)


def test_unknown_employee(aggregator, employees):
    with pytest.raises(EmployeeNotFound):
        TargetTracker(aggregator, employees).progress(42, 2400, datetime(2025, 3, 3))
