from datetime import date, datetime

import pytest

from worktime_tracker.core.exceptions import ValidationError

REFERENCE = datetime(2025, 3, 3, 9, 0)


@pytest.fixture
def team(container):
    ctl = container.session_controller
    ctl.start(2, now=datetime(2025, 3, 3, 7, 0))
    ctl.stop(2, now=datetime(2025, 3, 3, 7, 30))
    ctl.start(1, now=datetime(2025, 3, 3, 8, 0))
    return container.team_report_service


def test_board_lists_active_employees_working_first(team):
    board = team.build_team_board(reference=REFERENCE)

    assert [r["display_name"] for r in board.rows] == ["Ana", "Bruno"]
    ana, bruno = board.rows
    assert ana["status"] == "working"
    assert ana["open_since"] == "2025-03-03T08:00:00"
    assert ana["current_session_minutes"] == 60
    assert ana["today_minutes"] == 60
    assert ana["progress_percentage"] == 2.5
    assert bruno["status"] == "offline"
    assert bruno["today_minutes"] == 30
    assert bruno["weekly_target_minutes"] == 1800


def test_board_stats_cover_whole_team(team):
    board = team.build_team_board(reference=REFERENCE, status="working")

    assert [r["employee_id"] for r in board.rows] == [1]
    assert board.stats["employees"] == 2
    assert board.stats["active_count"] == 1
    assert board.stats["team_today_minutes"] == 90
    assert board.stats["team_weekly_progress"] == 2


def test_board_search_matches_name_or_role(team):
    assert [r["employee_id"] for r in team.build_team_board(reference=REFERENCE, search="bru").rows] == [2]
    assert [r["employee_id"] for r in team.build_team_board(reference=REFERENCE, search="soporte").rows] == [1]
    assert team.build_team_board(reference=REFERENCE, search="zzz").rows == []


def test_board_rejects_unknown_status(team):
    with pytest.raises(ValidationError):
        team.build_team_board(reference=REFERENCE, status="on_break")


def test_session_report_rows_and_summary(team):
    data = team.build_session_report(start=date(2025, 3, 3), end=date(2025, 3, 3), reference=REFERENCE)

    assert [(r["display_name"], r["status"]) for r in data.rows] == [("Bruno", "closed"), ("Ana", "open")]
    assert data.rows[0]["worked_hours"] == "00:30"
    assert data.rows[1]["ended_at"] == "-"
    assert [(s["display_name"], s["total_hours"]) for s in data.summary] == [("Ana", "01:00"), ("Bruno", "00:30")]


def test_session_report_filters_by_employee(team):
    data = team.build_session_report(
        start=date(2025, 3, 1), end=date(2025, 3, 3), reference=REFERENCE, employee_id=2
    )
    assert [r["employee_id"] for r in data.rows] == [2]


def test_session_report_rejects_inverted_range(team):
    with pytest.raises(ValidationError):
        team.build_session_report(start=date(2025, 3, 3), end=date(2025, 3, 1), reference=REFERENCE)


def test_session_report_keeps_names_of_deactivated_employees(container):
    # Carla is inactive in the directory.
    s = container.sessions_repo.create_open(employee_id=3, started_at=datetime(2025, 3, 3, 7, 0))
    container.sessions_repo.close_open(session_id=s.session_id, ended_at=datetime(2025, 3, 3, 8, 0))

    data = container.team_report_service.build_session_report(
        start=date(2025, 3, 3), end=date(2025, 3, 3), reference=REFERENCE
    )

    assert [(r["display_name"], r["role"]) for r in data.rows] == [("Carla", "OWNER")]
    assert data.summary[0]["display_name"] == "Carla"
