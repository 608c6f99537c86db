from __future__ import annotations

from datetime import datetime

from worktime_tracker.core.exceptions import StoreUnavailable


def _closed(container, employee_id, start, end):
    s = container.sessions_repo.create_open(employee_id=employee_id, started_at=start)
    container.sessions_repo.close_open(session_id=s.session_id, ended_at=end)


def test_start_then_start_again_is_idempotent(client):
    first = client.post("/api/employees/1/time-tracking/start")
    again = client.post("/api/employees/1/time-tracking/start")

    assert first.status_code == 201
    assert first.get_json()["status"] == "started"
    assert again.status_code == 200
    assert again.get_json()["status"] == "already_working"
    assert again.get_json()["session_id"] == first.get_json()["session_id"]


def test_stop_without_open_session_is_conflict(client):
    resp = client.post("/api/employees/1/time-tracking/stop")

    assert resp.status_code == 409
    body = resp.get_json()
    assert body["success"] is False
    assert body["status"] == "not_working"


def test_start_then_stop(client):
    client.post("/api/employees/1/time-tracking/start")
    resp = client.post("/api/employees/1/time-tracking/stop")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "stopped"
    assert body["ended_at"] is not None
    assert body["duration_minutes"] >= 0


def test_toggle_flips_and_honours_requested_state(client):
    on = client.post("/api/employees/2/time-tracking/toggle")
    off = client.post("/api/employees/2/time-tracking/toggle")
    noop = client.post("/api/employees/2/time-tracking/toggle", json={"is_working": False})

    assert on.get_json()["is_working"] is True
    assert on.get_json()["status"] == "started"
    assert off.get_json()["is_working"] is False
    assert off.get_json()["status"] == "stopped"
    assert noop.get_json() == {"is_working": False, "status": "not_working"}


def test_status_reports_open_session(client):
    offline = client.get("/api/employees/1/time-tracking/status").get_json()
    client.post("/api/employees/1/time-tracking/start")
    working = client.get("/api/employees/1/time-tracking/status").get_json()

    assert offline["status"] == "offline" and offline["open_since"] is None
    assert working["status"] == "working" and working["is_working"] is True
    assert working["open_since"] is not None


def test_unknown_and_inactive_employees_are_404(client):
    assert client.post("/api/employees/99/time-tracking/start").status_code == 404
    assert client.post("/api/employees/3/time-tracking/start").status_code == 404
    assert client.get("/api/employees/99/time-tracking/totals").status_code == 404
    assert client.get("/api/employees/99/productivity").status_code == 404


def test_totals_at_reference(client, container):
    container.sessions_repo.create_open(employee_id=1, started_at=datetime(2025, 3, 3, 9, 0))

    resp = client.get("/api/employees/1/time-tracking/totals?reference=2025-03-03T09:30:00")

    assert resp.status_code == 200
    assert resp.get_json() == {"today_minutes": 30, "week_minutes": 30, "month_minutes": 30}


def test_invalid_reference_is_bad_request(client):
    resp = client.get("/api/employees/1/time-tracking/totals?reference=yesterday")

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_progress(client, container):
    _closed(container, 1, datetime(2025, 3, 3, 8, 0), datetime(2025, 3, 3, 18, 0))
    _closed(container, 1, datetime(2025, 3, 4, 8, 0), datetime(2025, 3, 4, 18, 0))
    url = "/api/employees/1/time-tracking/progress?reference=2025-03-05T08:00:00"

    explicit = client.get(url + "&weekly_target_minutes=2400").get_json()
    default = client.get(url).get_json()

    assert explicit == {"percentage": 50.0, "week_minutes": 1200, "weekly_target_minutes": 2400}
    assert default["weekly_target_minutes"] == 2400
    assert client.get(url + "&weekly_target_minutes=0").status_code == 400
    assert client.get(url + "&weekly_target_minutes=abc").status_code == 400


def test_sessions_of_day(client, container):
    _closed(container, 1, datetime(2025, 3, 3, 8, 0), datetime(2025, 3, 3, 9, 15))

    body = client.get(
        "/api/employees/1/time-tracking/sessions?day=2025-03-03&reference=2025-03-04T10:00:00"
    ).get_json()

    assert body["day"] == "2025-03-03"
    assert body["total_minutes"] == 75
    assert body["completed_entries"] == 1
    assert body["active_entry"] is None
    assert body["entries"][0]["ended_at"] == "2025-03-03T09:15:00"


def test_productivity(client):
    body = client.get("/api/employees/1/productivity?reference=2025-03-03T08:00:00").get_json()

    assert body == {"score": 0, "band": "needs_improvement", "streak_days": 0}


def test_team_hours(client, container):
    container.sessions_repo.create_open(employee_id=2, started_at=datetime(2025, 3, 3, 8, 0))

    body = client.get("/api/hours?reference=2025-03-03T09:00:00").get_json()

    assert [r["employee_id"] for r in body["employees"]] == [2, 1]
    assert body["stats"]["active_count"] == 1
    assert client.get("/api/hours?status=lunch").status_code == 400


def test_export_csv(client, container):
    _closed(container, 1, datetime(2025, 3, 3, 8, 0), datetime(2025, 3, 3, 12, 0))

    resp = client.get("/api/hours/export.csv?start=2025-03-03&end=2025-03-03&reference=2025-03-04T00:00:00")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "work_sessions_20250303_20250303.csv" in resp.headers["Content-Disposition"]
    lines = resp.data.decode("utf-8-sig").splitlines()
    assert lines[0].startswith("session_id,employee_id,display_name")
    assert len(lines) == 2
    assert "04:00" in lines[1]


def test_store_failure_is_503_not_empty_total(client, container, monkeypatch):
    def boom(*args, **kwargs):
        raise StoreUnavailable("down")

    monkeypatch.setattr(container.sessions_repo, "get_open", boom)
    monkeypatch.setattr(container.sessions_repo, "list_overlapping", boom)

    start = client.post("/api/employees/1/time-tracking/start")
    totals = client.get("/api/employees/1/time-tracking/totals")

    for resp in (start, totals):
        assert resp.status_code == 503
        assert resp.get_json()["status"] == "unavailable"


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_toggle_to_current_working_state_reports_already_working(client):
    client.post("/api/employees/1/time-tracking/start")

    body = client.post("/api/employees/1/time-tracking/toggle", json={"is_working": True}).get_json()

    assert body == {"is_working": True, "status": "already_working"}


def test_toggle_rejects_non_boolean_is_working(client):
    client.post("/api/employees/1/time-tracking/start")

    for value in ("false", "0", 1, [], {}):
        resp = client.post("/api/employees/1/time-tracking/toggle", json={"is_working": value})
        assert resp.status_code == 400
        assert resp.get_json()["success"] is False

    status = client.get("/api/employees/1/time-tracking/status").get_json()
    assert status["is_working"] is True
