from datetime import datetime, timedelta

from worktime_tracker.sessions.memory_session_repository import InMemorySessionRepository

T0 = datetime(2025, 3, 3, 9, 0)


def test_second_open_session_is_refused():
    repo = InMemorySessionRepository()

    first = repo.create_open(employee_id=1, started_at=T0)

    assert first is not None and first.is_open
    assert repo.create_open(employee_id=1, started_at=T0 + timedelta(minutes=1)) is None
    assert repo.create_open(employee_id=2, started_at=T0) is not None
    assert len(repo.list_open()) == 2


def test_close_open_is_conditional():
    repo = InMemorySessionRepository()
    s = repo.create_open(employee_id=1, started_at=T0)

    assert not repo.close_open(session_id=s.session_id, ended_at=T0 - timedelta(seconds=1))
    assert repo.close_open(session_id=s.session_id, ended_at=T0 + timedelta(hours=1))
    assert not repo.close_open(session_id=s.session_id, ended_at=T0 + timedelta(hours=2))
    assert not repo.close_open(session_id=999, ended_at=T0)

    stored = repo.get_by_id(s.session_id)
    assert stored.ended_at == T0 + timedelta(hours=1)
    assert repo.get_open(1) is None


def test_list_overlapping_is_half_open():
    repo = InMemorySessionRepository()
    s = repo.create_open(employee_id=1, started_at=T0)
    repo.close_open(session_id=s.session_id, ended_at=T0 + timedelta(hours=1))
    repo.create_open(employee_id=2, started_at=T0 + timedelta(hours=2))

    assert repo.list_overlapping(start=T0 + timedelta(hours=1), end=T0 + timedelta(hours=2)) == []
    assert [x.employee_id for x in repo.list_overlapping(start=T0, end=T0 + timedelta(hours=3))] == [1, 2]
    assert [x.employee_id for x in repo.list_overlapping(start=T0, end=T0 + timedelta(hours=3), employee_id=2)] == [2]
