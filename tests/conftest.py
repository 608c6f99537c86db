from __future__ import annotations

from datetime import datetime

import pytest

from worktime_tracker.container import build_container
from worktime_tracker.core.enums import Role
from worktime_tracker.employees.memory_employee_repository import InMemoryEmployeeRepository
from worktime_tracker.employees.model import Employee
from worktime_tracker.main import create_app
from worktime_tracker.sessions.memory_session_repository import InMemorySessionRepository
from worktime_tracker.tracking.aggregator import Aggregator
from worktime_tracker.tracking.session_controller import SessionController


def make_employees() -> list[Employee]:
    return [
        Employee(employee_id=1, display_name="Ana", role=Role.SUPPORT, weekly_target_hours=40),
        Employee(employee_id=2, display_name="Bruno", role=Role.SELLER, weekly_target_hours=30),
        Employee(employee_id=3, display_name="Carla", role=Role.OWNER, weekly_target_hours=40, is_active=False),
    ]


@pytest.fixture
def fixed_now() -> datetime:
    # Monday
    return datetime(2025, 3, 3, 9, 0, 0)


@pytest.fixture
def employees() -> InMemoryEmployeeRepository:
    return InMemoryEmployeeRepository(make_employees())


@pytest.fixture
def sessions() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def controller(sessions, employees) -> SessionController:
    return SessionController(sessions, employees)


@pytest.fixture
def aggregator(sessions) -> Aggregator:
    return Aggregator(sessions)


@pytest.fixture
def container():
    return build_container(store_backend="memory", employees=make_employees())


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()
