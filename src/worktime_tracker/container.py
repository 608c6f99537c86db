from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .core.constants import DEFAULT_WEEK_START, DEFAULT_WEEKLY_TARGET_HOURS
from .core.enums import Role
from .database.bootstrap import DEMO_EMPLOYEES
from .database.connection import DBConfig, DatabaseConnection
from .employees.memory_employee_repository import InMemoryEmployeeRepository
from .employees.model import Employee
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .productivity.service import ProductivityService
from .reports.service import TeamReportService
from .sessions.memory_session_repository import InMemorySessionRepository
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .tracking.aggregator import Aggregator
from .tracking.session_controller import SessionController
from .tracking.target import TargetTracker


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    sessions_repo: SessionRepository

    session_controller: SessionController
    aggregator: Aggregator
    target_tracker: TargetTracker
    productivity_service: ProductivityService
    team_report_service: TeamReportService


def _demo_employees() -> list[Employee]:
    return [
        Employee(employee_id=i, display_name=name, role=Role(role), weekly_target_hours=hours)
        for i, (name, role, hours) in enumerate(DEMO_EMPLOYEES, start=1)
    ]


def build_container(
    *,
    db_config: Optional[dict] = None,
    store_backend: str = "mysql",
    week_start: int = DEFAULT_WEEK_START,
    default_weekly_target_hours: int = DEFAULT_WEEKLY_TARGET_HOURS,
    employees: Optional[Iterable[Employee]] = None,
) -> Container:
    """Wire repositories and services.

    store_backend "memory" keeps everything in process (employees default to
    the demo directory); "mysql" uses db_config.
    """
    if store_backend == "memory":
        employees_repo: EmployeeRepository = InMemoryEmployeeRepository(
            _demo_employees() if employees is None else employees
        )
        sessions_repo: SessionRepository = InMemorySessionRepository()
    elif store_backend == "mysql":
        if not db_config:
            raise ValueError("db_config is required for the mysql store backend")
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        employees_repo = MySQLEmployeeRepository(conn, default_weekly_target_hours=default_weekly_target_hours)
        sessions_repo = MySQLSessionRepository(conn)
    else:
        raise ValueError(f"Unknown store backend: {store_backend!r}")

    aggregator = Aggregator(sessions_repo, week_start=week_start)
    session_controller = SessionController(sessions_repo, employees_repo)
    target_tracker = TargetTracker(aggregator, employees_repo)
    productivity_service = ProductivityService(aggregator, employees_repo)
    team_report_service = TeamReportService(employees_repo, sessions_repo, aggregator, productivity_service)

    return Container(
        employees_repo=employees_repo,
        sessions_repo=sessions_repo,
        session_controller=session_controller,
        aggregator=aggregator,
        target_tracker=target_tracker,
        productivity_service=productivity_service,
        team_report_service=team_report_service,
    )
