from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import DEFAULT_WEEKLY_TARGET_HOURS
from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository


def _to_employee(row: dict, default_target_hours: int) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        display_name=row["display_name"],
        role=Role(row["role"]),
        weekly_target_hours=int(row.get("weekly_target_hours") or default_target_hours),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, default_weekly_target_hours: int = DEFAULT_WEEKLY_TARGET_HOURS):
        self._conn_factory = conn_factory
        self._default_target_hours = int(default_weekly_target_hours)

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, display_name, role, weekly_target_hours, is_active
                FROM employees
                WHERE employee_id=%s
                """,
                (employee_id,),
            )
            row = fetchone(cur)
            return _to_employee(row, self._default_target_hours) if row else None

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, display_name, role, weekly_target_hours, is_active
                FROM employees
                WHERE is_active=1
                ORDER BY display_name ASC
                """
            )
            return [_to_employee(r, self._default_target_hours) for r in fetchall(cur)]
