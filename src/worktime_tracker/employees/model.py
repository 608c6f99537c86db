from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee as seen by the tracker.

    Owned by the identity directory; the tracker only reads it.
    """

    employee_id: int
    display_name: str
    role: Role
    weekly_target_hours: int
    is_active: bool = True

    @property
    def weekly_target_minutes(self) -> int:
        return int(self.weekly_target_hours) * 60
