from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Employee roles as provided by the identity directory."""

    OWNER = "OWNER"
    ADMIN_GENERAL = "ADMIN_GENERAL"
    RECRUITER = "RECLUTADOR"
    SUPPORT = "SOPORTE"
    SELLER = "VENDEDOR"


class WorkStatus(str, Enum):
    """Tracked state of an employee. Only two states exist in the core."""

    OFFLINE = "offline"
    WORKING = "working"


class WindowKind(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class StartStatus(str, Enum):
    STARTED = "started"
    ALREADY_WORKING = "already_working"


class StopStatus(str, Enum):
    STOPPED = "stopped"
    NOT_WORKING = "not_working"


class ProductivityBand(str, Enum):
    """Badge shown next to a productivity score."""

    EXCELLENT = "excellent"
    VERY_GOOD = "very_good"
    GOOD = "good"
    NEEDS_IMPROVEMENT = "needs_improvement"
