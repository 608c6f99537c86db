"""Elapsed-time arithmetic shared by the controller and the aggregator.

All functions are pure. A negative interval (clock skew) is clamped to zero
and logged, never raised.
"""

from __future__ import annotations

import logging
from datetime import datetime

logger = logging.getLogger(__name__)


def elapsed_seconds(start: datetime, end: datetime) -> int:
    seconds = int((end - start).total_seconds())
    if seconds < 0:
        logger.warning("Clock skew: end %s is before start %s, clamped to zero", end, start)
        return 0
    return seconds


def elapsed_minutes(start: datetime, end: datetime) -> int:
    """Whole minutes between two instants, truncated, never negative."""
    return elapsed_seconds(start, end) // 60


def format_minutes(minutes: int) -> str:
    """Render minutes as HH:MM (hours are not wrapped at 24)."""
    minutes = max(int(minutes), 0)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
