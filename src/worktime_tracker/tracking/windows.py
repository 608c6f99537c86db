from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from ..core.constants import DEFAULT_WEEK_START
from ..core.enums import WindowKind
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Window:
    """Half-open interval [start, end) of one day, week or month."""

    kind: WindowKind
    anchor: date
    start: datetime
    end: datetime


def _midnight(d: date) -> datetime:
    return datetime.combine(d, time.min)


def window_for(kind: WindowKind, reference: datetime, *, week_start: int = DEFAULT_WEEK_START) -> Window:
    """Window of the given kind containing the reference instant.

    week_start is a weekday number (0 = Monday, ISO week).
    """
    day = reference.date()

    if kind == WindowKind.DAY:
        start = _midnight(day)
        return Window(kind=kind, anchor=day, start=start, end=start + timedelta(days=1))

    if kind == WindowKind.WEEK:
        if not 0 <= int(week_start) <= 6:
            raise ValidationError("week_start must be between 0 (Monday) and 6 (Sunday)")
        first = day - timedelta(days=(day.weekday() - int(week_start)) % 7)
        start = _midnight(first)
        return Window(kind=kind, anchor=first, start=start, end=start + timedelta(days=7))

    if kind == WindowKind.MONTH:
        first = day.replace(day=1)
        if first.month == 12:
            next_first = first.replace(year=first.year + 1, month=1)
        else:
            next_first = first.replace(month=first.month + 1)
        return Window(kind=kind, anchor=first, start=_midnight(first), end=_midnight(next_first))

    raise ValidationError(f"Unknown window kind: {kind!r}")


def day_window(day: date) -> Window:
    start = _midnight(day)
    return Window(kind=WindowKind.DAY, anchor=day, start=start, end=start + timedelta(days=1))
