from __future__ import annotations

from datetime import date, datetime

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r}") from None


def parse_iso_instant(value: str) -> datetime:
    """Parse an ISO-8601 instant (naive local time, seconds precision)."""
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid instant: {value!r}") from None
    if parsed.tzinfo is not None:
        # Sessions are stored as naive local time.
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def now_local() -> datetime:
    """Current local time, truncated to whole seconds.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().replace(microsecond=0)


def format_instant(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def floor_to_minute(value: datetime) -> datetime:
    """Drop seconds. Stored session bounds are whole minutes."""
    return value.replace(second=0, microsecond=0)
