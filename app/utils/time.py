from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def local_time_of_day(dt: datetime) -> str:
    """Render the local wall-clock time as e.g. "3:04:05 PM"."""
    local = dt.astimezone() if dt.tzinfo is not None else dt
    return f"{local.hour % 12 or 12}:{local:%M:%S} {local:%p}"
