"""Time utility helpers."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

from app.config import settings


def now_utc() -> datetime:
    """Return current timezone-aware UTC datetime."""
    return datetime.now(tz=UTC)


def local_zone() -> ZoneInfo:
    """Return the configured calendar timezone."""
    return ZoneInfo(settings.timezone)


def now_local() -> datetime:
    """Return the current time in the configured calendar timezone."""
    return now_utc().astimezone(local_zone())


def parse_iso_datetime(value: str | datetime) -> datetime:
    """Parse an ISO timestamp, treating naive values as UTC."""
    if isinstance(value, str):
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        parsed = value

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def month_range(base: datetime | None = None) -> tuple[datetime, datetime]:
    """Return the [start, end) bounds of the calendar month containing ``base``.

    Bounds are expressed in the configured timezone.
    """
    target = (base or now_local()).astimezone(local_zone())
    start = target.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def is_expired(expires_at: str | datetime, now: datetime | None = None) -> bool:
    """Return True when an absolute expiry timestamp has passed."""
    return (now or now_utc()) > parse_iso_datetime(expires_at)


def expiry_from_now(minutes: int) -> datetime:
    """Return an absolute UTC expiry ``minutes`` from now."""
    return now_utc() + timedelta(minutes=minutes)
