"""Time helper tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from app.utils.time import is_expired, local_zone, month_range, parse_iso_datetime


def test_parse_iso_datetime_treats_naive_as_utc() -> None:
    """Naive timestamps should be interpreted as UTC."""
    result = parse_iso_datetime("2026-02-07T10:30:00")
    assert result == datetime(2026, 2, 7, 10, 30, tzinfo=UTC)


def test_parse_iso_datetime_accepts_z_suffix() -> None:
    result = parse_iso_datetime("2026-02-07T10:30:00Z")
    assert result.utcoffset() == timedelta(0)


def test_month_range_uses_local_calendar() -> None:
    """00:30 UTC on the 1st is still the previous month in Sao Paulo."""
    base = datetime(2026, 3, 1, 0, 30, tzinfo=UTC)
    start, end = month_range(base)
    assert (start.year, start.month, start.day) == (2026, 2, 1)
    assert (end.year, end.month, end.day) == (2026, 3, 1)
    assert start.tzinfo == local_zone()


def test_month_range_wraps_december() -> None:
    start, end = month_range(datetime(2025, 12, 15, 12, 0, tzinfo=UTC))
    assert (start.month, end.year, end.month) == (12, 2026, 1)


def test_is_expired_compares_absolute_instants() -> None:
    now = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
    assert is_expired(now - timedelta(seconds=1), now=now)
    assert not is_expired((now + timedelta(minutes=5)).isoformat(), now=now)
