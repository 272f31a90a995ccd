"""
Time Utilities

Expiration timestamps are reported as UTC-aware datetimes.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

UTC = timezone.utc


def utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


def expires_in(seconds: int, now: datetime | None = None) -> datetime:
    """Return the UTC instant `seconds` after `now` (defaults to the current time)."""
    return (now or utc_now()) + timedelta(seconds=seconds)
