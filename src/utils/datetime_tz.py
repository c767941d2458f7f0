from __future__ import annotations

from datetime import date, datetime, timezone

from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE_NAME = "UTC"


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Attach UTC to naive values read back from databases without tz support."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def local_today(tz_name: str | None = None) -> date:
    """Calendar date 'now' for the farm's timezone (UTC when not configured)."""
    tz = ZoneInfo(tz_name or DEFAULT_TIMEZONE_NAME)
    return datetime.now(tz).date()
