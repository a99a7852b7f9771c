from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ValidationError


def now_utc() -> datetime:
    """Current time as an aware UTC datetime.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc)


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_optional_datetime(value: Optional[str]) -> Optional[datetime]:
    if value is None or not str(value).strip():
        return None
    return parse_iso_datetime(str(value))


def to_iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def to_utc_naive(value: datetime) -> datetime:
    """MySQL DATETIME has no zone; we store UTC wall time."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def from_utc_naive(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def whole_minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end, truncated toward zero."""
    return int((end - start).total_seconds() / 60)


def format_elapsed(start: datetime, now: datetime) -> str:
    minutes = max(whole_minutes_between(start, now), 0)
    return f"{minutes // 60}h {minutes % 60}m"


def resolve_timezone(name: Optional[str]) -> tzinfo:
    """IANA zone name (e.g. "America/New_York") to a tzinfo; blank means UTC."""
    if not name or not str(name).strip() or str(name).strip().upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(str(name).strip())
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Unknown timezone: {name}")
