"""Reference time and timezone helpers for request handlers."""
from datetime import datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fittrack.config import get_settings
from fittrack.exceptions import InvalidInputError


def get_now() -> datetime:
    """Dependency returning the current time in UTC."""
    return datetime.now(timezone.utc)


def resolve_timezone(name: Optional[str] = None) -> tzinfo:
    """
    Look up an IANA timezone, falling back to the configured default.

    Raises:
        InvalidInputError: If the name is not a known timezone
    """
    name = name or get_settings().timezone
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise InvalidInputError(f"Unknown timezone: {name}") from None


def ensure_aware(moment: Optional[datetime], tz: tzinfo, default: datetime) -> datetime:
    """Attach tz to naive input; use default when nothing was given."""
    if moment is None:
        return default
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment
