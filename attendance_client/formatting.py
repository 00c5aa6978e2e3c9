from datetime import datetime
from typing import Optional

import pytz

from .core.config import DEFAULT_TIMEZONE


def to_local(ts: Optional[datetime], tz_name: str = DEFAULT_TIMEZONE) -> Optional[datetime]:
    """Naive timestamps from the server are already local wall-clock time."""
    if ts is None:
        return None
    tz = pytz.timezone(tz_name)
    if ts.tzinfo is None:
        return tz.localize(ts)
    return ts.astimezone(tz)


def format_time(ts: Optional[datetime], tz_name: str = DEFAULT_TIMEZONE, fmt: str = "%H:%M") -> str:
    local = to_local(ts, tz_name)
    return local.strftime(fmt) if local else "-"


def format_datetime(ts: Optional[datetime], tz_name: str = DEFAULT_TIMEZONE) -> str:
    return format_time(ts, tz_name, fmt="%d %b %Y %H:%M")
