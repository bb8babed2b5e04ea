"""
Local-time conversion for comparing stored instants to ``HH:MM`` settings.

Clock-in timestamps are stored as UTC instants while ``work_start_time``
is a local wall-clock value. All comparisons go through
:func:`local_minutes_of_day` so the offset is applied in one place.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

_OFFSET_RE = re.compile(r"^([+-])(\d{1,2})(?::?(\d{2}))?$")
_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_utc_offset(value: str) -> timezone:
    """Parse ``"+07:00"`` / ``"-0330"`` / ``"+7"`` into a fixed-offset tzinfo."""
    m = _OFFSET_RE.match(value.strip())
    if not m:
        raise ValueError(f"Invalid UTC offset: {value!r}")
    sign = 1 if m.group(1) == "+" else -1
    hours = int(m.group(2))
    minutes = int(m.group(3) or 0)
    if hours > 14 or minutes > 59:
        raise ValueError(f"UTC offset out of range: {value!r}")
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def parse_hhmm(value: str) -> int:
    """Return minutes since midnight for an ``HH:MM`` string."""
    m = _HHMM_RE.match(value.strip())
    if not m:
        raise ValueError(f"Invalid HH:MM time: {value!r}")
    hour, minute = int(m.group(1)), int(m.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"Time out of range: {value!r}")
    return hour * 60 + minute


def ensure_utc(dt: datetime) -> datetime:
    """Normalise a potentially-naive timestamp to UTC-aware."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def local_minutes_of_day(instant: datetime, local_tz: timezone) -> int:
    local = ensure_utc(instant).astimezone(local_tz)
    return local.hour * 60 + local.minute
