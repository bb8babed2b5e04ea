"""
Gamification rule configuration built from ``system_settings`` rows.

Missing or malformed values never fail a run: each one falls back to its
default and a warning is logged.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timezone

from gamification.engine.timeutil import parse_hhmm, parse_utc_offset

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE_OFFSET = "+07:00"
DEFAULT_WORKING_DAYS = frozenset({1, 2, 3, 4, 5})  # 0=Sun .. 6=Sat

# setting key -> (attribute, default)
_INT_SETTINGS: dict[str, tuple[str, int]] = {
    "gamify_points_on_time": ("points_on_time", 10),
    "gamify_points_late_penalty": ("points_late_penalty", -5),
    "gamify_points_early": ("points_early", 5),
    "gamify_points_full_day": ("points_full_day", 5),
    "gamify_points_ot": ("points_ot", 15),
    "gamify_early_minutes": ("early_minutes", 15),
}

SETTING_KEYS = (
    *_INT_SETTINGS,
    "gamify_timezone_offset",
    "working_days",
    "work_start_time",
)


@dataclass(frozen=True)
class GamificationConfig:
    points_on_time: int = 10
    points_late_penalty: int = -5
    points_early: int = 5
    points_full_day: int = 5
    points_ot: int = 15
    early_minutes: int = 15
    working_days: frozenset[int] = field(default=DEFAULT_WORKING_DAYS)
    work_start_time: str = "09:00"
    timezone_offset: str = DEFAULT_TIMEZONE_OFFSET

    @property
    def work_start_minutes(self) -> int:
        return parse_hhmm(self.work_start_time)

    @property
    def local_tz(self) -> timezone:
        return parse_utc_offset(self.timezone_offset)

    @classmethod
    def from_settings(
        cls,
        values: Mapping[str, str | None],
        default_offset: str = DEFAULT_TIMEZONE_OFFSET,
    ) -> GamificationConfig:
        kwargs: dict[str, object] = {}

        for key, (attr, default) in _INT_SETTINGS.items():
            raw = values.get(key)
            if raw is None or not str(raw).strip():
                continue
            try:
                kwargs[attr] = int(str(raw).strip())
            except ValueError:
                logger.warning("Invalid %s=%r, using default %s", key, raw, default)

        days = _parse_working_days(values.get("working_days"))
        if days is not None:
            kwargs["working_days"] = days

        start = values.get("work_start_time")
        if start:
            try:
                parse_hhmm(start)
                kwargs["work_start_time"] = start.strip()
            except ValueError:
                logger.warning("Invalid work_start_time=%r, using default 09:00", start)

        kwargs["timezone_offset"] = _resolve_offset(
            values.get("gamify_timezone_offset"), default_offset
        )

        return cls(**kwargs)  # type: ignore[arg-type]


def _resolve_offset(raw: str | None, default_offset: str) -> str:
    """Stored offset if valid, else *default_offset*, else the module default."""
    fallback = default_offset.strip() if default_offset else DEFAULT_TIMEZONE_OFFSET
    try:
        parse_utc_offset(fallback)
    except ValueError:
        logger.warning(
            "Invalid default timezone offset %r, using %s", default_offset, DEFAULT_TIMEZONE_OFFSET
        )
        fallback = DEFAULT_TIMEZONE_OFFSET

    if raw is None or not raw.strip():
        return fallback
    try:
        parse_utc_offset(raw)
    except ValueError:
        logger.warning("Invalid gamify_timezone_offset=%r, using %s", raw, fallback)
        return fallback
    return raw.strip()


def _parse_working_days(raw: str | None) -> frozenset[int] | None:
    if raw is None or not raw.strip():
        return None
    try:
        days = frozenset(int(part) for part in raw.split(",") if part.strip())
    except ValueError:
        logger.warning("Invalid working_days=%r, using default Mon-Fri", raw)
        return None
    if not days or any(d < 0 or d > 6 for d in days):
        logger.warning("Invalid working_days=%r, using default Mon-Fri", raw)
        return None
    return days
