"""
On-time streak calculation over an employee's attendance history.

Consecutiveness is measured across the working-day calendar, so a
Friday → Monday pair continues a Mon-Fri streak. A late arrival resets
the streak to zero.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from gamification.engine.types import AttendanceRecord, ConfigurationError


def weekday_number(day: date) -> int:
    """Weekday as 0=Sunday .. 6=Saturday, matching the ``working_days`` setting."""
    return day.isoweekday() % 7


def previous_working_day(day: date, working_days: Collection[int]) -> date:
    """Most recent working day strictly before *day*."""
    if not working_days:
        raise ConfigurationError("working day set is empty")
    prev = day - timedelta(days=1)
    while weekday_number(prev) not in working_days:
        prev -= timedelta(days=1)
    return prev


@dataclass(frozen=True)
class StreakPoint:
    work_date: date
    streak: int


@dataclass
class StreakResult:
    points: list[StreakPoint]
    current_streak: int = 0
    longest_streak: int = 0
    last_streak_date: date | None = None


def calculate_streaks(
    records: Iterable[AttendanceRecord],
    working_days: Collection[int],
) -> StreakResult:
    """Walk *records* (ascending by work date) and track the on-time streak."""
    result = StreakResult(points=[])
    current = 0
    last: date | None = None

    for rec in records:
        if rec.is_late:
            current = 0
            last = None
        else:
            if last is not None and last == previous_working_day(rec.work_date, working_days):
                current += 1
            elif last is not None and last == rec.work_date:
                pass  # duplicate row for the same day
            else:
                current = 1
            last = rec.work_date
            result.longest_streak = max(result.longest_streak, current)
        result.points.append(StreakPoint(rec.work_date, current))

    result.current_streak = current
    result.last_streak_date = last
    return result
