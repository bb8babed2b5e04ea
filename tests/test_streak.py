"""Tests for on-time streak calculation across the working-day calendar."""

from datetime import date

import pytest

from gamification.engine.streak import (calculate_streaks,
                                        previous_working_day, weekday_number)
from gamification.engine.types import AttendanceRecord, ConfigurationError

MON_FRI = frozenset({1, 2, 3, 4, 5})

# 2026-10-12 is a Monday
MON, TUE, WED, THU, FRI = (date(2026, 10, d) for d in range(12, 17))
NEXT_MON = date(2026, 10, 19)


def _att(day: date, late: bool = False, rid: int = 0) -> AttendanceRecord:
    return AttendanceRecord(id=rid, work_date=day, is_late=late)


def test_weekday_number_uses_sunday_zero():
    assert weekday_number(date(2026, 10, 18)) == 0  # Sunday
    assert weekday_number(MON) == 1
    assert weekday_number(date(2026, 10, 17)) == 6  # Saturday


def test_previous_working_day_skips_weekend():
    assert previous_working_day(NEXT_MON, MON_FRI) == FRI
    assert previous_working_day(WED, MON_FRI) == TUE


def test_previous_working_day_custom_calendar():
    # Mon/Wed/Fri only
    assert previous_working_day(FRI, {1, 3, 5}) == WED


def test_previous_working_day_rejects_empty_calendar():
    with pytest.raises(ConfigurationError):
        previous_working_day(MON, set())


def test_weekend_gap_does_not_break_streak():
    result = calculate_streaks([_att(THU), _att(FRI), _att(NEXT_MON)], MON_FRI)
    by_day = {p.work_date: p.streak for p in result.points}
    assert by_day[NEXT_MON] == by_day[FRI] + 1
    assert result.current_streak == 3


def test_late_arrival_resets_streak():
    result = calculate_streaks([_att(MON), _att(TUE, late=True), _att(WED)], MON_FRI)
    assert [p.streak for p in result.points] == [1, 0, 1]
    assert result.current_streak == 1
    assert result.longest_streak == 1
    assert result.last_streak_date == WED


def test_missing_working_day_restarts_streak():
    result = calculate_streaks([_att(MON), _att(TUE), _att(THU)], MON_FRI)
    assert [p.streak for p in result.points] == [1, 2, 1]
    assert result.longest_streak == 2


def test_duplicate_same_day_keeps_streak():
    result = calculate_streaks([_att(MON), _att(TUE), _att(TUE, rid=9)], MON_FRI)
    assert [p.streak for p in result.points] == [1, 2, 2]


def test_first_on_time_event_starts_at_one():
    result = calculate_streaks([_att(WED)], MON_FRI)
    assert result.current_streak == 1
    assert result.longest_streak == 1


def test_trailing_late_leaves_zero_streak_and_no_date():
    result = calculate_streaks([_att(MON), _att(TUE), _att(WED, late=True)], MON_FRI)
    assert result.current_streak == 0
    assert result.longest_streak == 2
    assert result.last_streak_date is None


def test_empty_history():
    result = calculate_streaks([], MON_FRI)
    assert result.points == []
    assert result.current_streak == 0
    assert result.longest_streak == 0
    assert result.last_streak_date is None
