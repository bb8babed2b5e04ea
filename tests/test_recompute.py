"""End-to-end tests of the pure recompute over one employee's history."""

from datetime import date, datetime, timedelta, timezone

from gamification.engine import (ActionType, AttendanceRecord, BadgeRule,
                                 GamificationConfig, OvertimeRecord, recompute)

NOW = datetime(2026, 10, 20, 8, 0, tzinfo=timezone.utc)
CFG = GamificationConfig(points_on_time=10, points_full_day=5, points_late_penalty=-5)
STREAK_BADGE = BadgeRule(id=1, name="5-day streak", condition_type="streak_days", condition_value=5, points_reward=20)


def _week(start: date = date(2026, 10, 12)) -> list[AttendanceRecord]:
    """Mon-Fri on time, each with a clock-out and no early clock-in."""
    return [
        AttendanceRecord(
            id=i + 1,
            work_date=start + timedelta(days=i),
            is_late=False,
            clock_out_time=datetime.combine(start + timedelta(days=i), datetime.min.time(), timezone.utc)
            + timedelta(hours=11),
        )
        for i in range(5)
    ]


def test_five_day_streak_scenario():
    result = recompute(_week(), [], [STREAK_BADGE], CFG, NOW)
    summary = result.summary

    assert summary.total_points == 5 * 10 + 5 * 5 + 20 == 95
    assert summary.level == 1
    assert summary.level_name == "Rookie"
    assert summary.current_streak == 5
    assert summary.longest_streak == 5
    assert summary.last_streak_date == date(2026, 10, 16)
    assert [b.badge_id for b in result.badges] == [1]
    assert result.ledger[-1].action_type == ActionType.BADGE_EARNED


def test_single_late_arrival_floors_total_at_zero():
    late = [AttendanceRecord(id=1, work_date=date(2026, 10, 14), is_late=True)]
    result = recompute(late, [], [], CFG, NOW)

    assert [e.points for e in result.ledger] == [-5]
    assert result.summary.total_points == 0
    assert result.summary.monthly_points == 0
    assert result.summary.level_name == "Rookie"
    assert result.summary.current_streak == 0


def test_monthly_points_only_count_current_month():
    september = _week(date(2026, 9, 14))
    october = _week(date(2026, 10, 12))
    result = recompute(september + october, [], [], CFG, NOW)

    assert result.summary.total_points == 150
    assert result.summary.monthly_points == 75
    assert result.summary.current_month == "2026-10"


def test_monthly_points_follow_the_run_month_not_the_event_month():
    result = recompute(_week(), [], [], CFG, datetime(2026, 11, 2, tzinfo=timezone.utc))
    assert result.summary.total_points == 75
    assert result.summary.monthly_points == 0
    assert result.summary.current_month == "2026-11"


def test_badge_reward_counts_toward_monthly_points():
    result = recompute(_week(), [], [STREAK_BADGE], CFG, NOW)
    assert result.summary.monthly_points == 95


def test_overtime_feeds_ot_count_badge():
    ots = [OvertimeRecord(id=i, completed_at=NOW - timedelta(days=i)) for i in range(1, 4)]
    badge = BadgeRule(id=9, name="OT x3", condition_type="ot_count", condition_value=3, points_reward=30)
    result = recompute([], ots, [badge], CFG, NOW)

    assert result.stats.ot_count == 3
    assert result.summary.total_points == 3 * 15 + 30
    assert [b.badge_id for b in result.badges] == [9]


def test_badge_bonus_can_lift_level():
    ots = [OvertimeRecord(id=i, completed_at=NOW) for i in range(1, 5)]
    badge = BadgeRule(id=1, name="OT Pro", condition_type="ot_count", condition_value=4, points_reward=50)
    result = recompute(_week(), ots, [badge], CFG, NOW)
    # 75 attendance + 60 OT + 50 badge
    assert result.summary.total_points == 185
    assert result.summary.level_name == "Regular"


def test_recompute_is_deterministic():
    ots = [OvertimeRecord(id=1, completed_at=NOW)]
    first = recompute(_week(), ots, [STREAK_BADGE], CFG, NOW)
    second = recompute(_week(), ots, [STREAK_BADGE], CFG, NOW)
    assert first == second


def test_negative_ledger_sum_not_clamped_per_entry():
    history = [
        AttendanceRecord(id=i, work_date=date(2026, 10, 12) + timedelta(days=i), is_late=True)
        for i in range(3)
    ]
    result = recompute(history, [], [], CFG, NOW)
    assert sum(e.points for e in result.ledger) == -15
    assert all(e.points == -5 for e in result.ledger)
    assert result.summary.total_points == 0


def test_empty_history_still_yields_summary():
    result = recompute([], [], [], CFG, NOW)
    assert result.ledger == []
    assert result.badges == []
    assert result.summary.total_points == 0
    assert result.summary.current_month == "2026-10"
