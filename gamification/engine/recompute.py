"""
Full recompute of one employee's ledger, badges and summary.

Pure function: no I/O, no clock reads. The caller supplies ``now`` (used
for badge timestamps and the monthly bucket) and persists the result.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from gamification.engine.badges import build_statistics, evaluate_badges
from gamification.engine.config import GamificationConfig
from gamification.engine.ledger import build_ledger
from gamification.engine.levels import calculate_level
from gamification.engine.streak import calculate_streaks
from gamification.engine.timeutil import ensure_utc
from gamification.engine.types import (AttendanceRecord, BadgeRule,
                                       LedgerEntry, OvertimeRecord,
                                       PointsSummary, RecomputeResult)


def month_start(now: datetime) -> datetime:
    return ensure_utc(now).replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def monthly_points(entries: Sequence[LedgerEntry], now: datetime) -> int:
    """Sum of entries stamped in *now*'s calendar month, floored at zero.

    Note: the bucket is the recompute run's month, not each entry's month,
    so the figure is a snapshot that goes stale as the calendar advances.
    """
    start = month_start(now)
    return max(0, sum(e.points for e in entries if ensure_utc(e.created_at) >= start))


def recompute(
    attendance: Sequence[AttendanceRecord],
    overtime: Sequence[OvertimeRecord],
    badge_rules: Sequence[BadgeRule],
    config: GamificationConfig,
    now: datetime,
) -> RecomputeResult:
    """Rebuild everything derived from one employee's event history.

    *attendance* must be ascending by work date. Running this twice on
    the same inputs and ``now`` yields equal results.
    """
    now = ensure_utc(now)

    streaks = calculate_streaks(attendance, config.working_days)
    ledger = build_ledger(attendance, overtime, config)
    statistics = build_statistics(ledger.stats, streaks.longest_streak)
    awards = evaluate_badges(badge_rules, statistics, ledger, now)

    # Individual penalties stay negative; only the persisted total is floored
    total = max(0, ledger.total)
    level = calculate_level(total)

    summary = PointsSummary(
        total_points=total,
        monthly_points=monthly_points(ledger.entries, now),
        current_month=now.strftime("%Y-%m"),
        level=level.level,
        level_name=level.name,
        current_streak=streaks.current_streak,
        longest_streak=streaks.longest_streak,
        last_streak_date=streaks.last_streak_date,
    )
    return RecomputeResult(
        ledger=ledger.entries,
        badges=awards,
        summary=summary,
        stats=ledger.stats,
    )
