"""
Badge evaluation against the statistics gathered for one employee.

Badges are independent of each other: eligibility only looks at the
statistic named by ``condition_type``. Condition types that cannot be
derived from attendance/overtime history (``on_time_month``,
``no_leave_month``) stay at 0 and so are never awarded by a recompute.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

from gamification.engine.ledger import Ledger
from gamification.engine.types import (ActionType, ActivityStats, BadgeAward,
                                       BadgeRule)

logger = logging.getLogger(__name__)


def build_statistics(stats: ActivityStats, longest_streak: int) -> dict[str, int]:
    return {
        "first_checkin": stats.attendance_count,
        "attendance_count": stats.attendance_count,
        "on_time_count": stats.on_time_count,
        "on_time_streak": longest_streak,
        "on_time_month": 0,
        "early_count": stats.early_count,
        "ot_count": stats.ot_count,
        "streak_days": longest_streak,
        "no_leave_month": 0,
    }


def evaluate_badges(
    rules: Iterable[BadgeRule],
    statistics: dict[str, int],
    ledger: Ledger,
    now: datetime,
) -> list[BadgeAward]:
    """Award every badge whose statistic meets its threshold.

    Each earned badge with a positive ``points_reward`` also appends a
    ``badge_earned`` transaction to *ledger*. Rules are visited in id
    order so repeated runs produce identical ledgers.
    """
    awards: list[BadgeAward] = []
    for rule in sorted(rules, key=lambda r: r.id):
        value = statistics.get(rule.condition_type)
        if value is None:
            logger.warning(
                "Badge %s has unknown condition_type %r", rule.id, rule.condition_type
            )
            value = 0
        if value < rule.condition_value:
            continue

        awards.append(BadgeAward(badge_id=rule.id, earned_at=now))
        reward = rule.points_reward or 0
        if reward > 0:
            ledger.add(
                ActionType.BADGE_EARNED,
                reward,
                rule.id,
                "badge",
                now,
                description=f"Badge earned: {rule.name}",
            )
    return awards
