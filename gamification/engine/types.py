"""
Plain value types flowing through the points engine.

Nothing here touches the database; the service layer converts ORM rows
into these before calling :func:`gamification.engine.recompute.recompute`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date, datetime


class GamificationError(Exception):
    """Base class for engine errors."""


class ConfigurationError(GamificationError):
    """Raised when configuration cannot be used even after defaulting."""


class ActionType(str, enum.Enum):
    ON_TIME_CHECKIN = "on_time_checkin"
    LATE_PENALTY = "late_penalty"
    EARLY_CHECKIN = "early_checkin"
    FULL_ATTENDANCE_DAY = "full_attendance_day"
    OT_COMPLETED = "ot_completed"
    BADGE_EARNED = "badge_earned"


@dataclass(frozen=True)
class AttendanceRecord:
    id: int
    work_date: date
    is_late: bool
    clock_in_time: datetime | None = None
    clock_out_time: datetime | None = None


@dataclass(frozen=True)
class OvertimeRecord:
    id: int
    completed_at: datetime


@dataclass(frozen=True)
class BadgeRule:
    id: int
    name: str
    condition_type: str
    condition_value: int
    points_reward: int | None = 0
    tier: str = "bronze"


@dataclass(frozen=True)
class LedgerEntry:
    action_type: ActionType
    points: int
    description: str
    reference_id: int | None
    reference_type: str | None
    created_at: datetime


@dataclass(frozen=True)
class BadgeAward:
    badge_id: int
    earned_at: datetime


@dataclass(frozen=True)
class PointsSummary:
    total_points: int
    monthly_points: int
    current_month: str
    level: int
    level_name: str
    current_streak: int
    longest_streak: int
    last_streak_date: date | None


@dataclass
class ActivityStats:
    """Counters gathered while building the ledger, consumed by badges."""

    attendance_count: int = 0
    on_time_count: int = 0
    early_count: int = 0
    ot_count: int = 0


@dataclass
class RecomputeResult:
    summary: PointsSummary
    ledger: list[LedgerEntry] = field(default_factory=list)
    badges: list[BadgeAward] = field(default_factory=list)
    stats: ActivityStats = field(default_factory=ActivityStats)
