"""
Points engine — streaks, ledger, badges and levels as pure functions.
"""

from gamification.engine.config import GamificationConfig
from gamification.engine.levels import LEVELS, calculate_level, level_progress
from gamification.engine.recompute import recompute
from gamification.engine.types import (ActionType, AttendanceRecord,
                                       BadgeRule, ConfigurationError,
                                       GamificationError, OvertimeRecord,
                                       RecomputeResult)

__all__ = [
    "LEVELS",
    "ActionType",
    "AttendanceRecord",
    "BadgeRule",
    "ConfigurationError",
    "GamificationConfig",
    "GamificationError",
    "OvertimeRecord",
    "RecomputeResult",
    "calculate_level",
    "level_progress",
    "recompute",
]
