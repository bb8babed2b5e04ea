"""
Level table and point-to-level resolution.
"""

from __future__ import annotations

from typing import NamedTuple


class Level(NamedTuple):
    level: int
    name: str
    min_points: int


LEVELS: tuple[Level, ...] = (
    Level(1, "Rookie", 0),
    Level(2, "Regular", 100),
    Level(3, "Reliable", 300),
    Level(4, "Star", 600),
    Level(5, "Super Star", 1000),
    Level(6, "MVP", 1500),
    Level(7, "Legend", 2500),
)


def calculate_level(total_points: int) -> Level:
    """Highest tier whose minimum does not exceed *total_points*."""
    for tier in reversed(LEVELS):
        if total_points >= tier.min_points:
            return tier
    return LEVELS[0]


def level_progress(total_points: int) -> tuple[int, int]:
    """Return ``(next_level_points, progress_percent)``.

    At the top level there is nothing left to reach: ``(0, 100)``.
    """
    current = calculate_level(total_points)
    if current.level == LEVELS[-1].level:
        return 0, 100
    nxt = LEVELS[current.level]
    span = nxt.min_points - current.min_points
    progress = round((max(total_points, 0) - current.min_points) / span * 100)
    return nxt.min_points, min(100, max(0, progress))
