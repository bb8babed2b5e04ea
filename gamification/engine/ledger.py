"""
Ledger builder — turns attendance and overtime events into point transactions.

Per attendance row the emission order is fixed: late penalty *or* on-time
credit, then the early check-in bonus, then the full-day credit. Every
transaction is stamped with the event's own date so historical points
land in the month they were earned.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, time, timezone

from gamification.engine.config import GamificationConfig
from gamification.engine.timeutil import ensure_utc, local_minutes_of_day
from gamification.engine.types import (ActionType, ActivityStats,
                                       AttendanceRecord, LedgerEntry,
                                       OvertimeRecord)

logger = logging.getLogger(__name__)

DESCRIPTIONS = {
    ActionType.ON_TIME_CHECKIN: "On-time check-in",
    ActionType.LATE_PENALTY: "Late arrival",
    ActionType.EARLY_CHECKIN: "Early check-in",
    ActionType.FULL_ATTENDANCE_DAY: "Full attendance day",
    ActionType.OT_COMPLETED: "Overtime completed",
}


def is_early_checkin(clock_in: datetime, config: GamificationConfig) -> bool:
    """True when *clock_in* precedes local work start by at least ``early_minutes``."""
    minutes = local_minutes_of_day(clock_in, config.local_tz)
    return config.work_start_minutes - minutes >= config.early_minutes


def event_timestamp(rec: AttendanceRecord) -> datetime:
    return datetime.combine(rec.work_date, time.min, tzinfo=timezone.utc)


@dataclass
class Ledger:
    entries: list[LedgerEntry] = field(default_factory=list)
    stats: ActivityStats = field(default_factory=ActivityStats)

    @property
    def total(self) -> int:
        return sum(e.points for e in self.entries)

    def add(
        self,
        action: ActionType,
        points: int,
        reference_id: int | None,
        reference_type: str | None,
        created_at: datetime,
        description: str | None = None,
    ) -> LedgerEntry:
        entry = LedgerEntry(
            action_type=action,
            points=points,
            description=description or DESCRIPTIONS[action],
            reference_id=reference_id,
            reference_type=reference_type,
            created_at=created_at,
        )
        self.entries.append(entry)
        return entry


def build_ledger(
    attendance: Iterable[AttendanceRecord],
    overtime: Iterable[OvertimeRecord],
    config: GamificationConfig,
) -> Ledger:
    ledger = Ledger()

    for rec in attendance:
        ts = event_timestamp(rec)
        ledger.stats.attendance_count += 1

        if rec.is_late:
            ledger.add(ActionType.LATE_PENALTY, config.points_late_penalty, rec.id, "attendance", ts)
        else:
            ledger.add(ActionType.ON_TIME_CHECKIN, config.points_on_time, rec.id, "attendance", ts)
            ledger.stats.on_time_count += 1

            if rec.clock_in_time is not None and is_early_checkin(rec.clock_in_time, config):
                ledger.add(ActionType.EARLY_CHECKIN, config.points_early, rec.id, "attendance", ts)
                ledger.stats.early_count += 1

        if rec.clock_out_time is not None:
            ledger.add(ActionType.FULL_ATTENDANCE_DAY, config.points_full_day, rec.id, "attendance", ts)

    for ot in overtime:
        ledger.add(ActionType.OT_COMPLETED, config.points_ot, ot.id, "ot", ensure_utc(ot.completed_at))
        ledger.stats.ot_count += 1

    logger.debug(
        "Ledger built: %d entries, %d points, stats=%s",
        len(ledger.entries),
        ledger.total,
        ledger.stats,
    )
    return ledger
