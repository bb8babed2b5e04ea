"""
Recompute orchestrator — rebuilds derived gamification rows per employee.

Each employee runs in its own session and transaction: the existing
ledger, badges and summary are deleted and re-inserted from a fresh
:func:`~gamification.engine.recompute.recompute` result. A failure
(including a timeout) rolls back only that employee and the batch moves
on. Failures while loading the roster, settings or badge catalogue are
fatal and propagate to the caller.

Concurrent runs for the same employee are not serialised here.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from gamification.core.config import settings
from gamification.db.session import async_session_factory
from gamification.engine.config import GamificationConfig
from gamification.engine.recompute import recompute
from gamification.engine.types import (BadgeRule, GamificationError,
                                       RecomputeResult)
from gamification.models.gamification import (EmployeeBadge, EmployeePoints,
                                               PointTransaction)
from gamification.services.event_source import (load_attendance,
                                                load_badge_rules,
                                                load_completed_overtime,
                                                load_config,
                                                load_eligible_employee,
                                                load_eligible_employees)

logger = logging.getLogger(__name__)


class EmployeeNotEligible(GamificationError):
    """Requested employee is unknown, unapproved, deleted or a system account."""


@dataclass
class EmployeeFailure:
    employee_id: int
    name: str
    error: str


@dataclass
class RecalculationReport:
    total: int = 0
    processed: int = 0
    failures: list[EmployeeFailure] = field(default_factory=list)


async def replace_derived_rows(db: AsyncSession, employee_id: int, result: RecomputeResult) -> None:
    """Delete then re-insert the employee's ledger, badges and summary."""
    await db.execute(delete(PointTransaction).where(PointTransaction.employee_id == employee_id))
    await db.execute(delete(EmployeeBadge).where(EmployeeBadge.employee_id == employee_id))
    await db.execute(delete(EmployeePoints).where(EmployeePoints.employee_id == employee_id))
    await db.flush()

    db.add_all(
        PointTransaction(
            employee_id=employee_id,
            action_type=entry.action_type.value,
            points=entry.points,
            description=entry.description,
            reference_id=entry.reference_id,
            reference_type=entry.reference_type,
            created_at=entry.created_at,
        )
        for entry in result.ledger
    )
    db.add_all(
        EmployeeBadge(employee_id=employee_id, badge_id=award.badge_id, earned_at=award.earned_at)
        for award in result.badges
    )
    summary = result.summary
    db.add(
        EmployeePoints(
            employee_id=employee_id,
            total_points=summary.total_points,
            monthly_points=summary.monthly_points,
            current_month=summary.current_month,
            level=summary.level,
            level_name=summary.level_name,
            current_streak=summary.current_streak,
            longest_streak=summary.longest_streak,
            last_streak_date=summary.last_streak_date,
        )
    )
    await db.flush()


async def recalculate_employee(
    db: AsyncSession,
    employee_id: int,
    config: GamificationConfig,
    badge_rules: list[BadgeRule],
    now: datetime,
) -> RecomputeResult:
    """Recompute and persist one employee inside the caller's transaction."""
    attendance = await load_attendance(db, employee_id)
    overtime = await load_completed_overtime(db, employee_id)
    result = recompute(attendance, overtime, badge_rules, config, now)
    await replace_derived_rows(db, employee_id, result)
    return result


async def _run_in_transaction(
    session_factory: async_sessionmaker[AsyncSession],
    employee_id: int,
    config: GamificationConfig,
    badge_rules: list[BadgeRule],
    now: datetime,
) -> RecomputeResult:
    async with session_factory() as db:
        async with db.begin():
            return await recalculate_employee(db, employee_id, config, badge_rules, now)


async def recalculate_all(
    session_factory: async_sessionmaker[AsyncSession] = async_session_factory,
    *,
    employee_id: int | None = None,
    now: datetime | None = None,
    timeout: float | None = None,
) -> RecalculationReport:
    """Recompute every eligible employee, or just *employee_id* when given.

    Raises :class:`EmployeeNotEligible` if *employee_id* is not on the
    eligible roster.
    """
    now = now or datetime.now(timezone.utc)
    timeout = settings.RECALC_EMPLOYEE_TIMEOUT_SECONDS if timeout is None else timeout

    async with session_factory() as db:
        config = await load_config(db)
        badge_rules = await load_badge_rules(db)
        if employee_id is None:
            roster = [(e.id, e.name) for e in await load_eligible_employees(db)]
        else:
            employee = await load_eligible_employee(db, employee_id)
            if employee is None:
                raise EmployeeNotEligible(f"Employee {employee_id} is not eligible for recompute")
            roster = [(employee.id, employee.name)]

    report = RecalculationReport(total=len(roster))
    logger.info(
        "Gamification recompute: %d employees | work start %s (UTC%s) | working days %s",
        report.total,
        config.work_start_time,
        config.timezone_offset,
        ",".join(str(d) for d in sorted(config.working_days)),
    )

    for idx, (emp_id, name) in enumerate(roster, start=1):
        try:
            result = await asyncio.wait_for(
                _run_in_transaction(session_factory, emp_id, config, badge_rules, now),
                timeout=timeout if timeout > 0 else None,
            )
        except Exception as exc:  # contained per employee; batch continues
            logger.exception("[%d/%d] %s (id=%s) failed: %s", idx, report.total, name, emp_id, exc)
            report.failures.append(
                EmployeeFailure(employee_id=emp_id, name=name, error=str(exc) or type(exc).__name__)
            )
            continue

        report.processed += 1
        summary = result.summary
        logger.info(
            "[%d/%d] %s: %d pts | Lv.%d %s | streak %d (best %d) | badges %d | attendance %d | OT %d",
            idx,
            report.total,
            name,
            summary.total_points,
            summary.level,
            summary.level_name,
            summary.current_streak,
            summary.longest_streak,
            len(result.badges),
            result.stats.attendance_count,
            result.stats.ot_count,
        )

    logger.info("Gamification recompute done: processed %d/%d", report.processed, report.total)
    return report
