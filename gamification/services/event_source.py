"""
Read side of the recompute job — loads roster, events and rules.

Every loader returns engine value types, never ORM instances, so the
engine stays unaware of the database.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gamification.core.config import settings
from gamification.engine.config import SETTING_KEYS, GamificationConfig
from gamification.engine.timeutil import ensure_utc
from gamification.engine.types import (AttendanceRecord, BadgeRule,
                                       OvertimeRecord)
from gamification.models.employee import AttendanceLog, Employee, OTRequest
from gamification.models.gamification import BadgeDefinition
from gamification.models.system_setting import SystemSetting

OT_COMPLETED_STATUS = "completed"


def eligible_employees_query():
    return select(Employee).where(
        Employee.account_status == "approved",
        Employee.deleted_at.is_(None),
        Employee.is_system_account.is_(False),
    )


async def load_eligible_employees(db: AsyncSession) -> list[Employee]:
    result = await db.execute(eligible_employees_query().order_by(Employee.name, Employee.id))
    return list(result.scalars().all())


async def load_eligible_employee(db: AsyncSession, employee_id: int) -> Employee | None:
    result = await db.execute(eligible_employees_query().where(Employee.id == employee_id))
    return result.scalar_one_or_none()


async def load_settings(db: AsyncSession) -> dict[str, str | None]:
    result = await db.execute(
        select(SystemSetting).where(
            SystemSetting.setting_key.like("gamify\\_%", escape="\\")
            | SystemSetting.setting_key.in_(("working_days", "work_start_time"))
        )
    )
    return {row.setting_key: row.setting_value for row in result.scalars().all()}


async def load_config(db: AsyncSession) -> GamificationConfig:
    values = await load_settings(db)
    known = {k: v for k, v in values.items() if k in SETTING_KEYS}
    return GamificationConfig.from_settings(known, default_offset=settings.DEFAULT_TIMEZONE_OFFSET)


async def load_badge_rules(db: AsyncSession) -> list[BadgeRule]:
    result = await db.execute(
        select(BadgeDefinition)
        .where(BadgeDefinition.is_active.is_(True))
        .order_by(BadgeDefinition.id)
    )
    return [
        BadgeRule(
            id=b.id,
            name=b.name,
            condition_type=b.condition_type,
            condition_value=b.condition_value,
            points_reward=b.points_reward,
            tier=b.tier,
        )
        for b in result.scalars().all()
    ]


async def load_attendance(db: AsyncSession, employee_id: int) -> list[AttendanceRecord]:
    result = await db.execute(
        select(AttendanceLog)
        .where(AttendanceLog.employee_id == employee_id)
        .order_by(AttendanceLog.work_date.asc(), AttendanceLog.id.asc())
    )
    return [
        AttendanceRecord(
            id=log.id,
            work_date=log.work_date,
            is_late=bool(log.is_late),
            clock_in_time=ensure_utc(log.clock_in_time) if log.clock_in_time else None,
            clock_out_time=ensure_utc(log.clock_out_time) if log.clock_out_time else None,
        )
        for log in result.scalars().all()
    ]


async def load_completed_overtime(db: AsyncSession, employee_id: int) -> list[OvertimeRecord]:
    result = await db.execute(
        select(OTRequest)
        .where(
            OTRequest.employee_id == employee_id,
            OTRequest.status == OT_COMPLETED_STATUS,
        )
        .order_by(OTRequest.created_at.asc(), OTRequest.id.asc())
    )
    return [
        OvertimeRecord(id=ot.id, completed_at=ensure_utc(ot.created_at))
        for ot in result.scalars().all()
    ]
