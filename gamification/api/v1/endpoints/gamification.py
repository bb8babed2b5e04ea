"""
Gamification admin endpoints — recompute trigger, rule settings, summaries.

- POST /gamification/recalculate and PUT /gamification/settings require admin.
- GET endpoints require any approved employee.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from gamification.api.v1.deps import (get_current_active_user, get_db,
                                      get_session_factory, require_admin)
from gamification.engine.levels import level_progress
from gamification.models.employee import Employee
from gamification.models.gamification import EmployeeBadge, EmployeePoints
from gamification.models.system_setting import SystemSetting
from gamification.schemas.gamification import (EmployeePointsRead,
                                               EmployeeSummaryResponse,
                                               GamificationSettingsRead,
                                               GamificationSettingsUpdate,
                                               RecalculateFailure,
                                               RecalculateRequest,
                                               RecalculateResponse,
                                               SettingsUpdateResponse)
from gamification.services.event_source import load_settings
from gamification.services.recalculate import (EmployeeNotEligible,
                                               recalculate_all)

router = APIRouter(prefix="/gamification", tags=["gamification"])
logger = logging.getLogger(__name__)

EDITABLE_PREFIX = "gamify_"


# ── Recalculate ─────────────────────────────────────────────────────
@router.post("/recalculate", response_model=RecalculateResponse)
async def recalculate(
    body: RecalculateRequest,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    admin: Employee = Depends(require_admin),
) -> RecalculateResponse:
    """Rebuild ledger, badges and summary for one employee or the full roster."""
    logger.info("Recompute requested by %s (employee_id=%s)", admin.id, body.employee_id)
    try:
        report = await recalculate_all(session_factory, employee_id=body.employee_id)
    except EmployeeNotEligible as exc:
        raise HTTPException(status_code=404, detail=str(exc))

    return RecalculateResponse(
        success=not report.failures,
        message=f"Recalculated {report.processed}/{report.total} employees",
        processed=report.processed,
        total=report.total,
        failures=[
            RecalculateFailure(employee_id=f.employee_id, name=f.name, error=f.error)
            for f in report.failures
        ],
    )


# ── Settings ────────────────────────────────────────────────────────
@router.get("/settings", response_model=GamificationSettingsRead)
async def get_settings(
    db: AsyncSession = Depends(get_db),
    _user: Employee = Depends(get_current_active_user),
) -> GamificationSettingsRead:
    """Current point values, thresholds and calendar settings."""
    return GamificationSettingsRead(settings=await load_settings(db))


@router.put("/settings", response_model=SettingsUpdateResponse)
async def update_settings(
    body: GamificationSettingsUpdate,
    db: AsyncSession = Depends(get_db),
    _admin: Employee = Depends(require_admin),
) -> SettingsUpdateResponse:
    """Upsert ``gamify_*`` keys; any other key is ignored."""
    updated: list[str] = []
    ignored: list[str] = []

    for key, value in body.settings.items():
        if not key.startswith(EDITABLE_PREFIX):
            ignored.append(key)
            continue
        row = await db.get(SystemSetting, key)
        if row is None:
            db.add(SystemSetting(setting_key=key, setting_value=value))
        else:
            row.setting_value = value
        updated.append(key)

    await db.commit()
    logger.info("Gamification settings updated: %s (ignored: %s)", updated, ignored)
    return SettingsUpdateResponse(success=True, updated=updated, ignored=ignored)


# ── Summary ─────────────────────────────────────────────────────────
@router.get("/employees/{employee_id}/summary", response_model=EmployeeSummaryResponse)
async def employee_summary(
    employee_id: int,
    db: AsyncSession = Depends(get_db),
    _user: Employee = Depends(get_current_active_user),
) -> EmployeeSummaryResponse:
    """Persisted points summary with level progress and badge count."""
    result = await db.execute(
        select(EmployeePoints).where(EmployeePoints.employee_id == employee_id)
    )
    points = result.scalar_one_or_none()
    if points is None:
        raise HTTPException(status_code=404, detail="No points summary for this employee")

    badge_count = await db.scalar(
        select(func.count(EmployeeBadge.id)).where(EmployeeBadge.employee_id == employee_id)
    )
    next_points, progress = level_progress(points.total_points)
    return EmployeeSummaryResponse(
        points=EmployeePointsRead.model_validate(points),
        next_level_points=next_points,
        progress_to_next_level=progress,
        badge_count=badge_count or 0,
    )
