"""Pydantic schemas for the gamification admin API."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field, field_validator


# ── Recalculate ─────────────────────────────────────────────────────
class RecalculateRequest(BaseModel):
    employee_id: int | None = Field(default=None, ge=1)


class RecalculateFailure(BaseModel):
    employee_id: int
    name: str
    error: str


class RecalculateResponse(BaseModel):
    success: bool
    message: str
    processed: int
    total: int
    failures: list[RecalculateFailure] = []


# ── Settings ────────────────────────────────────────────────────────
class GamificationSettingsRead(BaseModel):
    settings: dict[str, str | None]


class GamificationSettingsUpdate(BaseModel):
    settings: dict[str, str | int]

    @field_validator("settings")
    @classmethod
    def _stringify(cls, v: dict[str, str | int]) -> dict[str, str | int]:
        if not v:
            raise ValueError("settings must not be empty")
        return {k.strip(): str(val).strip() for k, val in v.items()}


class SettingsUpdateResponse(BaseModel):
    success: bool
    updated: list[str]
    ignored: list[str]


# ── Summary ─────────────────────────────────────────────────────────
class EmployeePointsRead(BaseModel):
    employee_id: int
    total_points: int
    monthly_points: int
    current_month: str
    level: int
    level_name: str
    current_streak: int
    longest_streak: int
    last_streak_date: date | None

    model_config = {"from_attributes": True}


class EmployeeSummaryResponse(BaseModel):
    points: EmployeePointsRead
    next_level_points: int
    progress_to_next_level: int
    badge_count: int


# ── Health ──────────────────────────────────────────────────────────
class HealthResponse(BaseModel):
    status: str
    db: str
    version: str
