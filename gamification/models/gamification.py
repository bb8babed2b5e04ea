"""
Gamification models — badge catalogue plus the derived ledger tables.

``point_transactions``, ``employee_badges`` and ``employee_points`` are
owned by the recompute job: each run deletes an employee's rows and
rebuilds them from attendance and overtime history.
"""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import (Boolean, Column, Date, DateTime, ForeignKey, Index,
                        Integer, String, UniqueConstraint)

from gamification.db.base import Base


class BadgeDefinition(Base):
    __tablename__ = "badge_definitions"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    code: str = Column(String(50), unique=True, nullable=False)  # type: ignore[assignment]
    name: str = Column(String(200), nullable=False)  # type: ignore[assignment]
    description: str | None = Column(String(500), nullable=True)  # type: ignore[assignment]
    tier: str = Column(String(20), nullable=False, default="bronze")  # type: ignore[assignment]
    condition_type: str = Column(String(50), nullable=False)  # type: ignore[assignment]
    condition_value: int = Column(Integer, nullable=False, default=1)  # type: ignore[assignment]
    points_reward: int | None = Column(Integer, nullable=True, default=0)  # type: ignore[assignment]
    is_active: bool = Column(Boolean, default=True, server_default="true")  # type: ignore[assignment]


class PointTransaction(Base):
    __tablename__ = "point_transactions"
    __table_args__ = (Index("ix_point_tx_employee_created", "employee_id", "created_at"),)

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    employee_id: int = Column(Integer, ForeignKey("employees.id"), nullable=False)  # type: ignore[assignment]
    action_type: str = Column(String(30), nullable=False)  # type: ignore[assignment]
    points: int = Column(Integer, nullable=False)  # type: ignore[assignment]
    description: str = Column(String(200), nullable=False)  # type: ignore[assignment]
    reference_id: int | None = Column(Integer, nullable=True)  # type: ignore[assignment]
    reference_type: str | None = Column(String(20), nullable=True)  # type: ignore[assignment]
    # attendance | ot | badge
    created_at: datetime = Column(DateTime(timezone=True), nullable=False)  # type: ignore[assignment]


class EmployeeBadge(Base):
    __tablename__ = "employee_badges"
    __table_args__ = (
        UniqueConstraint("employee_id", "badge_id", name="uq_employee_badge"),
    )

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    employee_id: int = Column(Integer, ForeignKey("employees.id"), nullable=False)  # type: ignore[assignment]
    badge_id: int = Column(Integer, ForeignKey("badge_definitions.id"), nullable=False)  # type: ignore[assignment]
    earned_at: datetime = Column(DateTime(timezone=True), nullable=False)  # type: ignore[assignment]


class EmployeePoints(Base):
    __tablename__ = "employee_points"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    employee_id: int = Column(  # type: ignore[assignment]
        Integer, ForeignKey("employees.id"), unique=True, nullable=False
    )
    total_points: int = Column(Integer, nullable=False, default=0)  # type: ignore[assignment]
    monthly_points: int = Column(Integer, nullable=False, default=0)  # type: ignore[assignment]
    current_month: str = Column(String(7), nullable=False)  # type: ignore[assignment]  # YYYY-MM
    level: int = Column(Integer, nullable=False, default=1)  # type: ignore[assignment]
    level_name: str = Column(String(50), nullable=False, default="Rookie")  # type: ignore[assignment]
    current_streak: int = Column(Integer, nullable=False, default=0)  # type: ignore[assignment]
    longest_streak: int = Column(Integer, nullable=False, default=0)  # type: ignore[assignment]
    last_streak_date: date | None = Column(Date, nullable=True)  # type: ignore[assignment]
