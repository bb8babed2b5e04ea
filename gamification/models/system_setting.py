"""
System settings model — key/value rows edited from the admin screens.

The points engine reads the ``gamify_*`` keys plus ``working_days`` and
``work_start_time`` at the start of every recompute run.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String

from gamification.db.base import Base


class SystemSetting(Base):
    __tablename__ = "system_settings"

    setting_key: str = Column(String(100), primary_key=True)  # type: ignore[assignment]
    setting_value: str | None = Column(String(500), nullable=True)  # type: ignore[assignment]
    updated_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
