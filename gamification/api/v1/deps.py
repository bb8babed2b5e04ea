"""
FastAPI dependencies — auth guards and database sessions.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from gamification.core.security import decode_access_token
from gamification.db.session import async_session_factory
from gamification.models.employee import Employee

bearer_scheme = HTTPBearer(auto_error=False)


# ── Database session ────────────────────────────────────────────────
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Factory handed to the recompute job, which opens one session per employee."""
    return async_session_factory


# ── Auth dependencies ───────────────────────────────────────────────
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> Employee:
    """Decode the bearer JWT and look up the employee it names."""
    credentials_exc = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None or not credentials.credentials:
        raise credentials_exc

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise credentials_exc

    subject: str | None = payload.get("sub")
    if subject is None or not subject.isdigit():
        raise credentials_exc

    result = await db.execute(select(Employee).where(Employee.id == int(subject)))
    employee = result.scalar_one_or_none()
    if employee is None:
        raise credentials_exc
    return employee


async def get_current_active_user(
    current_user: Employee = Depends(get_current_user),
) -> Employee:
    """Reject unapproved or deleted accounts."""
    if current_user.account_status != "approved" or current_user.deleted_at is not None:
        raise HTTPException(status_code=400, detail="Inactive user account")
    return current_user


async def require_admin(
    current_user: Employee = Depends(get_current_active_user),
) -> Employee:
    """Only allow admin role to proceed."""
    if current_user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return current_user
