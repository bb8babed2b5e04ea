"""Tests for the bearer-token guards on the admin endpoints."""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from factories import add_employee, utc
from gamification.core.security import create_access_token, decode_access_token


def _headers(subject) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(subject)}"}


def test_token_round_trip():
    payload = decode_access_token(create_access_token(42))
    assert payload["sub"] == "42"
    assert payload["type"] == "access"


def test_expired_token_rejected():
    token = create_access_token(42, expires_delta=timedelta(seconds=-5))
    assert decode_access_token(token) is None


def test_garbage_token_rejected():
    assert decode_access_token("not-a-jwt") is None


@pytest.mark.asyncio
async def test_missing_token_is_401(auth_client: AsyncClient):
    resp = await auth_client.post("/api/v1/gamification/recalculate", json={})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_non_admin_is_403(auth_client: AsyncClient, db_session):
    emp = await add_employee(db_session, "Plain Pat")
    resp = await auth_client.post("/api/v1/gamification/recalculate", json={}, headers=_headers(emp.id))
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_non_admin_can_read_settings(auth_client: AsyncClient, db_session):
    emp = await add_employee(db_session, "Reader Rae")
    resp = await auth_client.get("/api/v1/gamification/settings", headers=_headers(emp.id))
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_deleted_account_is_rejected(auth_client: AsyncClient, db_session):
    emp = await add_employee(db_session, "Gone Gus", role="admin", deleted_at=utc(2026, 1, 1))
    resp = await auth_client.get("/api/v1/gamification/settings", headers=_headers(emp.id))
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_admin_can_recalculate(auth_client: AsyncClient, db_session):
    admin = await add_employee(db_session, "Admin Ada", role="admin")
    resp = await auth_client.post("/api/v1/gamification/recalculate", json={}, headers=_headers(admin.id))
    assert resp.status_code == 200
    assert resp.json()["processed"] == 1
