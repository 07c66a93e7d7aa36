"""Integration tests for POST /v1/auth/refresh."""

import pytest
from httpx import AsyncClient
from sqlalchemy import update

from nutrilens.core.clock import utcnow
from nutrilens.infrastructure.persistence.models import UserModel


@pytest.mark.asyncio
async def test_refresh_returns_new_access_token(client: AsyncClient, signup_payload, app_codec):
    signup = (await client.post("/v1/auth/signup", json=signup_payload())).json()["data"]

    res = await client.post("/v1/auth/refresh", json={"refreshToken": signup["refreshToken"]})

    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert set(body["data"]) == {"token", "expiresIn"}
    assert body["data"]["expiresIn"] == 3600
    assert app_codec.verify_access(body["data"]["token"])["sub"] == signup["userId"]


@pytest.mark.asyncio
async def test_refresh_missing_token(client: AsyncClient):
    res = await client.post("/v1/auth/refresh", json={})

    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert body["message"] == "Refresh token is required"


@pytest.mark.asyncio
async def test_refresh_token_invalid(client: AsyncClient):
    res = await client.post("/v1/auth/refresh", json={"refreshToken": "invalid.token.here"})

    assert res.status_code == 401
    assert res.json()["error"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_access_token_as_refresh_token(client: AsyncClient, signup_payload):
    signup = (await client.post("/v1/auth/signup", json=signup_payload())).json()["data"]

    res = await client.post("/v1/auth/refresh", json={"refreshToken": signup["token"]})

    assert res.status_code == 401
    assert res.json()["error"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_revoked_refresh_token_rejected(client: AsyncClient, signup_payload):
    """signup -> logout with R -> refresh with R is 401 even before expiry."""
    signup = (await client.post("/v1/auth/signup", json=signup_payload())).json()["data"]

    logout = await client.post(
        "/v1/auth/logout",
        json={"refreshToken": signup["refreshToken"]},
        headers={"Authorization": f"Bearer {signup['token']}"},
    )
    assert logout.status_code == 200

    res = await client.post("/v1/auth/refresh", json={"refreshToken": signup["refreshToken"]})

    assert res.status_code == 401
    assert res.json()["error"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_refresh_for_deleted_user(client: AsyncClient, signup_payload, db_session):
    signup = (await client.post("/v1/auth/signup", json=signup_payload())).json()["data"]
    await db_session.execute(
        update(UserModel).where(UserModel.id == signup["userId"]).values(deleted_at=utcnow())
    )
    await db_session.commit()

    res = await client.post("/v1/auth/refresh", json={"refreshToken": signup["refreshToken"]})

    assert res.status_code == 404
    assert res.json()["error"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_refresh_token_not_encodable(client: AsyncClient):
    # Valid JSON escape for a lone surrogate
    res = await client.post(
        "/v1/auth/refresh",
        content=b'{"refreshToken": "\\ud800"}',
        headers={"Content-Type": "application/json"},
    )

    assert res.status_code == 401
    assert res.json()["error"] == "INVALID_TOKEN"
