"""Integration tests for POST /v1/auth/login."""

import pytest
import pytest_asyncio
from httpx import AsyncClient

PASSWORD = "Str0ng!Pass"


@pytest_asyncio.fixture
async def registered_user(client: AsyncClient, signup_payload) -> dict:
    res = await client.post("/v1/auth/signup", json=signup_payload())
    assert res.status_code == 201
    return res.json()["data"]


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, registered_user, app_codec):
    res = await client.post(
        "/v1/auth/login",
        json={"email": "ana@example.com", "password": PASSWORD, "deviceId": "phone-1"},
    )

    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Login successful"
    data = body["data"]
    assert data["userId"] == registered_user["userId"]
    assert data["email"] == "ana@example.com"
    assert data["name"] == "Ana Pop"
    assert data["expiresIn"] == 3600
    assert data["lastLogin"]
    assert data["refreshToken"] != registered_user["refreshToken"]
    assert app_codec.verify_access(data["token"])["sub"] == registered_user["userId"]


@pytest.mark.asyncio
async def test_login_email_case_insensitive(client: AsyncClient, registered_user):
    res = await client.post(
        "/v1/auth/login", json={"email": "ANA@Example.com", "password": PASSWORD}
    )

    assert res.status_code == 200


@pytest.mark.asyncio
async def test_login_failures_are_identical(client: AsyncClient, registered_user):
    """Unknown email and wrong password return the same code and message."""
    wrong_password = await client.post(
        "/v1/auth/login", json={"email": "ana@example.com", "password": "Wr0ng!Pass"}
    )
    unknown_email = await client.post(
        "/v1/auth/login", json={"email": "ghost@example.com", "password": PASSWORD}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401

    first = wrong_password.json()
    second = unknown_email.json()
    first.pop("requestId")
    second.pop("requestId")
    assert first == second == {
        "success": False,
        "error": "INVALID_CREDENTIALS",
        "message": "Invalid email or password",
    }


@pytest.mark.asyncio
async def test_login_missing_password(client: AsyncClient):
    res = await client.post("/v1/auth/login", json={"email": "ana@example.com"})

    assert res.status_code == 400
    body = res.json()
    assert body["message"] == "Email and password are required"
    assert body["details"] == {"missing": ["password"]}


@pytest.mark.asyncio
async def test_login_invalid_email(client: AsyncClient):
    res = await client.post("/v1/auth/login", json={"email": "nope", "password": PASSWORD})

    assert res.status_code == 400
    assert res.json()["message"] == "Invalid email format"
