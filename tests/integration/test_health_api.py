import pytest
from httpx import AsyncClient

from nutrilens.infrastructure.persistence.database import DatabaseManager


@pytest.mark.asyncio
async def test_health_check_endpoint(client: AsyncClient):
    """Test standard health check endpoint."""
    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["service"] == "NutriLens"
    assert data["environment"] == "testing"
    assert "version" in data
    assert "timestamp" in data


@pytest.mark.asyncio
async def test_database_health_check_connected(client: AsyncClient):
    response = await client.get("/health/db")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "connected"}


@pytest.mark.asyncio
async def test_database_health_check_disconnected(client: AsyncClient, monkeypatch):
    async def fail(self) -> bool:
        return False

    monkeypatch.setattr(DatabaseManager, "check_connection", fail)

    response = await client.get("/health/db")

    assert response.status_code == 503
    assert response.json() == {"status": "error", "database": "disconnected"}
