"""Integration tests for the banner and health endpoints."""

import time

from httpx import AsyncClient


async def test_home(client: AsyncClient):
    """Test the service banner."""
    before = int(time.time() * 1000)
    response = await client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Welcome to Bookstore API"
    assert data["status"] == "running"
    assert data["timestamp"] >= before


async def test_health(client: AsyncClient):
    """Test the health check."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "UP"}
