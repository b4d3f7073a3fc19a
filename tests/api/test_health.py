"""Tests for the health check endpoint."""

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient


async def test_health_returns_ok(test_app: FastAPI) -> None:
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
