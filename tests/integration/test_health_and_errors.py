"""Health check and error envelope tests."""

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from src.circuitweb.api.dependencies import get_db_session, get_identity_provider
from tests.helpers import OWNER_UID, caller_headers

pytestmark = pytest.mark.integration

REQUEST_ID = "5f0c9a3e-0d2b-4c57-9a7e-1f2f3a4b5c6d"


async def test_health_reports_database(client: AsyncClient):
    response = await client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "healthy"
    assert "timestamp" in body


async def test_health_unhealthy_database_returns_503(app: FastAPI):
    broken_session = AsyncMock()
    broken_session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))

    async def _broken_session():
        yield broken_session

    app.dependency_overrides[get_db_session] = _broken_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/api/health")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"
    assert response.json()["database"].startswith("unhealthy")


async def test_error_envelope_carries_request_id(client: AsyncClient):
    response = await client.get(
        "/api/projects/get",
        params={"projectId": "missing"},
        headers={**caller_headers(OWNER_UID), "X-Request-ID": REQUEST_ID},
    )

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": "Project not found",
        "request_id": REQUEST_ID,
    }
    assert response.headers["x-request-id"] == REQUEST_ID


async def test_malformed_body_is_bad_request(client: AsyncClient):
    response = await client.post(
        "/api/projects/create",
        content=b"{not json",
        headers={**caller_headers(OWNER_UID), "Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["success"] is False


async def test_unhandled_error_is_generic_500(app: FastAPI):
    failing_provider = AsyncMock()
    failing_provider.verify_id_token.side_effect = RuntimeError("boom")
    app.dependency_overrides[get_identity_provider] = lambda: failing_provider

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/projects", headers={"Authorization": "Bearer token"})

    assert response.status_code == 500
    assert response.json()["success"] is False
    assert response.json()["error"] == "Internal server error"
