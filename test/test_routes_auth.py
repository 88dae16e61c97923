"""
Tests for login, register and health routes
"""

import pytest
from httpx import ASGITransport, AsyncClient

from content_admin.database import get_db
from main import create_app


async def test_login_returns_token(client, test_admin):
    response = await client.post("/api/login", json={"email": "Admin@Example.com", "password": "adminpassword"})

    assert response.status_code == 200
    data = response.json()
    assert data["user"] == {"id": test_admin["id"], "email": "admin@example.com", "role": "admin"}

    # The issued token works against a protected route
    children = await client.get("/api/content-children", headers={"Authorization": f"Bearer {data['token']}"})
    assert children.status_code == 200


async def test_login_bad_password(client, test_user):
    response = await client.post("/api/login", json={"email": "testuser@example.com", "password": "wrong"})

    assert response.status_code == 401
    assert response.json()["error"]["error_code"] == "AUTH_INVALID_CREDENTIALS"


async def test_login_missing_fields(client):
    response = await client.post("/api/login", json={"email": "someone@example.com"})

    assert response.status_code == 400


async def test_register_disabled_by_default(client):
    response = await client.post("/api/register", json={"email": "new@example.com", "password": "password123"})

    assert response.status_code == 403


@pytest.fixture
async def open_client(test_settings, session_factory):
    """Client for an app with initial registration enabled"""
    application = create_app(test_settings.model_copy(update={"allow_initial_register": True}))

    async def override_get_db():
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=application), base_url="http://test") as ac:
        yield ac


async def test_register_when_enabled(open_client):
    response = await open_client.post("/api/register", json={"email": "first@example.com", "password": "password123"})

    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert isinstance(data["userId"], int)

    duplicate = await open_client.post(
        "/api/register", json={"email": "FIRST@example.com", "password": "password123"}
    )
    assert duplicate.status_code == 409


async def test_register_short_password(open_client):
    response = await open_client.post("/api/register", json={"email": "first@example.com", "password": "short"})

    assert response.status_code == 400


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert "x-request-id" in response.headers
