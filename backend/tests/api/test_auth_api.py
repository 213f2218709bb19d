# tests/api/test_auth_api.py
"""
API tests for login, the current-user endpoint and the health check.
"""
from datetime import timedelta

import pytest

from bizadmin.core.security import create_access_token
from factories import ADMIN_PASSWORD, create_user


@pytest.mark.asyncio
@pytest.mark.parametrize("login", ["admin", "admin@example.com", "ADMIN"])
async def test_login_with_username_or_email(client, admin_user, login):
    response = await client.post(
        "/api/v1/auth/login", json={"login": login, "password": ADMIN_PASSWORD}
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["token_type"] == "bearer"
    assert data["expires_in"] == 24 * 3600

    me = await client.get(
        "/api/v1/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"}
    )
    assert me.json()["data"]["username"] == "admin"


@pytest.mark.asyncio
async def test_login_with_wrong_password(client, admin_user):
    response = await client.post(
        "/api/v1/auth/login", json={"login": "admin", "password": "nope"}
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_inactive_user_cannot_log_in(client, db):
    await create_user(db, username="gone", active=False, password="Password1")

    response = await client.post(
        "/api/v1/auth/login", json={"login": "gone", "password": "Password1"}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_hides_password_hash(client, auth_headers):
    response = await client.get("/api/v1/auth/me", headers=auth_headers)

    assert response.status_code == 200
    assert "password_hash" not in response.json()["data"]


@pytest.mark.asyncio
async def test_invalid_token_is_rejected(client, admin_user):
    response = await client.get(
        "/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid authentication token."


@pytest.mark.asyncio
async def test_expired_token_is_rejected(client, admin_user):
    token, _ = create_access_token(admin_user.id, expires_delta=timedelta(seconds=-5))

    response = await client.get(
        "/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 401
    assert "expired" in response.json()["error"]["message"]


@pytest.mark.asyncio
async def test_health_check(client):
    response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["database"]["status"] == "ok"
    assert "X-Request-ID" in response.headers
