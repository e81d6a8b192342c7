# tests/api/test_auth_api.py
import pytest
from httpx import AsyncClient

from bookr.core.config import settings

pytestmark = pytest.mark.asyncio

API = settings.API_V1_STR


async def test_health(test_client: AsyncClient):
    response = await test_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


async def test_login_then_me(test_client: AsyncClient):
    response = await test_client.post(f"{API}/auth/login", json={"email": "user@example.com"})
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["id"] == "user-1"

    me = await test_client.get(
        f"{API}/users/me",
        headers={"Authorization": f"Bearer {body['access_token']}"},
    )
    assert me.status_code == 200
    assert me.json()["unique_link"] == "https://bookr.example.com/invite/a1b2c3d4"


async def test_login_unknown_email(test_client: AsyncClient):
    response = await test_client.post(f"{API}/auth/login", json={"email": "ghost@example.com"})

    assert response.status_code == 401
    assert response.json()["error"] == "InvalidCredentials"


async def test_me_requires_token(test_client: AsyncClient):
    response = await test_client.get(f"{API}/users/me")

    assert response.status_code == 401
    assert response.json()["error"] == "InvalidToken"


async def test_me_rejects_garbage_token(test_client: AsyncClient):
    response = await test_client.get(
        f"{API}/users/me", headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert response.status_code == 401


async def test_register_creates_regular_user(test_client: AsyncClient, store):
    response = await test_client.post(
        f"{API}/auth/register",
        json={"name": "王五", "email": "wangwu@example.com", "role": "admin"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["role"] == "user"
    assert body["unique_link"].startswith(settings.INVITE_BASE_URL)
    assert any(u.email == "wangwu@example.com" for u in store.users)


async def test_register_duplicate_email(test_client: AsyncClient):
    response = await test_client.post(
        f"{API}/auth/register", json={"name": "Dup", "email": "admin@example.com"}
    )

    assert response.status_code == 409
    assert response.json()["error"] == "ResourceAlreadyExists"


async def test_register_invalid_email(test_client: AsyncClient):
    response = await test_client.post(
        f"{API}/auth/register", json={"name": "Bad", "email": "not-an-email"}
    )

    assert response.status_code == 422


async def test_token_of_deleted_user_is_rejected(
    test_client: AsyncClient, store, user_headers
):
    store.users = [u for u in store.users if u.id != "user-1"]

    response = await test_client.get(f"{API}/users/me", headers=user_headers)

    assert response.status_code == 401
