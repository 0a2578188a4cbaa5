import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_change_password_revokes_every_session(client: AsyncClient, registered, test_data):
    payload, registration = registered
    second = (await client.post("/auth/login", json=test_data.credentials())).json()
    headers = {"Authorization": f"Bearer {registration['access_token']}"}

    response = await client.post(
        "/auth/change-password",
        json={"current_password": payload["password"], "new_password": "Difference2Engine"},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json()["sessions_revoked"] == 2
    for tokens in (registration, second):
        refreshed = await client.post("/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert refreshed.status_code == 401

    old_login = await client.post("/auth/login", json=test_data.credentials())
    new_login = await client.post(
        "/auth/login", json={"email": payload["email"], "password": "Difference2Engine"}
    )
    assert old_login.status_code == 401
    assert new_login.status_code == 200


@pytest.mark.asyncio
async def test_change_password_wrong_current(client: AsyncClient, registered):
    _, registration = registered

    response = await client.post(
        "/auth/change-password",
        json={"current_password": "Nope12345", "new_password": "Difference2Engine"},
        headers={"Authorization": f"Bearer {registration['access_token']}"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["errors"] == ["Incorrect password"]


@pytest.mark.asyncio
async def test_me(client: AsyncClient, registered):
    _, registration = registered

    response = await client.get(
        "/auth/me", headers={"Authorization": f"Bearer {registration['access_token']}"}
    )

    assert response.status_code == 200
    assert response.json()["id"] == registration["account"]["id"]


@pytest.mark.asyncio
async def test_me_with_invalid_token(client: AsyncClient):
    response = await client.get("/auth/me", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_update_me(client: AsyncClient, registered):
    _, registration = registered
    headers = {"Authorization": f"Bearer {registration['access_token']}"}

    response = await client.put(
        "/auth/me", json={"last_name": "King", "department": "Mathematics"}, headers=headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["first_name"] == "Ada"
    assert data["last_name"] == "King"
    assert data["full_name"] == "Ada King"
    assert data["department"] == "Mathematics"

    me = await client.get("/auth/me", headers=headers)
    assert me.json()["department"] == "Mathematics"


@pytest.mark.asyncio
async def test_update_me_blank_name(client: AsyncClient, registered):
    _, registration = registered

    response = await client.put(
        "/auth/me",
        json={"first_name": ""},
        headers={"Authorization": f"Bearer {registration['access_token']}"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["errors"] == ["First name is required"]
