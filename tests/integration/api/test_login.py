import pytest
from httpx import AsyncClient

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.errors import SessionLimitError
from src.app.services.token_issuer import TokenIssuer
from src.app.use_cases.auth import LoginUseCase, SessionLimit
from src.domain.entities import SessionLimitPolicy
from tests.utils.headers import ADMIN_HEADERS

LONG_PASSWORD = "Aa1" + "x" * 80


async def _active_count(client, access_token):
    response = await client.get(
        "/sessions",
        params={"active_only": True},
        headers={"Authorization": f"Bearer {access_token}"},
    )
    assert response.status_code == 200
    return response.json()["active_count"]


@pytest.mark.asyncio
async def test_login_adds_one_active_session(client: AsyncClient, registered, test_data):
    _, registration = registered
    before = await _active_count(client, registration["access_token"])

    response = await client.post("/auth/login", json=test_data.credentials())

    assert response.status_code == 200
    data = response.json()
    assert data["session_id"] != registration["session_id"]
    assert data["account"]["last_login_at"] is not None
    assert await _active_count(client, data["access_token"]) == before + 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email, password",
    [
        ("ada@example.com", "WrongPassword1"),
        ("nobody@example.com", "Analytical1Engine"),
        ("ada@example.com", LONG_PASSWORD),
        ("nobody@example.com", LONG_PASSWORD),
    ],
    ids=[
        "wrong-password",
        "unknown-email",
        "long-password-known-email",
        "long-password-unknown-email",
    ],
)
async def test_login_failures_are_indistinguishable(client: AsyncClient, registered, email, password):
    response = await client.post("/auth/login", json={"email": email, "password": password})

    assert response.status_code == 401
    assert response.json()["error"] == {
        "code": "INVALID_CREDENTIALS",
        "message": "Invalid email or password",
    }


@pytest.mark.asyncio
async def test_login_deactivated_account(client: AsyncClient, registered, test_data):
    _, registration = registered
    account_id = registration["account"]["id"]
    deactivate = await client.post(f"/admin/accounts/{account_id}/deactivate", headers=ADMIN_HEADERS)
    assert deactivate.status_code == 200

    response = await client.post("/auth/login", json=test_data.credentials())

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_failed_login_is_audited(client: AsyncClient, registered):
    payload, registration = registered
    await client.post("/auth/login", json={"email": payload["email"], "password": "Wrong1Password"})

    response = await client.get(
        f"/admin/accounts/{registration['account']['id']}/activity", headers=ADMIN_HEADERS
    )

    assert response.status_code == 200
    newest = response.json()["entries"][0]
    assert newest["action"] == "login"
    assert newest["success"] is False
    assert newest["details"] == "Invalid password"


@pytest.mark.asyncio
async def test_login_rejected_at_session_cap(client: AsyncClient, registered, db_session, test_data):
    """Reject policy on a real session: 409-class error, audited, no new session"""
    _, registration = registered
    use_case = LoginUseCase(
        SqlAlchemyUnitOfWork(db_session),
        TokenIssuer.from_config(),
        session_limit=SessionLimit(max_sessions=1, policy=SessionLimitPolicy.reject),
    )
    credentials = test_data.credentials()

    with pytest.raises(SessionLimitError) as exc_info:
        await use_case.execute(credentials["email"], credentials["password"])

    assert exc_info.value.code == "SESSION_LIMIT_REACHED"
    assert await _active_count(client, registration["access_token"]) == 1
    activity = await client.get(
        f"/admin/accounts/{registration['account']['id']}/activity", headers=ADMIN_HEADERS
    )
    newest = activity.json()["entries"][0]
    assert newest["action"] == "login"
    assert newest["success"] is False
    assert newest["details"] == "Active session limit reached"
