import pytest

from src.app.errors import INVALID_CREDENTIALS_MESSAGE, AuthenticationError, SessionLimitError
from src.app.use_cases.auth import LoginUseCase, SessionLimit
from src.domain.entities import UNKNOWN_ACCOUNT_ID, ActivityAction, SessionLimitPolicy
from tests.utils.activity import actions_recorded, entries_recorded

NO_LIMIT = SessionLimit(max_sessions=0)


@pytest.mark.asyncio
async def test_successful_login(mock_uow, token_issuer, credential_store, make_account):
    """Valid credentials open exactly one new session"""
    # Arrange
    account = make_account()
    mock_uow.accounts.get_by_email.return_value = account
    use_case = LoginUseCase(mock_uow, token_issuer, credential_store, NO_LIMIT)

    # Act
    response = await use_case.execute("ADA@example.com", "Analytical1Engine")

    # Assert
    mock_uow.accounts.get_by_email.assert_awaited_once_with("ada@example.com")
    assert mock_uow.sessions.create.await_count == 1
    assert account.last_login_at is not None
    assert response.account.id == account.id
    assert response.session_id == mock_uow.sessions.create.await_args.args[0].id

    claims = token_issuer.decode_claims(response.access_token)
    assert claims.account_id == account.id
    assert claims.email == account.email

    assert actions_recorded(mock_uow) == [ActivityAction.login]
    assert entries_recorded(mock_uow)[0].success is True


@pytest.mark.asyncio
async def test_unknown_email(mock_uow, token_issuer, credential_store):
    """Unknown email fails generically and is audited against the unknown account id"""
    use_case = LoginUseCase(mock_uow, token_issuer, credential_store, NO_LIMIT)

    with pytest.raises(AuthenticationError) as exc_info:
        await use_case.execute("ghost@example.com", "Analytical1Engine")

    assert exc_info.value.message == INVALID_CREDENTIALS_MESSAGE
    assert exc_info.value.code == "INVALID_CREDENTIALS"
    entry = entries_recorded(mock_uow)[0]
    assert entry.account_id == UNKNOWN_ACCOUNT_ID
    assert entry.success is False
    mock_uow.sessions.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_wrong_password(mock_uow, token_issuer, credential_store, make_account):
    account = make_account()
    mock_uow.accounts.get_by_email.return_value = account
    use_case = LoginUseCase(mock_uow, token_issuer, credential_store, NO_LIMIT)

    with pytest.raises(AuthenticationError) as exc_info:
        await use_case.execute(account.email, "WrongPassword1")

    assert exc_info.value.message == INVALID_CREDENTIALS_MESSAGE
    entry = entries_recorded(mock_uow)[0]
    assert entry.account_id == account.id
    assert entry.details == "Invalid password"
    assert account.last_login_at is None
    mock_uow.sessions.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_deactivated_account(mock_uow, token_issuer, credential_store, make_account):
    """Deactivated accounts get the same generic error; the audit records the reason"""
    account = make_account(is_active=False)
    mock_uow.accounts.get_by_email.return_value = account
    use_case = LoginUseCase(mock_uow, token_issuer, credential_store, NO_LIMIT)

    with pytest.raises(AuthenticationError) as exc_info:
        await use_case.execute(account.email, "Analytical1Engine")

    assert exc_info.value.message == INVALID_CREDENTIALS_MESSAGE
    assert entries_recorded(mock_uow)[0].details == "Account is deactivated"
    mock_uow.sessions.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_session_limit_evicts_oldest(
    mock_uow, token_issuer, credential_store, make_account, make_session
):
    """At the cap, the oldest active sessions are revoked to make room"""
    account = make_account()
    mock_uow.accounts.get_by_email.return_value = account
    oldest = [make_session(account.id, session_id=i) for i in range(1, 4)]
    mock_uow.sessions.is_limit_reached.return_value = True
    mock_uow.sessions.list_active_oldest_first.return_value = oldest
    limit = SessionLimit(max_sessions=3, policy=SessionLimitPolicy.evict_oldest)

    await LoginUseCase(mock_uow, token_issuer, credential_store, limit).execute(
        account.email, "Analytical1Engine"
    )

    # 3 active, cap 3: one eviction leaves room for the new session
    assert mock_uow.sessions.revoke.await_count == 1
    assert mock_uow.sessions.revoke.await_args.args[0] is oldest[0]
    assert mock_uow.sessions.create.await_count == 1


@pytest.mark.asyncio
async def test_session_limit_reject(mock_uow, token_issuer, credential_store, make_account):
    """Under the reject policy login fails with SessionLimitError and nothing is written"""
    account = make_account()
    mock_uow.accounts.get_by_email.return_value = account
    mock_uow.sessions.is_limit_reached.return_value = True
    limit = SessionLimit(max_sessions=2, policy=SessionLimitPolicy.reject)

    with pytest.raises(SessionLimitError) as exc_info:
        await LoginUseCase(mock_uow, token_issuer, credential_store, limit).execute(
            account.email, "Analytical1Engine"
        )

    assert exc_info.value.code == "SESSION_LIMIT_REACHED"
    mock_uow.sessions.create.assert_not_awaited()
    mock_uow.rollback.assert_awaited()
    assert entries_recorded(mock_uow)[0].success is False


@pytest.mark.asyncio
async def test_audit_failure_does_not_fail_login(
    mock_uow, token_issuer, credential_store, make_account
):
    """A failed activity write is swallowed after the session has been committed"""
    account = make_account()
    mock_uow.accounts.get_by_email.return_value = account
    mock_uow.activity_logs.create.side_effect = RuntimeError("log table locked")

    response = await LoginUseCase(mock_uow, token_issuer, credential_store, NO_LIMIT).execute(
        account.email, "Analytical1Engine"
    )

    assert response.refresh_token
    mock_uow.rollback.assert_awaited_once()
