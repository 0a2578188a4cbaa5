from datetime import datetime, timedelta

import pytest

from src.app.errors import NotFoundError, ValidationError
from src.app.use_cases.admin import (
    ActivateAccountUseCase,
    CleanupActivityLogsUseCase,
    DeactivateAccountUseCase,
    DeleteAccountUseCase,
    SetPasswordUseCase,
)
from src.domain.entities import ActivityAction
from tests.utils.activity import actions_recorded


@pytest.mark.asyncio
async def test_deactivate_revokes_all_sessions_in_one_commit(mock_uow, make_account):
    """Flag flip and revocation are committed together, before the audit write"""
    # Arrange
    account = make_account()
    mock_uow.accounts.get_by_id.return_value = account
    mock_uow.sessions.revoke_all_for_account.return_value = 3
    events = []
    mock_uow.accounts.update.side_effect = lambda a: events.append("flag") or a
    mock_uow.sessions.revoke_all_for_account.side_effect = (
        lambda *args: events.append("revoke") or 3
    )
    mock_uow.commit.side_effect = lambda: events.append("commit")

    # Act
    response = await DeactivateAccountUseCase(mock_uow).execute(account.id)

    # Assert
    assert account.is_active is False
    assert response.sessions_revoked == 3
    assert events[:3] == ["flag", "revoke", "commit"]
    assert actions_recorded(mock_uow) == [ActivityAction.block_user]


@pytest.mark.asyncio
async def test_deactivate_unknown_account(mock_uow):
    with pytest.raises(NotFoundError):
        await DeactivateAccountUseCase(mock_uow).execute("missing")
    mock_uow.sessions.revoke_all_for_account.assert_not_awaited()


@pytest.mark.asyncio
async def test_activate_account(mock_uow, make_account):
    account = make_account(is_active=False)
    mock_uow.accounts.get_by_id.return_value = account

    response = await ActivateAccountUseCase(mock_uow).execute(account.id)

    assert account.is_active is True
    assert response.is_active is True
    mock_uow.sessions.revoke_all_for_account.assert_not_awaited()
    assert actions_recorded(mock_uow) == [ActivityAction.unblock_user]


@pytest.mark.asyncio
async def test_set_password_revokes_sessions(mock_uow, credential_store, make_account):
    account = make_account()
    mock_uow.accounts.get_by_id.return_value = account
    mock_uow.sessions.revoke_all_for_account.return_value = 2

    response = await SetPasswordUseCase(mock_uow, credential_store).execute(
        account.id, "Difference2Engine"
    )

    assert response.sessions_revoked == 2
    assert credential_store.check_password(account, "Difference2Engine")
    assert actions_recorded(mock_uow) == [ActivityAction.reset_password]


@pytest.mark.asyncio
async def test_set_password_policy_failure(mock_uow, credential_store, make_account):
    mock_uow.accounts.get_by_id.return_value = make_account()

    with pytest.raises(ValidationError):
        await SetPasswordUseCase(mock_uow, credential_store).execute("id", "weak")

    mock_uow.sessions.revoke_all_for_account.assert_not_awaited()
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_account(mock_uow, make_account):
    account = make_account()
    mock_uow.accounts.get_by_id.return_value = account

    response = await DeleteAccountUseCase(mock_uow).execute(account.id)

    assert response.deleted is True
    mock_uow.accounts.delete.assert_awaited_once_with(account)
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_delete_unknown_account(mock_uow):
    with pytest.raises(NotFoundError):
        await DeleteAccountUseCase(mock_uow).execute("missing")
    mock_uow.accounts.delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_cleanup_activity_logs_uses_retention_cutoff(mock_uow):
    now = datetime(2024, 6, 1, 12, 0, 0)
    mock_uow.activity_logs.delete_older_than.return_value = 11

    response = await CleanupActivityLogsUseCase(mock_uow, retention_days=90).execute(now=now)

    assert response.deleted == 11
    mock_uow.activity_logs.delete_older_than.assert_awaited_once_with(now - timedelta(days=90))


@pytest.mark.asyncio
async def test_cleanup_activity_logs_rejects_zero_days(mock_uow):
    with pytest.raises(ValidationError):
        await CleanupActivityLogsUseCase(mock_uow).execute(older_than_days=0)
    mock_uow.activity_logs.delete_older_than.assert_not_awaited()
