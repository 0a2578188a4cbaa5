import pytest

from src.app.errors import NotFoundError
from src.app.use_cases.audit import GetActivityLogsUseCase
from src.domain.entities import ActivityAction, ActivityLogEntry, DeviceType
from tests.utils.activity import actions_recorded


@pytest.mark.asyncio
async def test_returns_page_and_cursor(mock_uow, make_account):
    account = make_account()
    mock_uow.accounts.get_by_id.return_value = account
    entry = ActivityLogEntry(
        id=3,
        account_id=account.id,
        action=ActivityAction.login,
        device_type=DeviceType.mobile,
    )
    mock_uow.activity_logs.get_by_account_paginated.return_value = ([entry], "next-page")

    page = await GetActivityLogsUseCase(mock_uow).execute(account.id, limit=1)

    assert page.next_cursor == "next-page"
    assert page.entries[0].action == ActivityAction.login
    assert page.entries[0].device_type == DeviceType.mobile
    mock_uow.activity_logs.get_by_account_paginated.assert_awaited_once_with(
        account.id, limit=1, cursor=None
    )
    assert actions_recorded(mock_uow) == []


@pytest.mark.asyncio
async def test_limit_is_capped(mock_uow, make_account):
    mock_uow.accounts.get_by_id.return_value = make_account()

    await GetActivityLogsUseCase(mock_uow).execute("id", limit=1000)

    assert mock_uow.activity_logs.get_by_account_paginated.await_args.kwargs["limit"] == 100


@pytest.mark.asyncio
async def test_view_is_recorded_when_requested(mock_uow, make_account):
    mock_uow.accounts.get_by_id.return_value = make_account()

    await GetActivityLogsUseCase(mock_uow).execute("id", record_view=True)

    assert actions_recorded(mock_uow) == [ActivityAction.view_logs]


@pytest.mark.asyncio
async def test_unknown_account(mock_uow):
    with pytest.raises(NotFoundError):
        await GetActivityLogsUseCase(mock_uow).execute("missing")
