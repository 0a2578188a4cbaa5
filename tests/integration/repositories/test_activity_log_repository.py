from datetime import timedelta

import pytest
from sqlmodel import select

from src.adapter.repositories.account_repository import AccountRepository
from src.adapter.repositories.activity_log_repository import ActivityLogRepository
from src.domain.base import utcnow
from src.domain.entities import Account, ActivityAction, ActivityLogEntry, Session


@pytest.mark.asyncio
async def test_cursor_pagination_walks_all_entries(db_session):
    """Entries sharing a timestamp are neither skipped nor repeated across pages"""
    repo = ActivityLogRepository(db_session)
    stamp = utcnow()
    for i in range(5):
        await repo.create(
            ActivityLogEntry(
                account_id="account-1",
                action=ActivityAction.login,
                timestamp=stamp if i < 3 else stamp - timedelta(minutes=i),
            )
        )
    await repo.create(ActivityLogEntry(account_id="account-2", action=ActivityAction.login))

    seen, cursor = [], None
    while True:
        page, cursor = await repo.get_by_account_paginated("account-1", limit=2, cursor=cursor)
        seen.extend(page)
        if cursor is None:
            break

    assert len(seen) == 5
    assert len({e.id for e in seen}) == 5
    keys = [(e.timestamp, e.id) for e in seen]
    assert keys == sorted(keys, reverse=True)


@pytest.mark.asyncio
async def test_invalid_cursor_restarts_from_newest(db_session):
    repo = ActivityLogRepository(db_session)
    await repo.create(ActivityLogEntry(account_id="account-1", action=ActivityAction.logout))

    page, cursor = await repo.get_by_account_paginated("account-1", cursor="%%%not-base64")

    assert len(page) == 1
    assert cursor is None


@pytest.mark.asyncio
async def test_delete_older_than(db_session):
    repo = ActivityLogRepository(db_session)
    now = utcnow()
    await repo.create(
        ActivityLogEntry(account_id="a", action=ActivityAction.login, timestamp=now - timedelta(days=100))
    )
    await repo.create(ActivityLogEntry(account_id="a", action=ActivityAction.login, timestamp=now))

    assert await repo.delete_older_than(now - timedelta(days=90)) == 1
    page, _ = await repo.get_by_account_paginated("a")
    assert len(page) == 1


@pytest.mark.asyncio
async def test_account_delete_removes_owned_rows(db_session):
    accounts = AccountRepository(db_session)
    account = await accounts.create(
        Account(email="ada@example.com", first_name="Ada", last_name="Lovelace")
    )
    now = utcnow()
    db_session.add(
        Session(account_id=account.id, refresh_token_hash="h", created_at=now, expires_at=now + timedelta(days=1))
    )
    db_session.add(ActivityLogEntry(account_id=account.id, action=ActivityAction.login))
    await db_session.flush()

    await accounts.delete(account)
    await db_session.commit()

    assert await accounts.get_by_id(account.id) is None
    assert (await db_session.exec(select(Session))).all() == []
    assert (await db_session.exec(select(ActivityLogEntry))).all() == []
