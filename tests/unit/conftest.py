from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import bcrypt
import pytest

from src.app.services.credential_store import CredentialStore
from src.app.services.token_issuer import TokenIssuer
from src.domain.base import utcnow
from src.domain.entities import Account, Session
from tests.fixtures.json_loader import TestDataLoader

TEST_BCRYPT_ROUNDS = 4
TEST_PASSWORD = "Analytical1Engine"


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.accounts = MagicMock()
    uow.accounts.get_by_email = AsyncMock(return_value=None)
    uow.accounts.get_by_id = AsyncMock(return_value=None)
    uow.accounts.create = AsyncMock(side_effect=lambda account: account)
    uow.accounts.update = AsyncMock(side_effect=lambda account: account)
    uow.accounts.delete = AsyncMock()

    created_ids = iter(range(100, 1000))

    def _create_session(session):
        session.id = next(created_ids)
        return session

    uow.sessions = MagicMock()
    uow.sessions.create = AsyncMock(side_effect=_create_session)
    uow.sessions.get_by_id = AsyncMock(return_value=None)
    uow.sessions.find_by_refresh_token = AsyncMock(return_value=None)
    uow.sessions.find_active_by_refresh_token = AsyncMock(return_value=None)
    uow.sessions.list_by_account = AsyncMock(return_value=[])
    uow.sessions.list_active_oldest_first = AsyncMock(return_value=[])
    uow.sessions.revoke = AsyncMock(return_value=True)
    uow.sessions.revoke_all_for_account = AsyncMock(return_value=0)
    uow.sessions.revoke_all_except = AsyncMock(return_value=0)
    uow.sessions.count_active = AsyncMock(return_value=0)
    uow.sessions.is_limit_reached = AsyncMock(return_value=False)
    uow.sessions.cleanup_expired = AsyncMock(return_value=0)
    uow.sessions.purge_inactive_before = AsyncMock(return_value=0)

    uow.activity_logs = MagicMock()
    uow.activity_logs.create = AsyncMock(side_effect=lambda entry: entry)
    uow.activity_logs.get_by_account_paginated = AsyncMock(return_value=([], None))
    uow.activity_logs.delete_older_than = AsyncMock(return_value=0)
    return uow


@pytest.fixture
def token_issuer():
    return TokenIssuer(
        secret="unit-test-secret",
        issuer="session-auth-service",
        audience="session-auth-clients",
    )


@pytest.fixture
def credential_store(mock_uow):
    return CredentialStore(mock_uow, rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def make_account():
    def _make(password=TEST_PASSWORD, **overrides):
        fields = dict(
            email="ada@example.com",
            first_name="Ada",
            last_name="Lovelace",
            password_hash=bcrypt.hashpw(
                password.encode(), bcrypt.gensalt(TEST_BCRYPT_ROUNDS)
            ).decode(),
        )
        fields.update(overrides)
        return Account(**fields)

    return _make


@pytest.fixture
def make_session():
    def _make(account_id, session_id=1, **overrides):
        now = utcnow()
        fields = dict(
            id=session_id,
            account_id=account_id,
            refresh_token_hash="0" * 64,
            created_at=now - timedelta(hours=1),
            expires_at=now + timedelta(days=29),
        )
        fields.update(overrides)
        return Session(**fields)

    return _make


@pytest.fixture
def test_user_agents():
    return TestDataLoader.get_copy("user_agents")
