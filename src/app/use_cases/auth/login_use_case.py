"""
Login Use Case

Authenticates an account by email and password and opens a new session.
"""

import logging
from typing import Optional

from src.app.errors import (
    INVALID_CREDENTIALS_MESSAGE,
    AuthenticationError,
    SessionLimitError,
)
from src.app.services.activity_log_service import ActivityLogService
from src.app.services.credential_store import CredentialStore
from src.app.services.token_issuer import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.device import DeviceMeta
from src.domain.entities import UNKNOWN_ACCOUNT_ID, Account, ActivityAction
from .dtos import AuthResponse
from .token_pair import SessionLimit, enforce_session_limit, open_session

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for login and token issuance.

    Business Rules:
    - Unknown email, wrong password and deactivated account all fail with
      the same generic message; the activity log records the real reason
    - Password is always checked, even for unknown emails (constant time)
    - Active sessions are capped per account (evict oldest or reject)
    - Updates account.last_login_at
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_issuer: TokenIssuer,
        credential_store: Optional[CredentialStore] = None,
        session_limit: Optional[SessionLimit] = None,
    ):
        self.uow = uow
        self.token_issuer = token_issuer
        self.credentials = credential_store or CredentialStore(uow)
        self.session_limit = session_limit or SessionLimit.from_config()
        self.activity = ActivityLogService(uow)

    async def execute(
        self, email: str, password: str, device: Optional[DeviceMeta] = None
    ) -> AuthResponse:
        """
        Execute login.

        Raises:
            AuthenticationError: credentials rejected (INVALID_CREDENTIALS)
            SessionLimitError: session cap reached under the reject policy
        """
        async with self.uow:
            account = await self.credentials.find_by_email(email)
            password_valid = self.credentials.check_password(account, password)

            if account is None:
                await self._reject(UNKNOWN_ACCOUNT_ID, f"Unknown email: {email}", device)
            if not password_valid:
                await self._reject(account.id, "Invalid password", device)
            if not account.is_active:
                await self._reject(account.id, "Account is deactivated", device)

            now = utcnow()
            account_id = account.id
            try:
                await enforce_session_limit(self.uow, account_id, self.session_limit, now)
            except SessionLimitError:
                await self.uow.rollback()
                await self.activity.record(
                    account_id,
                    ActivityAction.login,
                    success=False,
                    details="Active session limit reached",
                    device=device,
                )
                raise

            await self.credentials.update_fields(account, last_login_at=now)
            issued = await open_session(self.uow, self.token_issuer, account, device, now)
            await self.uow.commit()

            logger.info("Account %s logged in (session %s)", account.id, issued.session.id)
            await self.activity.record(
                account.id,
                ActivityAction.login,
                details="Login successful",
                device=device,
                entity_type="Session",
                entity_id=str(issued.session.id),
            )

            return issued.to_response(account)

    async def _reject(
        self, account_id: str, reason: str, device: Optional[DeviceMeta]
    ) -> None:
        logger.info("Login rejected for account %s: %s", account_id, reason)
        await self.activity.record(
            account_id,
            ActivityAction.login,
            success=False,
            details=reason,
            device=device,
        )
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)
