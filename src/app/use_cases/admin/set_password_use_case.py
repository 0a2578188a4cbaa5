"""
Use Case: Set Password

Administrator password reset. The old password is not required; every
session of the account is revoked.
"""

import logging
from typing import Optional

from src.app.errors import NotFoundError, ValidationError
from src.app.services.activity_log_service import ActivityLogService
from src.app.services.credential_store import CredentialStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import ActivityAction
from .dtos import AccountStatusResponse

logger = logging.getLogger(__name__)


class SetPasswordUseCase:
    def __init__(
        self, uow: UnitOfWork, credential_store: Optional[CredentialStore] = None
    ):
        self.uow = uow
        self.credentials = credential_store or CredentialStore(uow)
        self.activity = ActivityLogService(uow)

    async def execute(self, account_id: str, new_password: str) -> AccountStatusResponse:
        """
        Raises:
            NotFoundError: account does not exist
            ValidationError: password rejected by policy
        """
        async with self.uow:
            account = await self.credentials.find_by_id(account_id)
            if account is None:
                raise NotFoundError("Account not found", code="ACCOUNT_NOT_FOUND")

            result = await self.credentials.set_password(account, new_password)
            if not result.succeeded:
                raise ValidationError("Password reset failed", errors=result.errors)

            revoked = await self.uow.sessions.revoke_all_for_account(account_id, utcnow())
            await self.uow.commit()

            logger.info("Password reset for account %s; %d session(s) revoked", account_id, revoked)
            await self.activity.record(
                account_id,
                ActivityAction.reset_password,
                details=f"Password reset by administrator; {revoked} session(s) revoked",
                entity_type="Account",
                entity_id=account_id,
            )

            return AccountStatusResponse(
                account_id=account_id,
                is_active=account.is_active,
                sessions_revoked=revoked,
            )
