"""
Use Case: Deactivate Account

Blocks an account and revokes every session it holds.
"""

import logging

from src.app.errors import NotFoundError
from src.app.services.activity_log_service import ActivityLogService
from src.app.services.credential_store import CredentialStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import ActivityAction
from .dtos import AccountStatusResponse

logger = logging.getLogger(__name__)


class DeactivateAccountUseCase:
    """
    Deactivate an account (administrator action).

    Business Logic:
    1. Validate account exists
    2. Set is_active=False
    3. Revoke all sessions of the account
    4. Commit flag change and revocation together
    5. Audit

    Idempotent: deactivating an inactive account succeeds and revokes
    whatever sessions remain.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.credentials = CredentialStore(uow)
        self.activity = ActivityLogService(uow)

    async def execute(self, account_id: str) -> AccountStatusResponse:
        async with self.uow:
            account = await self.credentials.find_by_id(account_id)
            if account is None:
                raise NotFoundError("Account not found", code="ACCOUNT_NOT_FOUND")

            await self.credentials.update_fields(account, is_active=False)
            revoked = await self.uow.sessions.revoke_all_for_account(account_id, utcnow())
            await self.uow.commit()

            logger.info("Deactivated account %s; %d session(s) revoked", account_id, revoked)
            await self.activity.record(
                account_id,
                ActivityAction.block_user,
                details=f"Account deactivated by administrator; {revoked} session(s) revoked",
                entity_type="Account",
                entity_id=account_id,
            )

            return AccountStatusResponse(
                account_id=account_id, is_active=False, sessions_revoked=revoked
            )
