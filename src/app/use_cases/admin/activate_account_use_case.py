"""
Use Case: Activate Account
"""

from src.app.errors import NotFoundError
from src.app.services.activity_log_service import ActivityLogService
from src.app.services.credential_store import CredentialStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ActivityAction
from .dtos import AccountStatusResponse


class ActivateAccountUseCase:
    """Re-enable a deactivated account. Revoked sessions stay revoked."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.credentials = CredentialStore(uow)
        self.activity = ActivityLogService(uow)

    async def execute(self, account_id: str) -> AccountStatusResponse:
        async with self.uow:
            account = await self.credentials.find_by_id(account_id)
            if account is None:
                raise NotFoundError("Account not found", code="ACCOUNT_NOT_FOUND")

            await self.credentials.update_fields(account, is_active=True)
            await self.uow.commit()

            await self.activity.record(
                account_id,
                ActivityAction.unblock_user,
                details="Account activated by administrator",
                entity_type="Account",
                entity_id=account_id,
            )

            return AccountStatusResponse(
                account_id=account_id, is_active=True, sessions_revoked=0
            )
