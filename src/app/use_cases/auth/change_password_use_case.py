"""
Change Password Use Case
"""

import logging
from typing import Optional

from src.app.errors import NotFoundError, ValidationError
from src.app.services.activity_log_service import ActivityLogService
from src.app.services.credential_store import CredentialStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.device import DeviceMeta
from src.domain.entities import ActivityAction

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    """
    Use case for a self-service password change.

    Business Rules:
    - Current password must be verified
    - New password must satisfy the credential store's policy
    - On success every session of the account is revoked in the same transaction
    - Failures are audited before being raised
    """

    def __init__(
        self, uow: UnitOfWork, credential_store: Optional[CredentialStore] = None
    ):
        self.uow = uow
        self.credentials = credential_store or CredentialStore(uow)
        self.activity = ActivityLogService(uow)

    async def execute(
        self,
        account_id: str,
        current_password: str,
        new_password: str,
        device: Optional[DeviceMeta] = None,
    ) -> int:
        """
        Execute password change.

        Returns:
            Number of sessions revoked

        Raises:
            NotFoundError: account does not exist
            ValidationError: current password wrong or new password rejected
        """
        async with self.uow:
            account = await self.credentials.find_by_id(account_id)
            if account is None:
                raise NotFoundError("Account not found", code="ACCOUNT_NOT_FOUND")

            result = await self.credentials.change_password(
                account, current_password, new_password
            )
            if not result.succeeded:
                await self.uow.rollback()
                await self.activity.record(
                    account_id,
                    ActivityAction.change_password,
                    success=False,
                    details="; ".join(result.errors),
                    device=device,
                )
                raise ValidationError("Password change failed", errors=result.errors)

            revoked = await self.uow.sessions.revoke_all_for_account(account_id, utcnow())
            await self.uow.commit()

            logger.info(
                "Password changed for account %s; %d session(s) revoked", account_id, revoked
            )
            await self.activity.record(
                account_id,
                ActivityAction.change_password,
                details=f"Password changed; {revoked} session(s) revoked",
                device=device,
            )

            return revoked
