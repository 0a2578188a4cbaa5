"""
Use Case: Delete Account

Physically deletes an account together with its sessions and activity log.
"""

import logging

from src.app.errors import NotFoundError
from src.app.services.unit_of_work import UnitOfWork
from .dtos import DeleteAccountResponse

logger = logging.getLogger(__name__)


class DeleteAccountUseCase:
    """
    Business Rules:
    - Sessions and activity log entries of the account are deleted with it
    - Nothing is audited under the deleted account id (it would be orphaned)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: str) -> DeleteAccountResponse:
        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                raise NotFoundError("Account not found", code="ACCOUNT_NOT_FOUND")

            await self.uow.accounts.delete(account)
            await self.uow.commit()

        logger.warning("Deleted account %s", account_id)
        return DeleteAccountResponse(account_id=account_id, deleted=True)
