from src.app.errors import NotFoundError
from src.app.services.unit_of_work import UnitOfWork
from .dtos import AccountProfile


class GetProfileUseCase:
    """Looks up the profile of a single account"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: str) -> AccountProfile:
        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                raise NotFoundError("Account not found", code="ACCOUNT_NOT_FOUND")
            return AccountProfile.from_account(account)
