"""
List Sessions Use Case
"""

from src.app.errors import NotFoundError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import SessionInfo, SessionListResponse


class ListSessionsUseCase:
    """
    Lists the sessions of one account, newest first.

    Used both for self-service (own account) and by administrators.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: str, active_only: bool = False) -> SessionListResponse:
        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                raise NotFoundError("Account not found", code="ACCOUNT_NOT_FOUND")

            now = utcnow()
            sessions = await self.uow.sessions.list_by_account(
                account_id, active_only=active_only, now=now
            )
            infos = [SessionInfo.from_session(s, now) for s in sessions]
            return SessionListResponse(
                account_id=account_id,
                sessions=infos,
                active_count=sum(1 for info in infos if info.is_active),
            )
