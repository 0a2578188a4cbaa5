from abc import ABC, abstractmethod

from src.app.repositories.account_repository import IAccountRepository
from src.app.repositories.activity_log_repository import IActivityLogRepository
from src.app.repositories.session_repository import ISessionRepository


class UnitOfWork(ABC):
    """
    Abstract UnitOfWork - defines repository access and transaction management

    Usage is a scoped transaction: work done inside ``async with uow`` that is
    not committed is rolled back on exit, including on error paths.
    """

    # Repository properties (initialized in __aenter__)
    accounts: IAccountRepository
    sessions: ISessionRepository
    activity_logs: IActivityLogRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
