import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.account_repository import AccountRepository
from src.adapter.repositories.activity_log_repository import ActivityLogRepository
from src.adapter.repositories.session_repository import SessionRepository
from src.app.errors import PersistenceError
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.accounts = AccountRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.activity_logs = ActivityLogRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        try:
            await self.rollback()
        except SQLAlchemyError as rollback_exc:
            if exc is None:
                raise PersistenceError("Storage operation failed") from rollback_exc
            logger.warning("Rollback failed while handling %s", exc_type.__name__)

        if isinstance(exc, SQLAlchemyError):
            logger.error("Storage operation failed: %s", exc.__class__.__name__)
            raise PersistenceError("Storage operation failed", errors=[str(exc)]) from exc
        return False

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
