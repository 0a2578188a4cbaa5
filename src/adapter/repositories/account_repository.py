from typing import Optional

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.errors import ConflictError
from src.app.repositories.account_repository import IAccountRepository
from src.domain.entities import Account, ActivityLogEntry, Session


class AccountRepository(IAccountRepository):
    """Account repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by normalized email address"""
        stmt = select(Account).where(Account.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, account_id: str) -> Optional[Account]:
        """Get account by ID"""
        stmt = select(Account).where(Account.id == account_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, account: Account) -> Account:
        """
        Create a new account.

        The unique index on email settles concurrent registrations: the
        losing insert surfaces as ConflictError, not as a storage failure.
        """
        self.session.add(account)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            if "email" not in str(exc.orig).lower():
                raise
            raise ConflictError(
                "An account with this email already exists",
                code="EMAIL_ALREADY_EXISTS",
            ) from exc
        await self.session.refresh(account)
        return account

    async def update(self, account: Account) -> Account:
        """Update existing account"""
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account

    async def delete(self, account: Account) -> None:
        """
        Delete an account and everything it owns.

        Children are removed explicitly: SQLite only honours ON DELETE CASCADE
        when foreign keys are switched on, and activity log entries carry no
        foreign key at all.
        """
        await self.session.execute(
            delete(Session)
            .where(Session.account_id == account.id)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.execute(
            delete(ActivityLogEntry)
            .where(ActivityLogEntry.account_id == account.id)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.delete(account)
        await self.session.flush()
