from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, func
from sqlalchemy.orm.attributes import set_committed_value
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import ISessionRepository
from src.app.services.token_issuer import hash_refresh_token
from src.domain.base import utcnow
from src.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def get_by_id(self, session_id: int) -> Optional[Session]:
        """Get session by ID"""
        stmt = select(Session).where(Session.id == session_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def find_by_refresh_token(self, refresh_token: str) -> Optional[Session]:
        """
        Find session by refresh token digest.

        We don't filter by revoked/expired here - that's checked in the use case
        with a single combined condition.
        """
        stmt = (
            select(Session)
            .where(Session.refresh_token_hash == hash_refresh_token(refresh_token))
            .order_by(Session.revoked, Session.created_at.desc())
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def find_active_by_refresh_token(self, refresh_token: str) -> Optional[Session]:
        """Find non-revoked session by refresh token digest (expiry not checked)"""
        stmt = select(Session).where(
            Session.refresh_token_hash == hash_refresh_token(refresh_token),
            Session.revoked == False,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_by_account(
        self, account_id: str, active_only: bool = False, now: Optional[datetime] = None
    ) -> List[Session]:
        """Get sessions for an account, newest first"""
        stmt = select(Session).where(Session.account_id == account_id)
        if active_only:
            stmt = stmt.where(
                Session.revoked == False,
                Session.expires_at > (now or utcnow()),
            )
        stmt = stmt.order_by(Session.created_at.desc(), Session.id.desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_active_oldest_first(
        self, account_id: str, now: Optional[datetime] = None
    ) -> List[Session]:
        """Get active sessions for an account, oldest first"""
        stmt = (
            select(Session)
            .where(
                Session.account_id == account_id,
                Session.revoked == False,
                Session.expires_at > (now or utcnow()),
            )
            .order_by(Session.created_at, Session.id)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def revoke(self, session_obj: Session, now: Optional[datetime] = None) -> bool:
        """
        Conditionally revoke a session.

        The WHERE clause on revoked makes this the arbiter when two requests
        race for the same refresh token: only one UPDATE affects the row.
        """
        revoked_at = now or utcnow()
        stmt = (
            update(Session)
            .where(Session.id == session_obj.id, Session.revoked == False)
            .values(revoked=True, revoked_at=revoked_at)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return False

        set_committed_value(session_obj, "revoked", True)
        if session_obj.revoked_at is None:
            set_committed_value(session_obj, "revoked_at", revoked_at)
        return True

    async def revoke_all_for_account(
        self, account_id: str, now: Optional[datetime] = None
    ) -> int:
        """Revoke all non-revoked sessions for an account"""
        stmt = (
            update(Session)
            .where(Session.account_id == account_id, Session.revoked == False)
            .values(revoked=True, revoked_at=now or utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def revoke_all_except(
        self, account_id: str, keep_refresh_token: str, now: Optional[datetime] = None
    ) -> int:
        """Revoke all non-revoked sessions for an account except the kept one"""
        stmt = (
            update(Session)
            .where(
                Session.account_id == account_id,
                Session.revoked == False,
                Session.refresh_token_hash != hash_refresh_token(keep_refresh_token),
            )
            .values(revoked=True, revoked_at=now or utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def count_active(self, account_id: str, now: Optional[datetime] = None) -> int:
        """Count non-revoked, unexpired sessions for an account"""
        stmt = select(func.count()).select_from(Session).where(
            Session.account_id == account_id,
            Session.revoked == False,
            Session.expires_at > (now or utcnow()),
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def is_limit_reached(
        self, account_id: str, max_sessions: int, now: Optional[datetime] = None
    ) -> bool:
        """True when the account holds max_sessions or more active sessions"""
        return await self.count_active(account_id, now) >= max_sessions

    async def list_expired_unrevoked(self, now: Optional[datetime] = None) -> List[Session]:
        """Get expired sessions that were never revoked"""
        stmt = select(Session).where(
            Session.expires_at <= (now or utcnow()),
            Session.revoked == False,
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def cleanup_expired(self, now: Optional[datetime] = None) -> int:
        """Revoke expired sessions in bulk, all sharing one revoked_at"""
        now = now or utcnow()
        stmt = (
            update(Session)
            .where(Session.expires_at <= now, Session.revoked == False)
            .values(revoked=True, revoked_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def purge_inactive_before(self, cutoff: datetime) -> int:
        """
        Physically delete sessions whose expiry lies before cutoff.

        cutoff is never in the future, so every matched row is already expired.
        """
        stmt = (
            delete(Session)
            .where(Session.expires_at < cutoff)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
