"""
Revoke Sessions Use Case

Handles explicit session revocation for security and session management.
"""

import logging
from typing import Optional

from src.app.errors import (
    INVALID_SESSION_MESSAGE,
    AuthenticationError,
    NotFoundError,
)
from src.app.services.activity_log_service import ActivityLogService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.device import DeviceMeta
from src.domain.entities import ActivityAction
from .dtos import RevokeSessionsResponse

logger = logging.getLogger(__name__)


class RevokeSessionsUseCase:
    """
    Use case for revoking sessions.

    Business Rules:
    - Account holders may only revoke their own sessions; administrators
      pass owner_id=None to act on any session
    - Revocation is idempotent: revoking a revoked session succeeds and keeps
      its original revoked_at
    - Three revocation modes: one, all, all-except-current
    - Every revocation is audit-logged
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.activity = ActivityLogService(uow)

    async def revoke_session(
        self,
        session_id: int,
        owner_id: Optional[str] = None,
        device: Optional[DeviceMeta] = None,
    ) -> RevokeSessionsResponse:
        """
        Revoke a single session by id.

        Args:
            session_id: Session to revoke
            owner_id: Required owner of the session; None skips the ownership check

        Raises:
            NotFoundError: no such session, or it belongs to another account
        """
        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            # Foreign sessions look exactly like missing ones
            if session is None or (owner_id is not None and session.account_id != owner_id):
                raise NotFoundError("Session not found", code="SESSION_NOT_FOUND")

            revoked = await self.uow.sessions.revoke(session, utcnow())
            await self.uow.commit()

            await self.activity.record(
                session.account_id,
                ActivityAction.revoke_session,
                details=(
                    f"Session {session_id} revoked"
                    if revoked
                    else f"Session {session_id} was already revoked"
                ),
                device=device,
                entity_type="Session",
                entity_id=str(session_id),
            )

            return RevokeSessionsResponse(revoked_count=1 if revoked else 0)

    async def revoke_all_sessions(
        self, account_id: str, device: Optional[DeviceMeta] = None
    ) -> RevokeSessionsResponse:
        """
        Revoke all sessions for an account.

        Raises:
            NotFoundError: account does not exist
        """
        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                raise NotFoundError("Account not found", code="ACCOUNT_NOT_FOUND")

            count = await self.uow.sessions.revoke_all_for_account(account_id, utcnow())
            await self.uow.commit()

            logger.info("Revoked %d session(s) for account %s", count, account_id)
            await self.activity.record(
                account_id,
                ActivityAction.revoke_all_sessions,
                details=f"{count} session(s) revoked",
                device=device,
                entity_type="Account",
                entity_id=account_id,
            )

            return RevokeSessionsResponse(revoked_count=count)

    async def revoke_other_sessions(
        self,
        account_id: str,
        current_refresh_token: str,
        device: Optional[DeviceMeta] = None,
    ) -> RevokeSessionsResponse:
        """
        Revoke all sessions for the account except the one bound to
        current_refresh_token (logout other devices).

        Raises:
            AuthenticationError: current token is not an active session of the account
        """
        async with self.uow:
            now = utcnow()
            current = await self.uow.sessions.find_active_by_refresh_token(current_refresh_token)
            if current is None or current.account_id != account_id or current.is_expired(now):
                raise AuthenticationError(INVALID_SESSION_MESSAGE, code="INVALID_SESSION")

            count = await self.uow.sessions.revoke_all_except(
                account_id, current_refresh_token, now
            )
            await self.uow.commit()

            await self.activity.record(
                account_id,
                ActivityAction.revoke_other_sessions,
                details=f"{count} session(s) revoked, session {current.id} kept",
                device=device,
                entity_type="Session",
                entity_id=str(current.id),
            )

            return RevokeSessionsResponse(revoked_count=count)
