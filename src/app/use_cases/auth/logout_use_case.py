"""
Logout Use Case
"""

import logging
from typing import Optional

from src.app.services.activity_log_service import ActivityLogService
from src.app.services.token_issuer import token_fingerprint
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.device import DeviceMeta
from src.domain.entities import ActivityAction

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for ending a session.

    Business Rules:
    - Only a session owned by the calling account is revoked
    - Unknown, foreign or already-revoked tokens are not an error
    - Always audited, always succeeds
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.activity = ActivityLogService(uow)

    async def execute(
        self,
        account_id: str,
        refresh_token: Optional[str] = None,
        device: Optional[DeviceMeta] = None,
    ) -> bool:
        async with self.uow:
            revoked_session_id = None
            if refresh_token:
                session = await self.uow.sessions.find_active_by_refresh_token(refresh_token)
                if session is not None and session.account_id == account_id:
                    if await self.uow.sessions.revoke(session, utcnow()):
                        revoked_session_id = session.id
                    await self.uow.commit()
                elif session is not None:
                    logger.warning(
                        "Account %s attempted logout with token %s of another account",
                        account_id,
                        token_fingerprint(refresh_token),
                    )

            await self.activity.record(
                account_id,
                ActivityAction.logout,
                details=(
                    f"Session {revoked_session_id} revoked"
                    if revoked_session_id is not None
                    else "Logout without an active session"
                ),
                device=device,
                entity_type="Session" if revoked_session_id is not None else None,
                entity_id=str(revoked_session_id) if revoked_session_id is not None else None,
            )

        return True
