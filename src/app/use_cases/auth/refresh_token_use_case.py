"""
Refresh Token Use Case

Rotates a refresh token: revokes the presented session and opens a new one.
"""

import logging
from typing import Optional

from src.app.errors import INVALID_SESSION_MESSAGE, AuthenticationError
from src.app.services.activity_log_service import ActivityLogService
from src.app.services.token_issuer import TokenIssuer, token_fingerprint
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.device import DeviceMeta
from src.domain.entities import UNKNOWN_ACCOUNT_ID, ActivityAction
from .dtos import AuthResponse
from .token_pair import open_session

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for refresh-token rotation.

    Business Rules:
    - Session must exist, not be revoked and not be expired
    - Owning account must exist and be active
    - Old session is revoked with a conditional update; when two requests
      present the same token only the one whose update lands succeeds
    - Revoke-old and create-new commit together or not at all
    - Failures share one generic message
    """

    def __init__(self, uow: UnitOfWork, token_issuer: TokenIssuer):
        self.uow = uow
        self.token_issuer = token_issuer
        self.activity = ActivityLogService(uow)

    async def execute(
        self, refresh_token: str, device: Optional[DeviceMeta] = None
    ) -> AuthResponse:
        """
        Execute token rotation.

        Raises:
            AuthenticationError: token unusable or lost a concurrent rotation (INVALID_SESSION)
        """
        async with self.uow:
            now = utcnow()
            session = await self.uow.sessions.find_by_refresh_token(refresh_token)

            if session is None:
                await self._reject(UNKNOWN_ACCOUNT_ID, "Unknown refresh token", refresh_token, device)
            if session.revoked:
                await self._reject(session.account_id, "Session revoked", refresh_token, device)
            if session.is_expired(now):
                await self._reject(session.account_id, "Session expired", refresh_token, device)

            account = await self.uow.accounts.get_by_id(session.account_id)
            if account is None or not account.is_active:
                await self._reject(
                    session.account_id, "Account missing or deactivated", refresh_token, device
                )

            account_id = session.account_id
            if not await self.uow.sessions.revoke(session, now):
                # rollback expires loaded rows
                await self.uow.rollback()
                await self._reject(
                    account_id,
                    "Session already rotated by a concurrent request",
                    refresh_token,
                    device,
                )

            device = device or DeviceMeta(
                ip_address=session.ip_address, user_agent=session.user_agent
            )
            issued = await open_session(self.uow, self.token_issuer, account, device, now)
            await self.uow.commit()

            logger.info(
                "Rotated session %s -> %s for account %s",
                session.id,
                issued.session.id,
                account.id,
            )
            await self.activity.record(
                account.id,
                ActivityAction.token_refresh,
                details=f"Session {session.id} rotated",
                device=device,
                entity_type="Session",
                entity_id=str(issued.session.id),
            )

            return issued.to_response(account)

    async def _reject(
        self,
        account_id: str,
        reason: str,
        refresh_token: str,
        device: Optional[DeviceMeta],
    ) -> None:
        logger.info(
            "Refresh rejected for token %s: %s", token_fingerprint(refresh_token), reason
        )
        await self.activity.record(
            account_id,
            ActivityAction.token_refresh,
            success=False,
            details=reason,
            device=device,
        )
        raise AuthenticationError(INVALID_SESSION_MESSAGE, code="INVALID_SESSION")
