"""
Cleanup Expired Sessions Use Case

Maintenance job: time-driven revocation of expired sessions, followed by the
retention purge of sessions that stopped being usable long ago.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from config import ApplicationConfig
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import SessionCleanupResponse

logger = logging.getLogger(__name__)


class CleanupExpiredSessionsUseCase:
    """
    Business Rules:
    - Only sessions with expires_at <= now and not yet revoked are revoked
    - All sessions revoked by one run share the same revoked_at
    - Purge deletes revoked or expired sessions whose expiry lies more than
      retention_days in the past; retention_days <= 0 disables the purge
    """

    def __init__(
        self,
        uow: UnitOfWork,
        retention_days: int = ApplicationConfig.SESSION_RETENTION_DAYS,
    ):
        self.uow = uow
        self.retention_days = retention_days

    async def execute(self, now: Optional[datetime] = None) -> int:
        """Revoke expired sessions. Returns the number revoked."""
        async with self.uow:
            count = await self.uow.sessions.cleanup_expired(now or utcnow())
            await self.uow.commit()

        logger.info("Revoked %d expired session(s)", count)
        return count

    async def purge(self, now: Optional[datetime] = None) -> int:
        """Delete sessions past retention. Returns the number deleted."""
        if self.retention_days <= 0:
            return 0

        cutoff = (now or utcnow()) - timedelta(days=self.retention_days)
        async with self.uow:
            count = await self.uow.sessions.purge_inactive_before(cutoff)
            await self.uow.commit()

        logger.info("Purged %d session(s) inactive before %s", count, cutoff.isoformat())
        return count

    async def run(self, now: Optional[datetime] = None) -> SessionCleanupResponse:
        now = now or utcnow()
        return SessionCleanupResponse(
            expired_revoked=await self.execute(now),
            purged=await self.purge(now),
        )
