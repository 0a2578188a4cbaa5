"""
Use Case: Cleanup Activity Logs

Age-based retention of the activity log.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from config import ApplicationConfig
from src.app.errors import ValidationError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import CleanupResponse

logger = logging.getLogger(__name__)


class CleanupActivityLogsUseCase:
    def __init__(
        self,
        uow: UnitOfWork,
        retention_days: int = ApplicationConfig.ACTIVITY_LOG_RETENTION_DAYS,
    ):
        self.uow = uow
        self.retention_days = retention_days

    async def execute(
        self, older_than_days: Optional[int] = None, now: Optional[datetime] = None
    ) -> CleanupResponse:
        """Delete entries older than older_than_days (defaults to the configured retention)"""
        days = self.retention_days if older_than_days is None else older_than_days
        if days < 1:
            raise ValidationError("Retention must be at least one day")

        cutoff = (now or utcnow()) - timedelta(days=days)
        async with self.uow:
            deleted = await self.uow.activity_logs.delete_older_than(cutoff)
            await self.uow.commit()

        logger.info("Deleted %d activity log entries older than %s", deleted, cutoff.isoformat())
        return CleanupResponse(deleted=deleted)
