"""
Activity Log Service

Best-effort writer for the append-only activity log.
"""

import logging
from typing import Optional

from src.app.services.unit_of_work import UnitOfWork
from src.domain.device import DeviceMeta
from src.domain.entities import ActivityAction, ActivityLogEntry, UNKNOWN_ACCOUNT_ID

logger = logging.getLogger(__name__)

MAX_DETAILS_LENGTH = 500


class ActivityLogService:
    """
    Records account activity.

    Business Rules:
    - Must be called inside an entered unit of work, after the primary
      operation has committed (or when there is nothing to commit)
    - Writes its own entry in a separate commit
    - A failed write is logged and rolled back, never raised: auditing must
      not fail or undo the operation it describes
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def record(
        self,
        account_id: Optional[str],
        action: ActivityAction,
        success: bool = True,
        details: Optional[str] = None,
        device: Optional[DeviceMeta] = None,
        entity_type: Optional[str] = None,
        entity_id: Optional[str] = None,
    ) -> Optional[ActivityLogEntry]:
        device = device or DeviceMeta()
        entry = ActivityLogEntry(
            account_id=account_id or UNKNOWN_ACCOUNT_ID,
            action=action,
            success=success,
            details=details[:MAX_DETAILS_LENGTH] if details else None,
            entity_type=entity_type,
            entity_id=entity_id,
            ip_address=device.ip_address,
            user_agent=device.user_agent,
            device_type=device.device_type,
        )

        try:
            entry = await self.uow.activity_logs.create(entry)
            await self.uow.commit()
        except Exception:
            logger.exception(
                "Failed to record activity %s for account %s", action.value, entry.account_id
            )
            await self._safe_rollback()
            return None

        return entry

    async def _safe_rollback(self) -> None:
        try:
            await self.uow.rollback()
        except Exception:
            logger.exception("Rollback after failed activity write also failed")
