"""
Get Activity Logs Use Case

Retrieves the activity log of one account with pagination.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.app.errors import NotFoundError
from src.app.services.activity_log_service import ActivityLogService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ActivityAction, ActivityLogEntry, DeviceType

MAX_PAGE_SIZE = 100


class ActivityLogInfo(BaseModel):
    id: int
    action: ActivityAction
    success: bool
    timestamp: datetime
    details: Optional[str] = None
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    ip_address: Optional[str] = None
    device_type: DeviceType

    @classmethod
    def from_entry(cls, entry: ActivityLogEntry) -> "ActivityLogInfo":
        return cls(
            id=entry.id,
            action=entry.action,
            success=entry.success,
            timestamp=entry.timestamp,
            details=entry.details,
            entity_type=entry.entity_type,
            entity_id=entry.entity_id,
            ip_address=entry.ip_address,
            device_type=entry.device_type,
        )


class ActivityLogPage(BaseModel):
    entries: List[ActivityLogInfo]
    next_cursor: Optional[str] = None


class GetActivityLogsUseCase:
    """
    Use case for retrieving an account's activity log.

    Business Rules:
    - Results are scoped to one account
    - Results ordered by newest first
    - Supports cursor-based pagination; page size capped at 100
    - Viewing is itself recorded when record_view is set
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.activity = ActivityLogService(uow)

    async def execute(
        self,
        account_id: str,
        limit: int = 50,
        cursor: Optional[str] = None,
        record_view: bool = False,
    ) -> ActivityLogPage:
        """
        Args:
            account_id: Account whose log is read
            limit: Maximum number of entries to return
            cursor: Pagination cursor (optional)
            record_view: Append a view_logs entry after reading

        Raises:
            NotFoundError: account does not exist
        """
        limit = max(1, min(limit, MAX_PAGE_SIZE))
        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                raise NotFoundError("Account not found", code="ACCOUNT_NOT_FOUND")

            entries, next_cursor = await self.uow.activity_logs.get_by_account_paginated(
                account_id, limit=limit, cursor=cursor
            )
            page = ActivityLogPage(
                entries=[ActivityLogInfo.from_entry(e) for e in entries],
                next_cursor=next_cursor,
            )

            if record_view:
                await self.activity.record(
                    account_id, ActivityAction.view_logs, details="Activity log viewed"
                )

            return page
