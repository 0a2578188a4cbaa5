import base64
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.activity_log_repository import IActivityLogRepository
from src.domain.entities import ActivityLogEntry


class ActivityLogRepository(IActivityLogRepository):
    """ActivityLogEntry repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entry: ActivityLogEntry) -> ActivityLogEntry:
        """Append a new activity log entry (immutable)"""
        self.session.add(entry)
        await self.session.flush()
        await self.session.refresh(entry)
        return entry

    async def get_by_account_paginated(
        self, account_id: str, limit: int = 50, cursor: Optional[str] = None
    ) -> Tuple[List[ActivityLogEntry], Optional[str]]:
        """
        Get activity log entries for an account with cursor-based pagination.

        Cursor format: base64-encoded "<ISO timestamp>|<id>" of the last entry,
        so entries sharing a timestamp are not skipped between pages.
        """
        stmt = select(ActivityLogEntry).where(ActivityLogEntry.account_id == account_id)

        if cursor:
            try:
                decoded = base64.b64decode(cursor).decode("utf-8")
                timestamp_str, _, id_str = decoded.partition("|")
                cursor_timestamp = datetime.fromisoformat(timestamp_str)
                cursor_id = int(id_str)
                stmt = stmt.where(
                    (ActivityLogEntry.timestamp < cursor_timestamp)
                    | (
                        (ActivityLogEntry.timestamp == cursor_timestamp)
                        & (ActivityLogEntry.id < cursor_id)
                    )
                )
            except (ValueError, TypeError):
                # Invalid cursor, ignore and return from beginning
                pass

        stmt = stmt.order_by(
            ActivityLogEntry.timestamp.desc(), ActivityLogEntry.id.desc()
        ).limit(limit + 1)

        result = await self.session.exec(stmt)
        entries = list(result.all())

        has_more = len(entries) > limit
        if has_more:
            entries = entries[:limit]

        next_cursor = None
        if has_more and entries:
            last_entry = entries[-1]
            raw_cursor = f"{last_entry.timestamp.isoformat()}|{last_entry.id}"
            next_cursor = base64.b64encode(raw_cursor.encode("utf-8")).decode("utf-8")

        return entries, next_cursor

    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete entries older than cutoff (retention)"""
        stmt = (
            delete(ActivityLogEntry)
            .where(ActivityLogEntry.timestamp < cutoff)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
