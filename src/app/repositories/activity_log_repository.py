from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from src.domain.entities import ActivityLogEntry


class IActivityLogRepository(ABC):
    """ActivityLogEntry repository interface - application layer"""

    @abstractmethod
    async def create(self, entry: ActivityLogEntry) -> ActivityLogEntry:
        """Append a new activity log entry (immutable)"""
        pass

    @abstractmethod
    async def get_by_account_paginated(
        self, account_id: str, limit: int = 50, cursor: Optional[str] = None
    ) -> Tuple[List[ActivityLogEntry], Optional[str]]:
        """
        Get activity log entries for an account with cursor-based pagination.

        Returns:
            Tuple of (entries list, next_cursor)
            - entries: List of entries ordered by timestamp DESC
            - next_cursor: Cursor for next page, None if no more entries
        """
        pass

    @abstractmethod
    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete entries with timestamp before cutoff. Returns count deleted."""
        pass
