"""
ActivityLogEntry Entity

Append-only audit trail of account activity.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow
from .enums import ActivityAction, DeviceType

# Recorded when authentication fails before an account could be resolved
UNKNOWN_ACCOUNT_ID = "unknown"


class ActivityLogEntry(SQLModel, table=True):
    """
    ActivityLogEntry entity - immutable record of an account action.

    Business Rules:
    - Immutable (never updated)
    - Deleted only by the age-based retention cleanup or with the account
    - account_id is "unknown" for failures before identity resolution,
      so it carries no foreign key
    """

    __tablename__ = "activity_logs"

    id: Optional[int] = Field(default=None, primary_key=True)

    account_id: str = Field(max_length=36, index=True)
    action: ActivityAction
    success: bool = Field(default=True)

    details: Optional[str] = Field(default=None, max_length=500)
    entity_type: Optional[str] = Field(default=None, max_length=100)
    entity_id: Optional[str] = Field(default=None, max_length=50)

    # Device metadata
    ip_address: Optional[str] = Field(default=None, max_length=45)
    user_agent: Optional[str] = Field(default=None, max_length=500)
    device_type: DeviceType = Field(default=DeviceType.unknown)

    timestamp: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_activity_timestamp", "timestamp"),
        Index("idx_activity_account_action", "account_id", "action"),
    )
