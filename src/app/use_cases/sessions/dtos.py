"""
Session Use Case DTOs
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.domain.base import utcnow
from src.domain.entities import Session


class SessionInfo(BaseModel):
    """Session as exposed to account holders and administrators"""

    id: int
    account_id: str
    created_at: datetime
    expires_at: datetime
    revoked: bool
    revoked_at: Optional[datetime] = None
    device_info: Optional[str] = None
    ip_address: Optional[str] = None
    is_active: bool

    @classmethod
    def from_session(cls, session: Session, now: Optional[datetime] = None) -> "SessionInfo":
        return cls(
            id=session.id,
            account_id=session.account_id,
            created_at=session.created_at,
            expires_at=session.expires_at,
            revoked=session.revoked,
            revoked_at=session.revoked_at,
            device_info=session.device_info,
            ip_address=session.ip_address,
            is_active=session.is_active(now or utcnow()),
        )


class SessionListResponse(BaseModel):
    account_id: str
    sessions: List[SessionInfo]
    active_count: int


class RevokeSessionsResponse(BaseModel):
    revoked_count: int


class SessionCleanupResponse(BaseModel):
    expired_revoked: int
    purged: int
