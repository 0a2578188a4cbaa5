"""
Session Entity

Stores refresh-token sessions for authentication.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class Session(SQLModel, table=True):
    """
    Session entity - binds a refresh token to an account.

    Business Rules:
    - Refresh tokens are stored as SHA-256 digests, never in plain text
    - Tokens rotate on each refresh: the old session is revoked, a new one created
    - Revocation is one-way; revoked_at is set once, on the first revocation
    - A session whose expires_at equals "now" is already expired
    - No two non-revoked sessions share a refresh token
    """

    __tablename__ = "sessions"

    id: Optional[int] = Field(default=None, primary_key=True)

    account_id: str = Field(
        foreign_key="accounts.id", ondelete="CASCADE", nullable=False, index=True
    )

    refresh_token_hash: str = Field(max_length=500)  # SHA-256 hex digest
    revoked: bool = Field(default=False)
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Device metadata
    device_info: Optional[str] = Field(default=None, max_length=500)
    ip_address: Optional[str] = Field(default=None, max_length=45)
    user_agent: Optional[str] = Field(default=None, max_length=500)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_account_revoked", "account_id", "revoked"),
        Index(
            "uq_session_active_refresh_token",
            "refresh_token_hash",
            unique=True,
            sqlite_where=text("revoked = 0"),
            postgresql_where=text("revoked = false"),
        ),
    )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or utcnow()) >= self.expires_at

    def is_active(self, now: Optional[datetime] = None) -> bool:
        return not self.revoked and not self.is_expired(now)

    @property
    def expired(self) -> bool:
        return self.is_expired()

    @property
    def active(self) -> bool:
        return self.is_active()
