"""
Account Entity

Represents a person who can authenticate against the service.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import generate_uuid, utcnow


class Account(SQLModel, table=True):
    """
    Account entity - a single flat identity record.

    Business Rules:
    - Email is unique and stored lower-cased
    - Password stored as bcrypt hash, owned by the CredentialStore
    - Deactivating an account always revokes its sessions
    - Deleting an account deletes its sessions and activity log entries
    """

    __tablename__ = "accounts"

    id: str = Field(default_factory=generate_uuid, primary_key=True, max_length=36)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: Optional[str] = Field(default=None, max_length=60)  # Bcrypt output

    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    avatar: Optional[str] = Field(default=None, max_length=255)
    department: Optional[str] = Field(default=None, max_length=100)

    is_active: bool = Field(default=True)
    two_factor_enabled: bool = Field(default=False)

    # External (OAuth) provider linkage
    external_provider: Optional[str] = Field(default=None, max_length=50)
    external_id: Optional[str] = Field(default=None, max_length=100)
    is_external_account: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    email_confirmed_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_account_is_active", "is_active"),)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def has_password(self) -> bool:
        return not self.is_external_account or bool(self.password_hash)
