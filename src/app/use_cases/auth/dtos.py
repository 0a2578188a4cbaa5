"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Account


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """Validated registration intent"""

    first_name: str
    last_name: str
    email: str
    password: str


class UpdateProfileCommand(BaseModel):
    """Profile fields to change; fields left unset keep their current value"""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    department: Optional[str] = None
    avatar: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class AccountProfile(BaseModel):
    """Account profile returned with authentication responses"""

    id: str
    email: str
    first_name: str
    last_name: str
    full_name: str
    department: Optional[str] = None
    avatar: Optional[str] = None
    is_active: bool
    two_factor_enabled: bool
    created_at: datetime
    last_login_at: Optional[datetime] = None

    @classmethod
    def from_account(cls, account: Account) -> "AccountProfile":
        return cls(
            id=account.id,
            email=account.email,
            first_name=account.first_name,
            last_name=account.last_name,
            full_name=account.full_name,
            department=account.department,
            avatar=account.avatar,
            is_active=account.is_active,
            two_factor_enabled=account.two_factor_enabled,
            created_at=account.created_at,
            last_login_at=account.last_login_at,
        )


class AuthResponse(BaseModel):
    """Response for register, login and refresh use cases"""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_at: datetime  # Access token expiry
    session_id: int
    account: AccountProfile
