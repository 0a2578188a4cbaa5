"""Admin use case DTOs"""

from pydantic import BaseModel


class AccountStatusResponse(BaseModel):
    account_id: str
    is_active: bool
    sessions_revoked: int


class DeleteAccountResponse(BaseModel):
    account_id: str
    deleted: bool


class CleanupResponse(BaseModel):
    deleted: int
