"""
Admin API Routes - Account Administration Endpoints

These endpoints are for operators and internal tooling.
Authentication is via Admin API Key, not account access tokens.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from src.api.routes.auth import UpdateProfileRequest
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    AccountStatusResponse,
    ActivateAccountUseCase,
    CleanupActivityLogsUseCase,
    CleanupResponse,
    DeactivateAccountUseCase,
    DeleteAccountResponse,
    DeleteAccountUseCase,
    SetPasswordUseCase,
)
from src.app.use_cases.audit import ActivityLogPage, GetActivityLogsUseCase
from src.app.use_cases.auth import AccountProfile, GetProfileUseCase, UpdateProfileUseCase
from src.app.use_cases.sessions import (
    CleanupExpiredSessionsUseCase,
    ListSessionsUseCase,
    RevokeSessionsResponse,
    RevokeSessionsUseCase,
    SessionCleanupResponse,
    SessionListResponse,
)
from src.depends import get_unit_of_work

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(verify_admin_api_key)],
)


@router.get(
    "/accounts/{account_id}",
    status_code=status.HTTP_200_OK,
    response_model=AccountProfile,
)
async def get_account(account_id: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Get Account Profile

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: ACCOUNT_NOT_FOUND
    """
    return await GetProfileUseCase(uow).execute(account_id)


@router.put(
    "/accounts/{account_id}",
    status_code=status.HTTP_200_OK,
    response_model=AccountProfile,
)
async def update_account(
    account_id: str,
    request: UpdateProfileRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Account Profile

    Raises:
        - 400 Bad Request: First or last name set to an empty value
        - 404 Not Found: ACCOUNT_NOT_FOUND
    """
    return await UpdateProfileUseCase(uow).execute(
        account_id, request.to_command(), by_admin=True
    )


@router.post(
    "/accounts/{account_id}/deactivate",
    status_code=status.HTTP_200_OK,
    response_model=AccountStatusResponse,
)
async def deactivate_account(account_id: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Deactivate Account

    Blocks login and refresh for the account and revokes every session it holds.

    Raises:
        - 404 Not Found: ACCOUNT_NOT_FOUND
    """
    return await DeactivateAccountUseCase(uow).execute(account_id)


@router.post(
    "/accounts/{account_id}/activate",
    status_code=status.HTTP_200_OK,
    response_model=AccountStatusResponse,
)
async def activate_account(account_id: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    return await ActivateAccountUseCase(uow).execute(account_id)


class SetPasswordRequest(BaseModel):
    new_password: str = Field(..., min_length=1)


@router.post(
    "/accounts/{account_id}/password",
    status_code=status.HTTP_200_OK,
    response_model=AccountStatusResponse,
)
async def set_password(
    account_id: str,
    request: SetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Set Password

    Administrator password reset; revokes every session of the account.

    Raises:
        - 400 Bad Request: Password rejected by policy
        - 404 Not Found: ACCOUNT_NOT_FOUND
    """
    return await SetPasswordUseCase(uow).execute(account_id, request.new_password)


@router.delete(
    "/accounts/{account_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteAccountResponse,
)
async def delete_account(account_id: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    """Delete an account together with its sessions and activity log"""
    return await DeleteAccountUseCase(uow).execute(account_id)


@router.get(
    "/accounts/{account_id}/sessions",
    status_code=status.HTTP_200_OK,
    response_model=SessionListResponse,
)
async def list_account_sessions(
    account_id: str,
    active_only: bool = Query(False),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    return await ListSessionsUseCase(uow).execute(account_id, active_only=active_only)


@router.post(
    "/accounts/{account_id}/sessions/revoke-all",
    status_code=status.HTTP_200_OK,
    response_model=RevokeSessionsResponse,
)
async def revoke_account_sessions(account_id: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    return await RevokeSessionsUseCase(uow).revoke_all_sessions(account_id)


@router.delete(
    "/sessions/{session_id}",
    status_code=status.HTTP_200_OK,
    response_model=RevokeSessionsResponse,
)
async def revoke_session(session_id: int, uow: UnitOfWork = Depends(get_unit_of_work)):
    """Revoke any session by id. Idempotent."""
    return await RevokeSessionsUseCase(uow).revoke_session(session_id)


@router.get(
    "/accounts/{account_id}/activity",
    status_code=status.HTTP_200_OK,
    response_model=ActivityLogPage,
)
async def get_account_activity(
    account_id: str,
    limit: int = Query(50, ge=1, le=100),
    cursor: Optional[str] = Query(None),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    return await GetActivityLogsUseCase(uow).execute(account_id, limit=limit, cursor=cursor)


@router.post(
    "/maintenance/sessions/cleanup",
    status_code=status.HTTP_200_OK,
    response_model=SessionCleanupResponse,
)
async def cleanup_sessions(uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Session Maintenance

    Revokes expired sessions, then purges sessions past the retention window.
    """
    return await CleanupExpiredSessionsUseCase(uow).run()


@router.post(
    "/maintenance/activity-logs/cleanup",
    status_code=status.HTTP_200_OK,
    response_model=CleanupResponse,
)
async def cleanup_activity_logs(
    older_than_days: Optional[int] = Query(None, ge=1),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Delete activity log entries older than older_than_days (default: configured retention)"""
    return await CleanupActivityLogsUseCase(uow).execute(older_than_days)
