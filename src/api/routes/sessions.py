from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from src.app.services.token_issuer import AccessTokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.sessions import (
    ListSessionsUseCase,
    RevokeSessionsResponse,
    RevokeSessionsUseCase,
    SessionListResponse,
)
from src.depends import get_current_account, get_device_meta, get_unit_of_work
from src.domain.device import DeviceMeta

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.get("", status_code=status.HTTP_200_OK, response_model=SessionListResponse)
async def list_sessions(
    active_only: bool = Query(False, description="Only sessions that are neither revoked nor expired"),
    current: AccessTokenClaims = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List the caller's sessions, newest first"""
    return await ListSessionsUseCase(uow).execute(current.account_id, active_only=active_only)


@router.delete(
    "/{session_id}", status_code=status.HTTP_200_OK, response_model=RevokeSessionsResponse
)
async def revoke_session(
    session_id: int,
    current: AccessTokenClaims = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
    device: DeviceMeta = Depends(get_device_meta),
):
    """
    Revoke one of the caller's sessions.

    Raises:
        - 404 Not Found: Session does not exist or belongs to another account
    """
    return await RevokeSessionsUseCase(uow).revoke_session(
        session_id, owner_id=current.account_id, device=device
    )


@router.post("/revoke-all", status_code=status.HTTP_200_OK, response_model=RevokeSessionsResponse)
async def revoke_all_sessions(
    current: AccessTokenClaims = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
    device: DeviceMeta = Depends(get_device_meta),
):
    """Revoke every session of the caller, including the current one"""
    return await RevokeSessionsUseCase(uow).revoke_all_sessions(current.account_id, device)


class RevokeOtherSessionsRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1, description="Refresh token of the session to keep")


@router.post(
    "/revoke-others", status_code=status.HTTP_200_OK, response_model=RevokeSessionsResponse
)
async def revoke_other_sessions(
    request: RevokeOtherSessionsRequest,
    current: AccessTokenClaims = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
    device: DeviceMeta = Depends(get_device_meta),
):
    """
    Revoke every session of the caller except the one bound to refresh_token.

    Raises:
        - 401 Unauthorized: refresh_token is not an active session of the caller
    """
    return await RevokeSessionsUseCase(uow).revoke_other_sessions(
        current.account_id, request.refresh_token, device
    )
