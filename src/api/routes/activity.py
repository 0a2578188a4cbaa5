from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from src.app.services.token_issuer import AccessTokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit import ActivityLogPage, GetActivityLogsUseCase
from src.depends import get_current_account, get_unit_of_work

router = APIRouter(prefix="/activity", tags=["Activity"])


@router.get("", status_code=status.HTTP_200_OK, response_model=ActivityLogPage)
async def get_activity(
    limit: int = Query(50, ge=1, le=100, description="Max entries to return"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
    current: AccessTokenClaims = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get the caller's activity log, newest first.

    Pagination: pass next_cursor from a response as cursor to fetch the next page.
    """
    return await GetActivityLogsUseCase(uow).execute(
        current.account_id, limit=limit, cursor=cursor, record_view=True
    )
