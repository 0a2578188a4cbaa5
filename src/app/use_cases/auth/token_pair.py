"""
Token pair issuance shared by register, login and refresh.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from config import ApplicationConfig
from src.app.errors import SessionLimitError
from src.app.services.token_issuer import TokenIssuer, hash_refresh_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.device import DeviceMeta
from src.domain.entities import Account, Session, SessionLimitPolicy
from .dtos import AccountProfile, AuthResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionLimit:
    """Per-account cap on active sessions; max_sessions=0 disables it"""

    max_sessions: int = 0
    policy: SessionLimitPolicy = SessionLimitPolicy.evict_oldest

    @classmethod
    def from_config(cls, config=ApplicationConfig) -> "SessionLimit":
        return cls(
            max_sessions=config.MAX_ACTIVE_SESSIONS,
            policy=SessionLimitPolicy(config.SESSION_LIMIT_POLICY),
        )


@dataclass
class IssuedTokens:
    access_token: str
    access_token_expires_at: datetime
    refresh_token: str
    session: Session

    def to_response(self, account: Account) -> AuthResponse:
        return AuthResponse(
            access_token=self.access_token,
            refresh_token=self.refresh_token,
            expires_at=self.access_token_expires_at,
            session_id=self.session.id,
            account=AccountProfile.from_account(account),
        )


async def enforce_session_limit(
    uow: UnitOfWork, account_id: str, limit: SessionLimit, now: datetime
) -> int:
    """
    Make room for one more session under the account's cap.

    Returns:
        Number of sessions evicted (always 0 under the reject policy)

    Raises:
        SessionLimitError: cap reached and policy is reject
    """
    if limit.max_sessions <= 0:
        return 0
    if not await uow.sessions.is_limit_reached(account_id, limit.max_sessions, now):
        return 0

    if limit.policy == SessionLimitPolicy.reject:
        raise SessionLimitError(
            f"Maximum of {limit.max_sessions} active sessions reached"
        )

    active = await uow.sessions.list_active_oldest_first(account_id, now)
    excess = len(active) - limit.max_sessions + 1
    evicted = 0
    for session in active[:max(excess, 0)]:
        if await uow.sessions.revoke(session, now):
            evicted += 1
    logger.info("Evicted %d oldest session(s) for account %s", evicted, account_id)
    return evicted


async def open_session(
    uow: UnitOfWork,
    token_issuer: TokenIssuer,
    account: Account,
    device: Optional[DeviceMeta],
    now: datetime,
) -> IssuedTokens:
    """
    Mint an access/refresh pair and persist the session row (flushed, not committed).

    The caller commits before handing the tokens out.
    """
    device = device or DeviceMeta()
    refresh_token = token_issuer.generate_refresh_token()
    session = Session(
        account_id=account.id,
        refresh_token_hash=hash_refresh_token(refresh_token),
        created_at=now,
        expires_at=token_issuer.refresh_token_expiry(now),
        device_info=device.device_info,
        ip_address=device.ip_address,
        user_agent=device.user_agent,
    )
    session = await uow.sessions.create(session)

    access_token, access_expires_at = token_issuer.create_access_token(account)
    return IssuedTokens(
        access_token=access_token,
        access_token_expires_at=access_expires_at,
        refresh_token=refresh_token,
        session=session,
    )
