from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from src.domain.entities import Session


class ISessionRepository(ABC):
    """
    Session repository interface - application layer

    Every method that takes ``now`` defaults it to the current UTC time.
    Refresh tokens are passed in plain form and hashed by the implementation.
    """

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def get_by_id(self, session_id: int) -> Optional[Session]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def find_by_refresh_token(self, refresh_token: str) -> Optional[Session]:
        """
        Find the session bound to a refresh token, whatever its state.

        Prefers the non-revoked session when historical revoked rows share the
        token. Revoked/expired checks are left to the caller.
        """
        pass

    @abstractmethod
    async def find_active_by_refresh_token(self, refresh_token: str) -> Optional[Session]:
        """Find a non-revoked session by refresh token. Expiry is NOT checked."""
        pass

    @abstractmethod
    async def list_by_account(
        self, account_id: str, active_only: bool = False, now: Optional[datetime] = None
    ) -> List[Session]:
        """Get sessions for an account, newest first"""
        pass

    @abstractmethod
    async def list_active_oldest_first(
        self, account_id: str, now: Optional[datetime] = None
    ) -> List[Session]:
        """Get active sessions for an account, oldest first"""
        pass

    @abstractmethod
    async def revoke(self, session: Session, now: Optional[datetime] = None) -> bool:
        """
        Revoke a session only if it is not already revoked.

        Returns True if this call performed the transition. An already-revoked
        session keeps its original revoked_at.
        """
        pass

    @abstractmethod
    async def revoke_all_for_account(
        self, account_id: str, now: Optional[datetime] = None
    ) -> int:
        """Revoke all non-revoked sessions for an account. Returns count."""
        pass

    @abstractmethod
    async def revoke_all_except(
        self, account_id: str, keep_refresh_token: str, now: Optional[datetime] = None
    ) -> int:
        """Revoke all non-revoked sessions except the one bound to keep_refresh_token."""
        pass

    @abstractmethod
    async def count_active(self, account_id: str, now: Optional[datetime] = None) -> int:
        """Count non-revoked, unexpired sessions for an account"""
        pass

    @abstractmethod
    async def is_limit_reached(
        self, account_id: str, max_sessions: int, now: Optional[datetime] = None
    ) -> bool:
        """True when count_active >= max_sessions"""
        pass

    @abstractmethod
    async def list_expired_unrevoked(self, now: Optional[datetime] = None) -> List[Session]:
        """Get sessions with expires_at <= now that are not yet revoked"""
        pass

    @abstractmethod
    async def cleanup_expired(self, now: Optional[datetime] = None) -> int:
        """Revoke every expired, unrevoked session with one shared timestamp. Returns count."""
        pass

    @abstractmethod
    async def purge_inactive_before(self, cutoff: datetime) -> int:
        """Delete sessions whose expires_at is before cutoff; cutoff is never in the future."""
        pass
