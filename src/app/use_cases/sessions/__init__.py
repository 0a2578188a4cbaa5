"""
Session Management Use Cases
"""

from .list_sessions_use_case import ListSessionsUseCase
from .revoke_sessions_use_case import RevokeSessionsUseCase
from .cleanup_expired_sessions_use_case import CleanupExpiredSessionsUseCase
from .dtos import (
    SessionInfo,
    SessionListResponse,
    RevokeSessionsResponse,
    SessionCleanupResponse,
)

__all__ = [
    "ListSessionsUseCase",
    "RevokeSessionsUseCase",
    "CleanupExpiredSessionsUseCase",
    "SessionInfo",
    "SessionListResponse",
    "RevokeSessionsResponse",
    "SessionCleanupResponse",
]
