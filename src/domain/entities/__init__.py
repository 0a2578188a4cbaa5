"""
Auth Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import ActivityAction, DeviceType, SessionLimitPolicy

# Export all entities
from .account import Account
from .session import Session
from .activity_log import ActivityLogEntry, UNKNOWN_ACCOUNT_ID

__all__ = [
    # Enums
    "ActivityAction",
    "DeviceType",
    "SessionLimitPolicy",
    # Entities
    "Account",
    "Session",
    "ActivityLogEntry",
    # Constants
    "UNKNOWN_ACCOUNT_ID",
]
