"""
Auth Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class ActivityAction(str, Enum):
    """Kinds of account activity recorded in the activity log"""

    login = "login"
    logout = "logout"
    register = "register"
    token_refresh = "token_refresh"
    change_password = "change_password"
    reset_password = "reset_password"
    update_profile = "update_profile"
    revoke_session = "revoke_session"
    revoke_all_sessions = "revoke_all_sessions"
    revoke_other_sessions = "revoke_other_sessions"
    block_user = "block_user"
    unblock_user = "unblock_user"
    delete_user = "delete_user"
    view_logs = "view_logs"


class DeviceType(str, Enum):
    """Device class derived from the User-Agent header"""

    unknown = "unknown"
    desktop = "desktop"
    mobile = "mobile"
    tablet = "tablet"


class SessionLimitPolicy(str, Enum):
    """What happens when an account already holds the maximum number of sessions"""

    evict_oldest = "evict_oldest"
    reject = "reject"
