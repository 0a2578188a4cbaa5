"""
Application Errors

The failure taxonomy surfaced by use cases. Infrastructure exceptions are
translated into these before they leave the unit of work.
"""

from typing import List, Optional


class AuthServiceError(Exception):
    """Base class: a machine-readable code plus a message safe to show callers"""

    code = "INTERNAL_ERROR"
    retryable = False

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        errors: Optional[List[str]] = None,
    ):
        self.message = message
        if code is not None:
            self.code = code
        self.errors = list(errors or [])
        super().__init__(message)


class AuthenticationError(AuthServiceError):
    """Bad credentials, or an invalid, expired or reused refresh token"""

    code = "INVALID_CREDENTIALS"


class ConflictError(AuthServiceError):
    """State conflict, e.g. an email that is already registered"""

    code = "CONFLICT"


class SessionLimitError(ConflictError):
    """Account already holds the maximum number of active sessions"""

    code = "SESSION_LIMIT_REACHED"


class ValidationError(AuthServiceError):
    """Malformed input or input rejected by the credential store"""

    code = "VALIDATION_ERROR"


class NotFoundError(AuthServiceError):
    """Referenced account or session does not exist"""

    code = "NOT_FOUND"


class PersistenceError(AuthServiceError):
    """Store unavailable or constraint violated; the only retryable failure"""

    code = "PERSISTENCE_ERROR"
    retryable = True


INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
INVALID_SESSION_MESSAGE = "Invalid or expired session"
