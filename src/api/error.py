from fastapi import status

from src.app.errors import (
    AuthenticationError,
    AuthServiceError,
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)

# Checked in order; subclasses before their bases
ERROR_STATUS_CODES = (
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (PersistenceError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_code_for(exc: AuthServiceError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


class ClientError(Exception):
    """Request rejected at the HTTP boundary, before any use case runs"""

    def __init__(self, code: str, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(message)
