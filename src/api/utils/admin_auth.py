"""
Admin API Key Authentication

Validates admin API keys for account administration endpoints.
"""

import secrets

from fastapi import Header, status
from src.api.error import ClientError
from config import ApplicationConfig


async def verify_admin_api_key(x_admin_api_key: str = Header(None)):
    """
    Verify admin API key from X-Admin-API-Key header.

    Service-to-service auth for operators and internal tooling; separate from
    account bearer tokens.

    Raises:
        ClientError: 401 if key is missing or invalid

    Returns:
        True if valid
    """
    if not x_admin_api_key:
        raise ClientError(
            "UNAUTHORIZED",
            "Admin API key required",
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if not secrets.compare_digest(x_admin_api_key, ApplicationConfig.ADMIN_API_KEY):
        raise ClientError(
            "INVALID_API_KEY",
            "Invalid admin API key",
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return True
