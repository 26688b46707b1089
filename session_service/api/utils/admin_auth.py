"""
Admin API Key Authentication

Validates admin API keys for operational endpoints (manual completion,
on-demand sweeps).
"""

from fastapi import Header, status
from session_service.libs.result import Error
from session_service.api.error import ClientError
from config import ApplicationConfig


async def verify_admin_api_key(x_admin_api_key: str = Header(None)):
    """
    Verify admin API key from X-Admin-API-Key header.

    Args:
        x_admin_api_key: API key from X-Admin-API-Key header

    Raises:
        ClientError: 401 if key is missing or invalid

    Returns:
        True if valid
    """
    if not x_admin_api_key:
        raise ClientError(
            Error("UNAUTHORIZED", "Admin API key required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if x_admin_api_key != ApplicationConfig.ADMIN_API_KEY:
        raise ClientError(
            Error("INVALID_API_KEY", "Invalid admin API key"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return True
