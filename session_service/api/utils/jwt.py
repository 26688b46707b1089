from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def generate_jwt(
    user_id: UUID, role: str, expires_delta: timedelta = timedelta(minutes=15)
) -> str:
    """
    Generate JWT access token

    Tokens are issued by the identity service; this helper exists for
    internal callers and tests.

    Args:
        user_id: User UUID
        role: User role (student, tutor, admin)
        expires_delta: Token expiration duration

    Returns:
        JWT token string (HS256)
    """
    now = datetime.now(UTC)
    payload = {
        "user_id": str(user_id),
        "role": role,
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"]
        )
    except JWTError:
        return None

    if "user_id" not in payload or "role" not in payload:
        return None
    return payload
