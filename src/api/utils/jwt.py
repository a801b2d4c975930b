from datetime import UTC, datetime
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def generate_session_token(user_id: UUID, session_id: UUID, expires_at: datetime) -> str:
    """
    Generate a signed session token

    Args:
        user_id: Identity UUID
        session_id: Session row backing the token
        expires_at: Naive UTC expiry, same as the session row

    Returns:
        JWT token string (HS256)
    """
    payload = {
        "sub": str(user_id),
        "sid": str(session_id),
        "exp": expires_at.replace(tzinfo=UTC),
        "iat": datetime.now(UTC),
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
        return payload
    except JWTError:
        return None
