from typing import Optional

from fastapi import Request, Response

from config import ApplicationConfig


def read_session_token(request: Request, cookie_name: str) -> Optional[str]:
    """Session cookie first, then an Authorization: Bearer header"""
    token = request.cookies.get(cookie_name)
    if token:
        return token

    authorization = request.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        ApplicationConfig.SESSION_COOKIE_NAME,
        token,
        max_age=ApplicationConfig.SESSION_TTL_HOURS * 3600,
        httponly=True,
        secure=ApplicationConfig.SESSION_COOKIE_SECURE,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response, cookie_name: str) -> None:
    response.delete_cookie(cookie_name, path="/")
