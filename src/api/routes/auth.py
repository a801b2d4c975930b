from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from src.api.error import ClientError, raise_for_error
from src.api.utils.cookies import clear_session_cookie, set_session_cookie
from src.app.services.identity_provider import IdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    LoginResponse,
    LoginUseCase,
    LogoutResponse,
    LogoutUseCase,
    SignupCommand,
    SignupResponse,
    SignupUseCase,
)
from src.depends import get_identity_provider, get_session_token, get_unit_of_work

router = APIRouter(prefix="/auth", tags=["Authentication"])


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    Validates incoming HTTP request before converting to SignupCommand.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=6, description="User password (min 6 chars)")
    full_name: Optional[str] = Field(None, max_length=255, description="Display name")


@router.post(
    "/signup", status_code=status.HTTP_201_CREATED, response_model=SignupResponse
)
async def signup(
    request: SignupRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity: IdentityProvider = Depends(get_identity_provider),
):
    """
    User Signup

    Creates the identity and its profile (not admin, not blocked).

    Raises:
        - 409 Conflict: Email already registered
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 500 Internal Server Error: Server error
    """
    command = SignupCommand(
        email=request.email, password=request.password, full_name=request.full_name
    )

    result = await SignupUseCase(uow, identity).execute(command)

    if result.is_err():
        raise_for_error(
            result.error, {"EMAIL_ALREADY_REGISTERED": status.HTTP_409_CONFLICT}
        )

    return result.value


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity: IdentityProvider = Depends(get_identity_provider),
):
    """
    User Login

    Opens a session, re-checks the block flag and sets the session cookie.
    The token is also returned for bearer-style clients.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 403 Forbidden: Account blocked (the new session is already revoked)
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, identity, fail_mode=ApplicationConfig.GATE_FAIL_MODE)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        if result.error.code == "USER_BLOCKED":
            raise ClientError(
                result.error,
                status_code=status.HTTP_403_FORBIDDEN,
                extra={"blocked": True},
            )
        raise_for_error(
            result.error, {"INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED}
        )

    set_session_cookie(response, result.value.access_token)
    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity: IdentityProvider = Depends(get_identity_provider),
):
    """
    Sign Out

    Revokes the current session and clears the cookie. Always succeeds.
    """
    result = await LogoutUseCase(uow, identity).execute(token)

    if result.is_err():
        raise_for_error(result.error, {})

    clear_session_cookie(response, ApplicationConfig.SESSION_COOKIE_NAME)
    return result.value
