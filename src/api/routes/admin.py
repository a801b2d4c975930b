"""
Admin API Routes - User Roster Management

Callers authenticate with their normal session; every use case re-reads the
caller's profile and requires an active (non-blocked) admin.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from libs.result import Error
from src.api.error import ClientError, raise_for_error
from src.app.services.identity_provider import AuthSession, IdentityAdmin
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    DeleteUserUseCase,
    ListProfilesUseCase,
    RosterActionResponse,
    RosterResponse,
    SetAdminUseCase,
    SetBlockedUseCase,
)
from src.depends import get_current_session, get_identity_admin, get_unit_of_work

router = APIRouter(prefix=f"{ApplicationConfig.API_PREFIX}/admin", tags=["Admin"])

ROSTER_ERRORS = {
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "PEER_ADMIN_PROTECTED": status.HTTP_403_FORBIDDEN,
    "CANNOT_TARGET_SELF": status.HTTP_400_BAD_REQUEST,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "TARGET_BLOCKED": status.HTTP_409_CONFLICT,
}


class SetBlockedRequest(BaseModel):
    blocked: bool = Field(..., description="True to block, false to unblock")


class SetAdminRequest(BaseModel):
    is_admin: bool = Field(..., description="True to grant admin, false to revoke")


async def read_target_id(request: Request) -> UUID:
    """
    userId from a delete-user body.

    Parsed by hand so every malformed body gets the error envelope rather
    than a validation detail list.
    """
    raw = await request.body()
    if not raw.strip():
        raise ClientError(Error("USER_ID_REQUIRED", "User ID is required"))
    try:
        body = await request.json()
    except ValueError:
        raise ClientError(Error("INVALID_REQUEST_BODY", "Request body is not valid JSON"))

    user_id = body.get("userId") if isinstance(body, dict) else None
    if user_id is None or user_id == "":
        raise ClientError(Error("USER_ID_REQUIRED", "User ID is required"))
    if not isinstance(user_id, str):
        raise ClientError(Error("INVALID_USER_ID", "User ID must be a string"))
    try:
        return UUID(user_id)
    except ValueError:
        raise ClientError(Error("INVALID_USER_ID", "User ID is not a valid UUID"))


@router.get("/users", status_code=status.HTTP_200_OK, response_model=RosterResponse)
async def list_users(
    current: AuthSession = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Users

    Raises:
        - 401 Unauthorized: No session
        - 403 Forbidden: Caller is not an active admin
    """
    result = await ListProfilesUseCase(uow).execute(current.user_id)
    if result.is_err():
        raise_for_error(result.error, ROSTER_ERRORS)
    return result.value


@router.post(
    "/users/{user_id}/block",
    status_code=status.HTTP_200_OK,
    response_model=RosterActionResponse,
)
async def set_blocked(
    user_id: UUID,
    request: SetBlockedRequest,
    current: AuthSession = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Block / Unblock User

    The target's live sessions are ended by the access gate on their next
    protected navigation.

    Raises:
        - 400 Bad Request: CANNOT_TARGET_SELF
        - 403 Forbidden: FORBIDDEN, PEER_ADMIN_PROTECTED
        - 404 Not Found: USER_NOT_FOUND
    """
    use_case = SetBlockedUseCase(uow, peer_protection=ApplicationConfig.ADMIN_PEER_PROTECTION)
    result = await use_case.execute(current.user_id, user_id, request.blocked)
    if result.is_err():
        raise_for_error(result.error, ROSTER_ERRORS)
    return result.value


@router.post(
    "/users/{user_id}/admin",
    status_code=status.HTTP_200_OK,
    response_model=RosterActionResponse,
)
async def set_admin(
    user_id: UUID,
    request: SetAdminRequest,
    current: AuthSession = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Grant / Revoke Admin

    Raises:
        - 400 Bad Request: CANNOT_TARGET_SELF
        - 403 Forbidden: FORBIDDEN, PEER_ADMIN_PROTECTED
        - 404 Not Found: USER_NOT_FOUND
        - 409 Conflict: TARGET_BLOCKED (unblock before promoting)
    """
    use_case = SetAdminUseCase(uow, peer_protection=ApplicationConfig.ADMIN_PEER_PROTECTION)
    result = await use_case.execute(current.user_id, user_id, request.is_admin)
    if result.is_err():
        raise_for_error(result.error, ROSTER_ERRORS)
    return result.value


@router.delete(
    "/delete-user",
    status_code=status.HTTP_200_OK,
    response_model=RosterActionResponse,
    response_model_exclude_none=True,
)
async def delete_user(
    request: Request,
    current: AuthSession = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_admin: IdentityAdmin = Depends(get_identity_admin),
):
    """
    Delete User permanently

    Removes the identity through the privileged admin channel; profile,
    sessions and todos go with it.

    Raises:
        - 400 Bad Request: User ID missing or malformed, or own account
        - 401 Unauthorized: No session
        - 403 Forbidden: Not an active admin, or target is an admin
        - 404 Not Found: USER_NOT_FOUND
        - 500 Internal Server Error: Identity provider failure
    """
    target_id = await read_target_id(request)

    use_case = DeleteUserUseCase(
        uow, identity_admin, peer_protection=ApplicationConfig.ADMIN_PEER_PROTECTION
    )
    result = await use_case.execute(current.user_id, target_id)
    if result.is_err():
        raise_for_error(result.error, ROSTER_ERRORS)
    return result.value
