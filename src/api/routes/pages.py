"""
Page routes.

Rendering is left to the front end; each page returns the data it needs.
Route protection happens in AccessGateMiddleware before these run.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.app.services.identity_provider import AuthSession
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import ListProfilesUseCase
from src.app.use_cases.users import LoadContextUseCase
from src.depends import get_current_session, get_unit_of_work
from src.domain.policies import BLOCKED_NOTICE
from src.domain.projections import summarize

router = APIRouter(tags=["Pages"])


@router.get("/")
async def home():
    return {
        "page": "home",
        "links": {
            "login": ApplicationConfig.LOGIN_PATH,
            "signup": ApplicationConfig.SIGNUP_PATH,
        },
    }


@router.get(ApplicationConfig.LOGIN_PATH)
async def login_page(blocked: Optional[str] = Query(None)):
    """Login page; `?blocked=true` asks the client to show the block notice once"""
    is_blocked = blocked == "true"
    return {
        "page": "login",
        "blocked": is_blocked,
        "notice": BLOCKED_NOTICE if is_blocked else None,
    }


@router.get(ApplicationConfig.SIGNUP_PATH)
async def signup_page():
    return {"page": "signup"}


@router.get(ApplicationConfig.MEMBERS_PATH)
async def dashboard_page(
    today: Optional[date] = Query(
        None, description="Caller's local date for the due-today count; server date if omitted"
    ),
    current: AuthSession = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Members area: own profile, own todos (newest first) and their counts"""
    result = await LoadContextUseCase(uow).execute(current.user_id)

    if result.is_err():
        raise_for_error(
            result.error,
            {
                "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
                "USER_BLOCKED": status.HTTP_403_FORBIDDEN,
            },
        )

    context = result.value
    return {
        "page": "dashboard",
        "profile": context.profile,
        "todos": context.todos,
        "stats": summarize(context.todos, today),
    }


@router.get(ApplicationConfig.ADMIN_PATH)
async def admin_page(
    current: AuthSession = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Admin area: the full user roster, newest first"""
    result = await ListProfilesUseCase(uow).execute(current.user_id)

    if result.is_err():
        raise_for_error(result.error, {"FORBIDDEN": status.HTTP_403_FORBIDDEN})

    return {
        "page": "admin",
        "current_user_id": str(current.user_id),
        "users": result.value.users,
    }
