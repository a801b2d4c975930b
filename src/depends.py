from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, Request, status
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from libs.result import Error
from src.adapter.database import enable_sqlite_foreign_keys
from src.adapter.services.change_feed import InMemoryChangeFeed
from src.adapter.services.identity_provider import LocalIdentityAdmin, LocalIdentityProvider
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.cookies import read_session_token
from src.app.services.change_feed import IChangeFeed
from src.app.services.identity_provider import AuthSession, IdentityAdmin, IdentityProvider
from src.app.services.unit_of_work import UnitOfWork

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)
enable_sqlite_foreign_keys(engine)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

change_feed = InMemoryChangeFeed()


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def open_unit_of_work(app):
    """
    Unit of work outside request dependency injection (middleware, streams).

    Honours app.dependency_overrides so tests and routes share one store.
    """
    provider = app.dependency_overrides.get(get_unit_of_work, get_unit_of_work)
    return asynccontextmanager(provider)()


def get_identity_provider(uow: UnitOfWork = Depends(get_unit_of_work)) -> IdentityProvider:
    return LocalIdentityProvider(uow)


def get_identity_admin(uow: UnitOfWork = Depends(get_unit_of_work)) -> IdentityAdmin:
    return LocalIdentityAdmin(uow, ApplicationConfig.SERVICE_ROLE_KEY)


def get_change_feed() -> IChangeFeed:
    return change_feed


def get_session_token(request: Request) -> Optional[str]:
    return read_session_token(request, ApplicationConfig.SESSION_COOKIE_NAME)


async def get_current_session(
    token: Optional[str] = Depends(get_session_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> AuthSession:
    """
    Dependency resolving the caller's session from cookie or bearer token.

    Raises:
        ClientError: 401 if there is no live session, 403 if the account is blocked
    """
    async with uow:
        auth = await identity.get_session(token)
        if auth is None:
            raise ClientError(
                Error("UNAUTHORIZED", "Unauthorized"),
                status_code=status.HTTP_401_UNAUTHORIZED,
            )

        profile = await uow.profiles.get_by_id(auth.user_id)
        if profile is not None and profile.is_blocked:
            raise ClientError(
                Error("USER_BLOCKED", "User account is blocked"),
                status_code=status.HTTP_403_FORBIDDEN,
            )

    return auth
