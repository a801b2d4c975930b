from uuid import UUID

import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.json_loader import FixtureData
from config import ApplicationConfig
from src.adapter.database import enable_sqlite_foreign_keys
from src.depends import get_unit_of_work
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.domain.entities import Profile

# Cheap hashes keep the suite fast
ApplicationConfig.BCRYPT_ROUNDS = 4


@pytest_asyncio.fixture
def test_data():
    return FixtureData()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session):
    from httpx import ASGITransport
    from src.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
def register(client, db_session, test_data):
    """
    Sign up and log in an account from test_data.json.

    Returns (user_id, bearer headers). The cookie jar is cleared so each
    request names its caller explicitly.
    """

    async def _register(key: str, is_admin: bool = False):
        account = test_data.get_copy(key)
        response = await client.post("/auth/signup", json=account)
        assert response.status_code == 201
        user_id = UUID(response.json()["user"]["id"])

        if is_admin:
            profile = await db_session.get(Profile, user_id)
            profile.is_admin = True
            db_session.add(profile)
            await db_session.commit()

        response = await client.post("/auth/login", json=test_data.credentials(key))
        assert response.status_code == 200
        client.cookies.clear()
        return user_id, {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _register
