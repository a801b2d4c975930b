import pytest
from unittest.mock import AsyncMock, MagicMock

from src.domain.policies import GatePaths


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.profiles = MagicMock()
    uow.profiles.get_by_id = AsyncMock()
    uow.profiles.list_all = AsyncMock()
    uow.profiles.create = AsyncMock(side_effect=lambda p: p)
    uow.profiles.update = AsyncMock(side_effect=lambda p: p)

    uow.todos = MagicMock()
    uow.todos.get_for_owner = AsyncMock()
    uow.todos.list_by_owner = AsyncMock()
    uow.todos.create = AsyncMock(side_effect=lambda t: t)
    uow.todos.update = AsyncMock(side_effect=lambda t: t)
    uow.todos.delete = AsyncMock()
    return uow


@pytest.fixture
def mock_identity():
    identity = MagicMock()
    identity.sign_in = AsyncMock()
    identity.sign_up = AsyncMock()
    identity.sign_out = AsyncMock(return_value=True)
    identity.get_session = AsyncMock()
    return identity


@pytest.fixture
def mock_feed():
    feed = MagicMock()
    feed.publish = AsyncMock(return_value=1)
    return feed


@pytest.fixture
def paths():
    return GatePaths()
