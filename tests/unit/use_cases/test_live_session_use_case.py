from uuid import uuid4

import pytest

from src.app.services.identity_provider import AuthSession
from src.app.use_cases.gate import LiveSessionUseCase
from src.domain.entities import Profile


@pytest.fixture
def auth():
    return AuthSession(user_id=uuid4(), session_id=uuid4(), token="token-abc")


@pytest.mark.asyncio
async def test_live_session_with_active_profile(mock_uow, mock_identity, auth):
    mock_identity.get_session.return_value = auth
    mock_uow.profiles.get_by_id.return_value = Profile(id=auth.user_id, email="a@example.com")

    assert await LiveSessionUseCase(mock_uow, mock_identity).execute("token-abc") is True
    mock_identity.get_session.assert_called_once_with("token-abc")


@pytest.mark.asyncio
async def test_revoked_session_is_not_live(mock_uow, mock_identity):
    mock_identity.get_session.return_value = None

    assert await LiveSessionUseCase(mock_uow, mock_identity).execute("token-abc") is False
    mock_uow.profiles.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_blocked_profile_is_not_live(mock_uow, mock_identity, auth):
    mock_identity.get_session.return_value = auth
    mock_uow.profiles.get_by_id.return_value = Profile(
        id=auth.user_id, email="a@example.com", is_blocked=True
    )

    assert await LiveSessionUseCase(mock_uow, mock_identity).execute("token-abc") is False


@pytest.mark.asyncio
async def test_deleted_profile_is_not_live(mock_uow, mock_identity, auth):
    mock_identity.get_session.return_value = auth
    mock_uow.profiles.get_by_id.return_value = None

    assert await LiveSessionUseCase(mock_uow, mock_identity).execute("token-abc") is False
