from uuid import uuid4

import pytest

from src.app.services.identity_provider import AuthSession
from src.app.use_cases.auth.login_use_case import LoginUseCase
from src.domain.entities import Profile
from src.domain.errors import AuthError


@pytest.fixture
def auth():
    return AuthSession(user_id=uuid4(), session_id=uuid4(), token="fresh-token")


@pytest.mark.asyncio
async def test_successful_login(mock_uow, mock_identity, auth):
    # Arrange
    mock_identity.sign_in.return_value = auth
    mock_uow.profiles.get_by_id.return_value = Profile(
        id=auth.user_id, email="user@example.com", is_admin=True
    )
    use_case = LoginUseCase(mock_uow, mock_identity)

    # Act
    result = await use_case.execute("user@example.com", "secret1")

    # Assert
    assert result.is_ok()
    assert result.value.access_token == "fresh-token"
    assert result.value.user_id == str(auth.user_id)
    assert result.value.is_admin is True
    mock_identity.sign_out.assert_not_called()


@pytest.mark.asyncio
async def test_invalid_credentials(mock_uow, mock_identity):
    mock_identity.sign_in.side_effect = AuthError(
        "Invalid email or password", code="INVALID_CREDENTIALS"
    )
    use_case = LoginUseCase(mock_uow, mock_identity)

    result = await use_case.execute("user@example.com", "wrong")

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.profiles.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_blocked_account_session_is_revoked_at_once(mock_uow, mock_identity, auth):
    mock_identity.sign_in.return_value = auth
    mock_uow.profiles.get_by_id.return_value = Profile(
        id=auth.user_id, email="user@example.com", is_blocked=True
    )
    use_case = LoginUseCase(mock_uow, mock_identity)

    result = await use_case.execute("user@example.com", "secret1")

    assert result.is_err()
    assert result.error.code == "USER_BLOCKED"
    mock_identity.sign_out.assert_awaited_once_with("fresh-token")
    assert mock_uow.commit.await_count == 2


@pytest.mark.asyncio
async def test_profile_failure_fails_open(mock_uow, mock_identity, auth):
    mock_identity.sign_in.return_value = auth
    mock_uow.profiles.get_by_id.side_effect = RuntimeError("db down")
    use_case = LoginUseCase(mock_uow, mock_identity, fail_mode="open")

    result = await use_case.execute("user@example.com", "secret1")

    assert result.is_ok()
    assert result.value.is_admin is False


@pytest.mark.asyncio
async def test_profile_failure_fails_closed(mock_uow, mock_identity, auth):
    mock_identity.sign_in.return_value = auth
    mock_uow.profiles.get_by_id.side_effect = RuntimeError("db down")
    use_case = LoginUseCase(mock_uow, mock_identity, fail_mode="closed")

    result = await use_case.execute("user@example.com", "secret1")

    assert result.is_err()
    assert result.error.code == "PROFILE_UNAVAILABLE"
    mock_identity.sign_out.assert_awaited_once_with("fresh-token")
