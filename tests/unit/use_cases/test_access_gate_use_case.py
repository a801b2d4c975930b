from uuid import uuid4

import pytest

from src.app.services.identity_provider import AuthSession
from src.app.use_cases.gate import FAIL_CLOSED, AccessGateUseCase
from src.domain.entities import DispositionKind, Profile


@pytest.fixture
def auth():
    return AuthSession(user_id=uuid4(), session_id=uuid4(), token="token-abc")


def make_profile(user_id, is_admin=False, is_blocked=False):
    return Profile(id=user_id, email="user@example.com", is_admin=is_admin, is_blocked=is_blocked)


@pytest.mark.asyncio
async def test_no_session_on_protected_path_redirects_to_login(mock_uow, mock_identity, paths):
    use_case = AccessGateUseCase(mock_uow, mock_identity, paths)

    disposition = await use_case.evaluate("/dashboard", None)

    assert disposition.kind == DispositionKind.redirect_login
    mock_identity.get_session.assert_not_called()
    mock_uow.profiles.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_invalid_token_counts_as_no_session(mock_uow, mock_identity, paths):
    mock_identity.get_session.return_value = None
    use_case = AccessGateUseCase(mock_uow, mock_identity, paths)

    disposition = await use_case.evaluate("/admin", "stale-token")

    assert disposition.kind == DispositionKind.redirect_login
    mock_uow.profiles.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_session_lookup_error_counts_as_no_session(mock_uow, mock_identity, paths):
    mock_identity.get_session.side_effect = RuntimeError("provider down")
    use_case = AccessGateUseCase(mock_uow, mock_identity, paths)

    assert (await use_case.evaluate("/dashboard", "t")).kind == DispositionKind.redirect_login
    assert (await use_case.evaluate("/login", "t")).allowed


@pytest.mark.asyncio
async def test_blocked_user_is_signed_out(mock_uow, mock_identity, paths, auth):
    mock_identity.get_session.return_value = auth
    mock_uow.profiles.get_by_id.return_value = make_profile(auth.user_id, is_blocked=True)
    use_case = AccessGateUseCase(mock_uow, mock_identity, paths)

    disposition = await use_case.evaluate("/dashboard", auth.token)

    assert disposition.kind == DispositionKind.forced_sign_out
    assert disposition.location == "/login?blocked=true"
    mock_identity.sign_out.assert_awaited_once_with(auth.token)
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_blocked_admin_on_admin_area_is_signed_out(mock_uow, mock_identity, paths, auth):
    mock_identity.get_session.return_value = auth
    mock_uow.profiles.get_by_id.return_value = make_profile(
        auth.user_id, is_admin=True, is_blocked=True
    )
    use_case = AccessGateUseCase(mock_uow, mock_identity, paths)

    disposition = await use_case.evaluate("/admin", auth.token)

    assert disposition.kind == DispositionKind.forced_sign_out
    mock_identity.sign_out.assert_awaited_once()


@pytest.mark.asyncio
async def test_sign_out_failure_still_redirects(mock_uow, mock_identity, paths, auth):
    mock_identity.get_session.return_value = auth
    mock_identity.sign_out.side_effect = RuntimeError("store down")
    mock_uow.profiles.get_by_id.return_value = make_profile(auth.user_id, is_blocked=True)
    use_case = AccessGateUseCase(mock_uow, mock_identity, paths)

    disposition = await use_case.evaluate("/dashboard", auth.token)

    assert disposition.kind == DispositionKind.forced_sign_out
    assert disposition.sign_out is True


@pytest.mark.asyncio
async def test_member_on_admin_area_goes_to_dashboard(mock_uow, mock_identity, paths, auth):
    mock_identity.get_session.return_value = auth
    mock_uow.profiles.get_by_id.return_value = make_profile(auth.user_id)
    use_case = AccessGateUseCase(mock_uow, mock_identity, paths)

    disposition = await use_case.evaluate("/admin", auth.token)

    assert disposition.kind == DispositionKind.redirect_dashboard
    mock_identity.sign_out.assert_not_called()


@pytest.mark.asyncio
async def test_member_on_dashboard_is_allowed(mock_uow, mock_identity, paths, auth):
    mock_identity.get_session.return_value = auth
    mock_uow.profiles.get_by_id.return_value = make_profile(auth.user_id)
    use_case = AccessGateUseCase(mock_uow, mock_identity, paths)

    assert (await use_case.evaluate("/dashboard", auth.token)).allowed


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/", "/login", "/signup"])
async def test_signed_in_user_skips_anonymous_entry(mock_uow, mock_identity, paths, auth, path):
    mock_identity.get_session.return_value = auth
    use_case = AccessGateUseCase(mock_uow, mock_identity, paths)

    disposition = await use_case.evaluate(path, auth.token)

    assert disposition.kind == DispositionKind.redirect_dashboard
    mock_uow.profiles.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_other_paths_are_allowed(mock_uow, mock_identity, paths, auth):
    mock_identity.get_session.return_value = auth
    use_case = AccessGateUseCase(mock_uow, mock_identity, paths)

    assert (await use_case.evaluate("/health", auth.token)).allowed


@pytest.mark.asyncio
async def test_profile_lookup_failure_fails_open(mock_uow, mock_identity, paths, auth):
    mock_identity.get_session.return_value = auth
    mock_uow.profiles.get_by_id.side_effect = RuntimeError("db down")
    use_case = AccessGateUseCase(mock_uow, mock_identity, paths)

    assert (await use_case.evaluate("/admin", auth.token)).allowed


@pytest.mark.asyncio
async def test_profile_lookup_failure_fails_closed(mock_uow, mock_identity, paths, auth):
    mock_identity.get_session.return_value = auth
    mock_uow.profiles.get_by_id.side_effect = RuntimeError("db down")
    use_case = AccessGateUseCase(mock_uow, mock_identity, paths, fail_mode=FAIL_CLOSED)

    disposition = await use_case.evaluate("/dashboard", auth.token)

    assert disposition.kind == DispositionKind.redirect_login
    mock_identity.sign_out.assert_not_called()


def test_unknown_fail_mode_is_rejected(mock_uow, mock_identity, paths):
    with pytest.raises(ValueError):
        AccessGateUseCase(mock_uow, mock_identity, paths, fail_mode="sometimes")
