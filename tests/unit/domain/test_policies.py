from uuid import uuid4

import pytest

from src.domain.entities import DispositionKind, Profile, RosterAction
from src.domain.policies import (
    GatePaths,
    check_roster_action,
    decide_anonymous,
    decide_for_profile,
    is_anonymous_entry,
    is_effective_admin,
    is_protected,
)


def make_profile(is_admin=False, is_blocked=False, profile_id=None):
    return Profile(
        id=profile_id or uuid4(),
        email=f"{uuid4().hex[:8]}@example.com",
        is_admin=is_admin,
        is_blocked=is_blocked,
    )


@pytest.mark.parametrize(
    "path", ["/dashboard", "/dashboard/", "/dashboard/todos/1", "/admin", "/admin/users"]
)
def test_anonymous_on_protected_path_goes_to_login(path, paths):
    disposition = decide_anonymous(path, paths)

    assert disposition.kind == DispositionKind.redirect_login
    assert disposition.location == "/login"
    assert disposition.sign_out is False


@pytest.mark.parametrize("path", ["/", "/login", "/signup", "/health", "/api/todos"])
def test_anonymous_on_public_path_is_allowed(path, paths):
    assert decide_anonymous(path, paths).allowed


def test_anonymous_entry_is_exact_match(paths):
    assert is_anonymous_entry("/login", paths)
    assert is_anonymous_entry("/", paths)
    assert not is_anonymous_entry("/login/help", paths)
    assert not is_protected("/login", paths)


def test_blocked_member_is_signed_out(paths):
    disposition = decide_for_profile("/dashboard", make_profile(is_blocked=True), paths)

    assert disposition.kind == DispositionKind.forced_sign_out
    assert disposition.location == "/login?blocked=true"
    assert disposition.sign_out is True


def test_blocked_admin_cannot_enter_admin_area(paths):
    profile = make_profile(is_admin=True, is_blocked=True)

    disposition = decide_for_profile("/admin", profile, paths)

    assert disposition.kind == DispositionKind.forced_sign_out


def test_non_admin_on_admin_area_goes_to_dashboard(paths):
    disposition = decide_for_profile("/admin/users", make_profile(), paths)

    assert disposition.kind == DispositionKind.redirect_dashboard
    assert disposition.location == "/dashboard"
    assert disposition.sign_out is False


def test_missing_profile_is_neither_blocked_nor_admin(paths):
    assert decide_for_profile("/dashboard", None, paths).allowed
    assert decide_for_profile("/admin", None, paths).kind == DispositionKind.redirect_dashboard


def test_admin_is_allowed_everywhere(paths):
    profile = make_profile(is_admin=True)

    assert decide_for_profile("/admin", profile, paths).allowed
    assert decide_for_profile("/dashboard", profile, paths).allowed


def test_custom_paths():
    paths = GatePaths(members="/app", admin="/staff", login="/signin", signup="/join")

    assert decide_anonymous("/app/today", paths).location == "/signin"
    assert decide_for_profile("/staff", make_profile(), paths).location == "/app"


def test_effective_admin_requires_not_blocked():
    assert is_effective_admin(make_profile(is_admin=True))
    assert not is_effective_admin(make_profile(is_admin=True, is_blocked=True))
    assert not is_effective_admin(None)


class TestRosterGuard:
    def test_missing_target(self):
        error = check_roster_action(uuid4(), None, RosterAction.block, True)
        assert error.code == "USER_NOT_FOUND"

    def test_self_delete_is_rejected(self):
        actor = make_profile(is_admin=True)

        error = check_roster_action(actor.id, actor, RosterAction.delete, True)

        assert error.code == "CANNOT_TARGET_SELF"
        assert error.message == "Cannot delete your own account"

    @pytest.mark.parametrize("action", list(RosterAction))
    def test_self_is_rejected_for_every_action(self, action):
        actor = make_profile(is_admin=True)
        error = check_roster_action(actor.id, actor, action, False)
        assert error.code == "CANNOT_TARGET_SELF"

    @pytest.mark.parametrize(
        "action", [RosterAction.block, RosterAction.revoke_admin, RosterAction.delete]
    )
    def test_peer_admin_protected(self, action):
        target = make_profile(is_admin=True)

        error = check_roster_action(uuid4(), target, action, True)

        assert error.code == "PEER_ADMIN_PROTECTED"

    @pytest.mark.parametrize(
        "action", [RosterAction.block, RosterAction.revoke_admin, RosterAction.delete]
    )
    def test_peer_admin_allowed_without_protection(self, action):
        target = make_profile(is_admin=True)
        assert check_roster_action(uuid4(), target, action, False) is None

    def test_unblocking_an_admin_is_allowed(self):
        target = make_profile(is_admin=True, is_blocked=True)
        assert check_roster_action(uuid4(), target, RosterAction.unblock, True) is None

    def test_promoting_blocked_user_is_refused(self):
        target = make_profile(is_blocked=True)

        error = check_roster_action(uuid4(), target, RosterAction.grant_admin, True)

        assert error.code == "TARGET_BLOCKED"

    def test_member_can_be_blocked(self):
        assert check_roster_action(uuid4(), make_profile(), RosterAction.block, True) is None
