"""
Authorization Policies

Pure decision functions shared by the access gate, the login flow and the
admin roster use cases. Nothing here performs I/O.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from libs.result import Error
from src.domain.entities import Disposition, Profile, RosterAction


@dataclass(frozen=True)
class GatePaths:
    """Route layout the gate enforces"""

    members: str = "/dashboard"
    admin: str = "/admin"
    login: str = "/login"
    signup: str = "/signup"
    root: str = "/"

    @classmethod
    def from_config(cls, config) -> "GatePaths":
        return cls(
            members=config.MEMBERS_PATH,
            admin=config.ADMIN_PATH,
            login=config.LOGIN_PATH,
            signup=config.SIGNUP_PATH,
        )


def is_admin_area(path: str, paths: GatePaths) -> bool:
    return path.startswith(paths.admin)


def is_protected(path: str, paths: GatePaths) -> bool:
    return path.startswith(paths.members) or is_admin_area(path, paths)


def is_anonymous_entry(path: str, paths: GatePaths) -> bool:
    return path in (paths.login, paths.signup, paths.root)


def is_denied(profile: Optional[Profile]) -> bool:
    """Blocked accounts are denied regardless of admin status"""
    return profile is not None and profile.is_blocked


def is_effective_admin(profile: Optional[Profile]) -> bool:
    return profile is not None and profile.is_admin and not profile.is_blocked


def decide_anonymous(path: str, paths: GatePaths) -> Disposition:
    """Gate decision when the request carries no valid session."""
    if is_protected(path, paths):
        return Disposition.to_login(paths.login)
    return Disposition.allow()


def decide_for_profile(
    path: str, profile: Optional[Profile], paths: GatePaths
) -> Disposition:
    """
    Gate decision for a signed-in caller on a protected path.

    A missing profile counts as neither blocked nor admin. The block check
    runs before the admin check so stale admin status never opens /admin.
    """
    if is_denied(profile):
        return Disposition.forced_sign_out(paths.login)
    if is_admin_area(path, paths) and not (profile is not None and profile.is_admin):
        return Disposition.to_dashboard(paths.members)
    return Disposition.allow()


DESTRUCTIVE_ACTIONS = (RosterAction.block, RosterAction.revoke_admin, RosterAction.delete)


def check_roster_action(
    actor_id: UUID,
    target: Optional[Profile],
    action: RosterAction,
    peer_protection: bool,
) -> Optional[Error]:
    """
    Validate an admin action against its target.

    Returns the first violated rule, or None when the action may proceed.
    The caller has already verified that the actor is an active admin.
    """
    if target is None:
        return Error("USER_NOT_FOUND", "User not found")

    if target.id == actor_id:
        messages = {
            RosterAction.delete: "Cannot delete your own account",
            RosterAction.block: "Cannot block your own account",
            RosterAction.unblock: "Cannot unblock your own account",
        }
        return Error(
            "CANNOT_TARGET_SELF",
            messages.get(action, "You cannot change your own admin status"),
        )

    if peer_protection and target.is_admin and action in DESTRUCTIVE_ACTIONS:
        return Error(
            "PEER_ADMIN_PROTECTED",
            "Administrators cannot block, demote or delete other administrators",
        )

    if action == RosterAction.grant_admin and target.is_blocked:
        return Error(
            "TARGET_BLOCKED", "Blocked users must be unblocked before promotion"
        )

    return None


BLOCKED_MARKER = "blocked"
BLOCKED_NOTICE = "You have been banned by an admin. Please contact support."
