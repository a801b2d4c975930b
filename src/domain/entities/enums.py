"""
Domain Enums

Enumeration types shared by entities and value objects.
"""

from enum import Enum


class ChangeKind(str, Enum):
    """Kind of todo mutation carried by a change event"""

    created = "created"
    updated = "updated"
    removed = "removed"


class DispositionKind(str, Enum):
    """Outcome of the access gate for one request"""

    allow = "allow"
    redirect_login = "redirect_login"
    redirect_dashboard = "redirect_dashboard"
    forced_sign_out = "forced_sign_out"


class RosterAction(str, Enum):
    """Administrative action on another account"""

    block = "block"
    unblock = "unblock"
    grant_admin = "grant_admin"
    revoke_admin = "revoke_admin"
    delete = "delete"
