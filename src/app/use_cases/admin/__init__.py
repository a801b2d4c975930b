"""Admin roster use cases"""

from .delete_user_use_case import DeleteUserUseCase
from .dtos import ProfileInfo, RosterActionResponse, RosterResponse
from .list_profiles_use_case import ListProfilesUseCase
from .set_admin_use_case import SetAdminUseCase
from .set_blocked_use_case import SetBlockedUseCase

__all__ = [
    "ListProfilesUseCase",
    "SetBlockedUseCase",
    "SetAdminUseCase",
    "DeleteUserUseCase",
    "ProfileInfo",
    "RosterResponse",
    "RosterActionResponse",
]
