"""
Admin Roster DTOs
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class ProfileInfo(BaseModel):
    """Roster row"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    full_name: Optional[str] = None
    is_admin: bool
    is_blocked: bool
    created_at: datetime

    @classmethod
    def from_profile(cls, profile) -> "ProfileInfo":
        return cls(
            id=str(profile.id),
            email=profile.email,
            full_name=profile.full_name,
            is_admin=profile.is_admin,
            is_blocked=profile.is_blocked,
            created_at=profile.created_at,
        )


class RosterResponse(BaseModel):
    users: List[ProfileInfo]


class RosterActionResponse(BaseModel):
    success: bool
    message: str
    user: Optional[ProfileInfo] = None
