"""
Profile Entity

Authorization attributes of an account.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class Profile(SQLModel, table=True):
    """
    Profile entity - one per identity.

    Business Rules:
    - id is the identity id (immutable)
    - email is immutable after signup
    - is_blocked overrides is_admin: a blocked admin is denied like anyone else
    - Only administrators change is_admin / is_blocked
    """

    __tablename__ = "profiles"

    id: UUID = Field(foreign_key="identities.id", ondelete="CASCADE", primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    full_name: Optional[str] = Field(default=None, max_length=255)

    is_admin: bool = Field(default=False)
    is_blocked: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_profile_created_at", "created_at"),)
