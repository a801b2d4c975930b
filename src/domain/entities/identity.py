"""
Identity Entity

Credential record owned by the identity provider.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow


class Identity(SQLModel, table=True):
    """
    Identity entity - who may sign in.

    Business Rules:
    - Email is unique, stored trimmed and lower-cased
    - Password stored as bcrypt hash (cost factor 12)
    - Deleting an identity cascades to its sessions, profile and todos
    """

    __tablename__ = "identities"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars
    full_name: Optional[str] = Field(default=None, max_length=255)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_sign_in_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
