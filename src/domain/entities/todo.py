"""
Todo Entity

A task owned by exactly one profile.
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class Todo(SQLModel, table=True):
    """
    Todo entity.

    Business Rules:
    - Title is required and non-empty after trimming
    - due_date has day precision, no time of day
    - Only the owner mutates it; deleted with the owner's profile
    """

    __tablename__ = "todos"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(
        foreign_key="profiles.id", ondelete="CASCADE", nullable=False, index=True
    )

    title: str = Field(max_length=500)
    description: Optional[str] = Field(default=None)
    due_date: Optional[date] = Field(default=None)
    completed: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_todo_user_created", "user_id", "created_at"),)
