"""
Change Event

Transient notification of a todo mutation. Never persisted.
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from .enums import ChangeKind


class TodoSnapshot(BaseModel):
    """Full state of a todo as seen by clients"""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID
    user_id: UUID
    title: str
    description: Optional[str] = None
    due_date: Optional[date] = None
    completed: bool = False
    created_at: datetime


class RemovedTodo(BaseModel):
    """What a removal event is guaranteed to carry"""

    id: UUID
    user_id: Optional[UUID] = None


class ChangeEvent(BaseModel):
    """
    One mutation on the owner's todos.

    created/updated carry ``new``; removed carries at least ``old.id``.
    """

    kind: ChangeKind
    new: Optional[TodoSnapshot] = None
    old: Optional[RemovedTodo] = None

    @property
    def todo_id(self) -> UUID:
        if self.new is not None:
            return self.new.id
        return self.old.id

    @classmethod
    def created(cls, todo) -> "ChangeEvent":
        return cls(kind=ChangeKind.created, new=TodoSnapshot.model_validate(todo))

    @classmethod
    def updated(cls, todo) -> "ChangeEvent":
        return cls(kind=ChangeKind.updated, new=TodoSnapshot.model_validate(todo))

    @classmethod
    def removed(cls, todo_id: UUID, user_id: Optional[UUID] = None) -> "ChangeEvent":
        return cls(kind=ChangeKind.removed, old=RemovedTodo(id=todo_id, user_id=user_id))
