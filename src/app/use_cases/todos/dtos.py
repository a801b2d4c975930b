"""
Todo Use Case DTOs
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import TodoSnapshot


class CreateTodoCommand(BaseModel):
    title: str
    description: Optional[str] = None
    due_date: Optional[date] = None


class TodoListResponse(BaseModel):
    todos: List[TodoSnapshot]


class DeleteTodoResponse(BaseModel):
    id: str
    deleted: bool


UPDATABLE_FIELDS = frozenset({"title", "description", "due_date", "completed"})
