"""Todo use cases"""

from .dtos import CreateTodoCommand, DeleteTodoResponse, TodoListResponse
from .manage_todos_use_case import ManageTodosUseCase

__all__ = [
    "ManageTodosUseCase",
    "CreateTodoCommand",
    "DeleteTodoResponse",
    "TodoListResponse",
]
