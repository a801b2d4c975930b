"""
Manage Todos Use Case

Owner-scoped CRUD on todos. Every committed mutation is published on the
change feed so other sessions of the same owner converge.
"""

import logging
from typing import Any, Dict
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.change_feed import IChangeFeed
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ChangeEvent, Todo, TodoSnapshot
from .dtos import UPDATABLE_FIELDS, CreateTodoCommand, DeleteTodoResponse, TodoListResponse

logger = logging.getLogger(__name__)


def _todo_not_found() -> Error:
    return Error("TODO_NOT_FOUND", "Todo not found")


class ManageTodosUseCase:
    """
    Business Rules:
    - A todo is only visible to and changeable by its owner; any other id
      is reported as TODO_NOT_FOUND
    - Title is required and non-empty after trimming, on create and update
    - Updates are partial; fields outside title/description/due_date/completed
      are rejected
    - Events are published after commit, never for a rolled back change
    """

    def __init__(self, uow: UnitOfWork, feed: IChangeFeed):
        self.uow = uow
        self.feed = feed

    async def list_for_owner(self, owner_id: UUID) -> Result[TodoListResponse]:
        async with self.uow:
            todos = await self.uow.todos.list_by_owner(owner_id)
            return Return.ok(
                TodoListResponse(todos=[TodoSnapshot.model_validate(t) for t in todos])
            )

    async def create(self, owner_id: UUID, command: CreateTodoCommand) -> Result[TodoSnapshot]:
        title = (command.title or "").strip()
        if not title:
            return Return.err(Error("INVALID_TITLE", "Title is required"))

        async with self.uow:
            todo = Todo(
                user_id=owner_id,
                title=title,
                description=command.description,
                due_date=command.due_date,
            )
            todo = await self.uow.todos.create(todo)
            await self.uow.commit()

            event = ChangeEvent.created(todo)

        await self.feed.publish(owner_id, event)
        return Return.ok(event.new)

    async def update(
        self, owner_id: UUID, todo_id: UUID, fields: Dict[str, Any]
    ) -> Result[TodoSnapshot]:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            return Return.err(
                Error("INVALID_FIELDS", f"Cannot update: {', '.join(sorted(unknown))}")
            )
        if not fields:
            return Return.err(Error("INVALID_FIELDS", "No fields to update"))

        if "title" in fields:
            title = (fields["title"] or "").strip()
            if not title:
                return Return.err(Error("INVALID_TITLE", "Title is required"))
            fields = {**fields, "title": title}

        if "completed" in fields and not isinstance(fields["completed"], bool):
            return Return.err(Error("INVALID_FIELDS", "completed must be true or false"))

        async with self.uow:
            todo = await self.uow.todos.get_for_owner(todo_id, owner_id)
            if todo is None:
                return Return.err(_todo_not_found())

            for name, value in fields.items():
                setattr(todo, name, value)
            todo = await self.uow.todos.update(todo)
            await self.uow.commit()

            event = ChangeEvent.updated(todo)

        await self.feed.publish(owner_id, event)
        return Return.ok(event.new)

    async def delete(self, owner_id: UUID, todo_id: UUID) -> Result[DeleteTodoResponse]:
        async with self.uow:
            todo = await self.uow.todos.get_for_owner(todo_id, owner_id)
            if todo is None:
                return Return.err(_todo_not_found())

            await self.uow.todos.delete(todo)
            await self.uow.commit()

        await self.feed.publish(owner_id, ChangeEvent.removed(todo_id, owner_id))
        return Return.ok(DeleteTodoResponse(id=str(todo_id), deleted=True))
