"""
Live Session Reconciler

Owns one session's in-memory todo list (newest created first) and keeps it in
step with local actions and with change events pushed by the server.

State transitions live in the pure ``reduce`` function; ``TodoReconciler`` is
the thin shim that talks to the store, calls ``reduce`` and keeps the result.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from datetime import date
from typing import Any, Dict, List, Optional
from uuid import UUID

from src.domain import projections
from src.domain.entities import ChangeEvent, ChangeKind, TodoSnapshot
from src.domain.errors import InvalidInputError

logger = logging.getLogger(__name__)


class ITodoStore(ABC):
    """Remote side of the reconciler. Failures raise TaskGateError subclasses."""

    @abstractmethod
    async def create_todo(
        self, title: str, description: Optional[str] = None, due_date: Optional[date] = None
    ) -> TodoSnapshot:
        pass

    @abstractmethod
    async def update_todo(self, todo_id: UUID, fields: Dict[str, Any]) -> TodoSnapshot:
        pass

    @abstractmethod
    async def delete_todo(self, todo_id: UUID) -> None:
        pass


def _index_of(todos: List[TodoSnapshot], todo_id: UUID) -> int:
    for index, todo in enumerate(todos):
        if todo.id == todo_id:
            return index
    return -1


def _insert_by_created(todos: List[TodoSnapshot], todo: TodoSnapshot) -> List[TodoSnapshot]:
    index = _index_of(todos, todo.id)
    if index >= 0:
        return todos[:index] + [todo] + todos[index + 1:]

    position = len(todos)
    for i, existing in enumerate(todos):
        if existing.created_at <= todo.created_at:
            position = i
            break
    return todos[:position] + [todo] + todos[position:]


def merge_fields(todo: TodoSnapshot, fields: Dict[str, Any]) -> TodoSnapshot:
    """Copy of todo with only the given fields changed"""
    return todo.model_copy(update=fields)


def reduce(todos: List[TodoSnapshot], event: ChangeEvent) -> List[TodoSnapshot]:
    """
    Apply one change event to a todo list and return the new list.

    - created: replace in place if the id is known, else insert by creation
      time (newest first)
    - updated: replace wholesale if the id is known, else no-op
    - removed: drop if the id is known, else no-op

    The input list is never mutated.
    """
    if event.kind == ChangeKind.created:
        return _insert_by_created(list(todos), event.new)

    index = _index_of(todos, event.todo_id)
    if index < 0:
        return list(todos)

    if event.kind == ChangeKind.updated:
        return todos[:index] + [event.new] + todos[index + 1:]

    return todos[:index] + todos[index + 1:]


class TodoReconciler:
    """
    One instance per signed-in client session.

    Local actions go to the store first and touch the list only on success,
    so a failed call leaves the state as it was and the error propagates.
    """

    def __init__(self, store: ITodoStore, todos: Optional[List[TodoSnapshot]] = None):
        self.store = store
        self.todos: List[TodoSnapshot] = list(todos or [])

    async def apply_local_create(
        self, title: str, description: Optional[str] = None, due_date: Optional[date] = None
    ) -> TodoSnapshot:
        title = (title or "").strip()
        if not title:
            raise InvalidInputError("Title is required", code="INVALID_TITLE")

        todo = await self.store.create_todo(title, description, due_date)
        self.todos = _insert_by_created(self.todos, todo)
        return todo

    async def apply_local_update(self, todo_id: UUID, fields: Dict[str, Any]) -> None:
        await self.store.update_todo(todo_id, fields)

        index = _index_of(self.todos, todo_id)
        if index < 0:
            # Removed concurrently
            return
        todos = list(self.todos)
        todos[index] = merge_fields(todos[index], fields)
        self.todos = todos

    async def apply_local_delete(self, todo_id: UUID) -> None:
        await self.store.delete_todo(todo_id)
        self.todos = [t for t in self.todos if t.id != todo_id]

    async def apply_local_toggle(self, todo_id: UUID, current_completed: bool) -> None:
        await self.apply_local_update(todo_id, {"completed": not current_completed})

    def on_change_event(self, event: ChangeEvent) -> None:
        self.todos = reduce(self.todos, event)

    def today(self, today: Optional[date] = None) -> List[TodoSnapshot]:
        return projections.due_today(self.todos, today)

    def completed(self) -> List[TodoSnapshot]:
        return projections.completed(self.todos)

    def pending(self) -> List[TodoSnapshot]:
        return projections.pending(self.todos)

    async def _pump(self, subscription) -> None:
        async for event in subscription:
            self.on_change_event(event)

    @asynccontextmanager
    async def subscribe(self, feed, owner_id: UUID):
        """
        Merge the owner's change events for the duration of the block.

        ``feed`` is anything with ``subscribe(owner_id)`` returning an async
        iterable with ``close()``: the server-side change feed or
        ``TaskApiClient``. The pump task is cancelled and the handle closed
        however the block is left.

        A pump failure is logged as soon as it happens. It is re-raised on a
        clean exit from the block but never replaces an exception already
        leaving the block.
        """
        subscription = feed.subscribe(owner_id)
        pump = asyncio.create_task(self._pump(subscription))
        pump.add_done_callback(_report_pump_failure)
        body_failed = False
        try:
            yield self
        except BaseException:
            body_failed = True
            raise
        finally:
            pump.cancel()
            try:
                await pump
            except asyncio.CancelledError:
                pass
            except Exception:
                if not body_failed:
                    raise
            finally:
                await subscription.close()
            logger.debug(f"Change feed subscription for {owner_id} closed")


def _report_pump_failure(pump: asyncio.Task) -> None:
    if pump.cancelled():
        return
    exc = pump.exception()
    if exc is not None:
        logger.error(f"Change feed pump stopped: {exc!r}")
