import asyncio
import logging
from datetime import date
from typing import AsyncIterator, Awaitable, Callable, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.api.utils.sse import KEEPALIVE, format_sse
from src.adapter.services.identity_provider import LocalIdentityProvider
from src.app.services.change_feed import IChangeFeed
from src.app.services.identity_provider import AuthSession
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.todos import (
    CreateTodoCommand,
    DeleteTodoResponse,
    ManageTodosUseCase,
    TodoListResponse,
)
from src.app.use_cases.gate import LiveSessionUseCase
from src.depends import (
    get_change_feed,
    get_current_session,
    get_unit_of_work,
    open_unit_of_work,
)
from src.domain.entities import ChangeEvent, TodoSnapshot

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{ApplicationConfig.API_PREFIX}/todos", tags=["Todos"])

TODO_ERRORS = {
    "INVALID_TITLE": status.HTTP_400_BAD_REQUEST,
    "INVALID_FIELDS": status.HTTP_400_BAD_REQUEST,
    "TODO_NOT_FOUND": status.HTTP_404_NOT_FOUND,
}


class CreateTodoRequest(BaseModel):
    title: str = Field(..., max_length=500, description="Required, non-empty after trimming")
    description: Optional[str] = Field(None, description="Free text")
    due_date: Optional[date] = Field(None, description="Calendar day, no time of day")


class UpdateTodoRequest(BaseModel):
    """Partial update: only the fields sent are changed"""

    title: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    due_date: Optional[date] = None
    completed: Optional[bool] = None


@router.get("", status_code=status.HTTP_200_OK, response_model=TodoListResponse)
async def list_todos(
    current: AuthSession = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    feed: IChangeFeed = Depends(get_change_feed),
):
    """Own todos, newest first"""
    result = await ManageTodosUseCase(uow, feed).list_for_owner(current.user_id)
    if result.is_err():
        raise_for_error(result.error, TODO_ERRORS)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TodoSnapshot)
async def create_todo(
    request: CreateTodoRequest,
    current: AuthSession = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    feed: IChangeFeed = Depends(get_change_feed),
):
    """
    Create Todo

    Raises:
        - 400 Bad Request: INVALID_TITLE
    """
    command = CreateTodoCommand(
        title=request.title, description=request.description, due_date=request.due_date
    )
    result = await ManageTodosUseCase(uow, feed).create(current.user_id, command)
    if result.is_err():
        raise_for_error(result.error, TODO_ERRORS)
    return result.value


@router.patch("/{todo_id}", status_code=status.HTTP_200_OK, response_model=TodoSnapshot)
async def update_todo(
    todo_id: UUID,
    request: UpdateTodoRequest,
    current: AuthSession = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    feed: IChangeFeed = Depends(get_change_feed),
):
    """
    Partially Update Todo

    Raises:
        - 400 Bad Request: INVALID_TITLE, INVALID_FIELDS
        - 404 Not Found: TODO_NOT_FOUND (also for other users' todos)
    """
    fields = request.model_dump(exclude_unset=True)
    result = await ManageTodosUseCase(uow, feed).update(current.user_id, todo_id, fields)
    if result.is_err():
        raise_for_error(result.error, TODO_ERRORS)
    return result.value


@router.delete("/{todo_id}", status_code=status.HTTP_200_OK, response_model=DeleteTodoResponse)
async def delete_todo(
    todo_id: UUID,
    current: AuthSession = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    feed: IChangeFeed = Depends(get_change_feed),
):
    """
    Delete Todo

    Raises:
        - 404 Not Found: TODO_NOT_FOUND
    """
    result = await ManageTodosUseCase(uow, feed).delete(current.user_id, todo_id)
    if result.is_err():
        raise_for_error(result.error, TODO_ERRORS)
    return result.value


async def _next_event(events: AsyncIterator[ChangeEvent]) -> Optional[ChangeEvent]:
    try:
        return await events.__anext__()
    except StopAsyncIteration:
        return None


async def stream_changes(
    feed: IChangeFeed,
    owner_id: UUID,
    session_alive: Callable[[], Awaitable[bool]],
    keepalive_seconds: float = ApplicationConfig.SSE_KEEPALIVE_SECONDS,
):
    """
    SSE body for one session.

    The subscription is opened on first iteration and closed however the
    stream ends. Before every frame, event or keepalive, the session is
    checked again; a revoked session or a blocked/deleted owner ends the
    stream.
    """
    subscription = feed.subscribe(owner_id)
    events = subscription.__aiter__()
    pending: Optional[asyncio.Task] = None
    try:
        yield KEEPALIVE
        while True:
            if pending is None:
                pending = asyncio.create_task(_next_event(events))
            done, _ = await asyncio.wait({pending}, timeout=keepalive_seconds)

            frame = KEEPALIVE
            if done:
                event = pending.result()
                pending = None
                if event is None:
                    return
                frame = format_sse(event)

            try:
                alive = await session_alive()
            except Exception:
                logger.exception(f"Session check failed, ending change stream for {owner_id}")
                return
            if not alive:
                logger.info(f"Session ended, closing change stream for {owner_id}")
                return

            yield frame
    finally:
        if pending is not None:
            pending.cancel()
        await subscription.close()


@router.get("/changes")
async def todo_changes(
    request: Request,
    current: AuthSession = Depends(get_current_session),
    feed: IChangeFeed = Depends(get_change_feed),
):
    """
    Live Change Feed

    Server-Sent Events stream of created/updated/removed events for the
    caller's own todos. Each frame's event name is the change kind and its
    data is the JSON change event. The stream ends once the session is
    signed out, revoked or its owner blocked.
    """
    app = request.app

    async def session_alive() -> bool:
        async with open_unit_of_work(app) as uow:
            return await LiveSessionUseCase(uow, LocalIdentityProvider(uow)).execute(
                current.token
            )

    return StreamingResponse(
        stream_changes(feed, current.user_id, session_alive),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
