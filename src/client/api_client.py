"""
HTTP client for a signed-in session.

Implements the reconciler's store port over the todo API and turns the
server-sent change stream back into ChangeEvent values.
"""

import json
import logging
from datetime import date
from typing import Any, AsyncIterator, Dict, List, Optional, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit
from uuid import UUID

import httpx

from src.client.reconciler import ITodoStore
from src.domain.entities import ChangeEvent, TodoSnapshot
from src.domain.errors import (
    AuthError,
    AuthorizationError,
    InvalidInputError,
    NotFoundError,
    StoreError,
    TaskGateError,
)
from src.domain.policies import BLOCKED_MARKER, BLOCKED_NOTICE

logger = logging.getLogger(__name__)


def pop_block_notice(url: str) -> Tuple[str, Optional[str]]:
    """
    Consume the block marker from a login URL.

    Returns the URL without the marker and the notice to show, or None when
    the marker was absent. Showing the returned URL afterwards never shows
    the notice a second time.
    """
    parts = urlsplit(url)
    query = parse_qsl(parts.query, keep_blank_values=True)
    kept = [(key, value) for key, value in query if key != BLOCKED_MARKER]
    blocked = any(key == BLOCKED_MARKER and value == "true" for key, value in query)

    cleaned = urlunsplit(parts._replace(query=urlencode(kept)))
    return cleaned, BLOCKED_NOTICE if blocked else None


def _error_from_response(response: httpx.Response) -> TaskGateError:
    try:
        payload = response.json().get("error") or {}
    except (ValueError, AttributeError):
        payload = {}

    code = payload.get("code")
    message = payload.get("message") or f"Request failed with status {response.status_code}"

    if response.status_code == 401:
        return AuthError(message, code=code)
    if response.status_code == 403:
        if code == "USER_BLOCKED":
            return AuthError(message, code=code)
        return AuthorizationError(message, code=code)
    if response.status_code == 404:
        return NotFoundError(message, code=code)
    if response.status_code in (400, 409, 422):
        return InvalidInputError(message, code=code)
    return StoreError(message, code=code)


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    raise _error_from_response(response)


async def parse_sse(lines: AsyncIterator[str]) -> AsyncIterator[ChangeEvent]:
    """Decode `event:`/`data:` frames into change events; comments are skipped"""
    data: List[str] = []
    async for line in lines:
        line = line.rstrip("\r")
        if not line:
            if data:
                yield ChangeEvent.model_validate(json.loads("\n".join(data)))
                data = []
            continue
        if line.startswith(":"):
            continue
        field, _, value = line.partition(":")
        if field == "data":
            data.append(value[1:] if value.startswith(" ") else value)
    if data:
        yield ChangeEvent.model_validate(json.loads("\n".join(data)))


class SseSubscription:
    """One open change stream; close() ends the HTTP request"""

    def __init__(self, http: httpx.AsyncClient, path: str, headers: Dict[str, str]):
        self.http = http
        self.path = path
        self.headers = headers
        self._events = None
        self.closed = False

    def __aiter__(self) -> AsyncIterator[ChangeEvent]:
        if self._events is None:
            self._events = self._stream()
        return self._events

    async def _stream(self) -> AsyncIterator[ChangeEvent]:
        async with self.http.stream("GET", self.path, headers=self.headers) as response:
            if not response.is_success:
                await response.aread()
                raise _error_from_response(response)
            async for event in parse_sse(response.aiter_lines()):
                yield event

    async def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        if self._events is not None:
            await self._events.aclose()


class TaskApiClient(ITodoStore):
    """
    Async client for one user's session.

    The session token from login() is sent as a bearer token on every call.
    Failures raise the TaskGateError subclass matching the response status.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        api_prefix: str = "/api",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        token: Optional[str] = None,
    ):
        self.api_prefix = api_prefix
        self.token = token
        self.http = httpx.AsyncClient(base_url=base_url, transport=transport)
        self._subscriptions: List[SseSubscription] = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        await self.close_subscriptions()
        await self.http.aclose()

    async def close_subscriptions(self) -> None:
        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            await subscription.close()

    def _headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self.http.request(method, path, headers=self._headers(), **kwargs)
        except httpx.HTTPError as exc:
            raise StoreError(f"{method} {path} failed: {exc}") from exc
        _raise_for_status(response)
        return response

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        response = await self._request(
            "POST", "/auth/login", json={"email": email, "password": password}
        )
        body = response.json()
        self.token = body["access_token"]
        return body

    async def logout(self) -> None:
        """Sign out and close every change stream opened with this session"""
        try:
            await self._request("POST", "/auth/logout")
        finally:
            self.token = None
            await self.close_subscriptions()

    async def list_todos(self) -> List[TodoSnapshot]:
        response = await self._request("GET", f"{self.api_prefix}/todos")
        return [TodoSnapshot.model_validate(t) for t in response.json()["todos"]]

    async def create_todo(
        self, title: str, description: Optional[str] = None, due_date: Optional[date] = None
    ) -> TodoSnapshot:
        payload = {
            "title": title,
            "description": description,
            "due_date": due_date.isoformat() if due_date else None,
        }
        response = await self._request("POST", f"{self.api_prefix}/todos", json=payload)
        return TodoSnapshot.model_validate(response.json())

    async def update_todo(self, todo_id: UUID, fields: Dict[str, Any]) -> TodoSnapshot:
        payload = {
            name: value.isoformat() if isinstance(value, date) else value
            for name, value in fields.items()
        }
        response = await self._request(
            "PATCH", f"{self.api_prefix}/todos/{todo_id}", json=payload
        )
        return TodoSnapshot.model_validate(response.json())

    async def delete_todo(self, todo_id: UUID) -> None:
        await self._request("DELETE", f"{self.api_prefix}/todos/{todo_id}")

    def subscribe(self, owner_id: UUID) -> SseSubscription:
        """
        Open the owner's change stream.

        The server scopes the stream by the session, so owner_id only has to
        match the signed-in user.
        """
        logger.debug(f"Subscribing to changes for {owner_id}")
        subscription = SseSubscription(
            self.http, f"{self.api_prefix}/todos/changes", self._headers()
        )
        self._subscriptions.append(subscription)
        return subscription
