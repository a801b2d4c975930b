import json
from datetime import datetime
from uuid import uuid4

import httpx
import pytest

from src.api.utils.sse import KEEPALIVE, format_sse
from src.client.api_client import TaskApiClient, parse_sse, pop_block_notice
from src.domain.entities import ChangeEvent, ChangeKind, TodoSnapshot
from src.domain.errors import AuthError, AuthorizationError, InvalidInputError, StoreError


def make_snapshot():
    return TodoSnapshot(
        id=uuid4(), user_id=uuid4(), title="Buy milk", created_at=datetime(2024, 5, 17, 8, 0)
    )


async def lines_of(text):
    for line in text.split("\n"):
        yield line


def test_pop_block_notice_consumes_marker():
    url, notice = pop_block_notice("/login?blocked=true")

    assert notice == "You have been banned by an admin. Please contact support."
    assert url == "/login"
    assert pop_block_notice(url) == ("/login", None)


def test_pop_block_notice_keeps_other_params():
    url, notice = pop_block_notice("https://app.example.com/login?next=%2Fdashboard&blocked=true")

    assert notice is not None
    assert url == "https://app.example.com/login?next=%2Fdashboard"


def test_pop_block_notice_ignores_false_marker():
    url, notice = pop_block_notice("/login?blocked=false")

    assert notice is None
    assert url == "/login"


@pytest.mark.asyncio
async def test_parse_sse_reads_server_frames():
    created = ChangeEvent.created(make_snapshot())
    removed = ChangeEvent.removed(uuid4())
    stream = KEEPALIVE + format_sse(created) + KEEPALIVE + format_sse(removed)

    events = [e async for e in parse_sse(lines_of(stream))]

    assert [e.kind for e in events] == [ChangeKind.created, ChangeKind.removed]
    assert events[0].new == created.new
    assert events[1].todo_id == removed.todo_id


def make_client(handler):
    return TaskApiClient(base_url="http://test", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_login_stores_token_for_later_calls():
    snapshot = make_snapshot()
    seen = {}

    def handler(request: httpx.Request):
        if request.url.path == "/auth/login":
            return httpx.Response(200, json={"access_token": "tok", "user_id": "u"})
        seen["authorization"] = request.headers.get("authorization")
        return httpx.Response(201, content=snapshot.model_dump_json())

    async with make_client(handler) as client:
        await client.login("user@example.com", "secret1")
        created = await client.create_todo("Buy milk")

    assert seen["authorization"] == "Bearer tok"
    assert created == snapshot


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code,code,expected",
    [
        (401, "UNAUTHORIZED", AuthError),
        (403, "USER_BLOCKED", AuthError),
        (403, "FORBIDDEN", AuthorizationError),
        (400, "INVALID_TITLE", InvalidInputError),
        (500, "INTERNAL", StoreError),
    ],
)
async def test_error_responses_map_to_taxonomy(status_code, code, expected):
    def handler(request):
        body = {"error": {"code": code, "message": "nope"}}
        return httpx.Response(status_code, content=json.dumps(body))

    async with make_client(handler) as client:
        with pytest.raises(expected) as exc_info:
            await client.update_todo(uuid4(), {"title": "x"})

    assert exc_info.value.code == code


@pytest.mark.asyncio
async def test_subscription_yields_change_events():
    event = ChangeEvent.created(make_snapshot())

    def handler(request):
        assert request.url.path == "/api/todos/changes"
        return httpx.Response(
            200,
            content=(KEEPALIVE + format_sse(event)).encode(),
            headers={"content-type": "text/event-stream"},
        )

    async with make_client(handler) as client:
        subscription = client.subscribe(event.new.user_id)
        received = [e async for e in subscription]
        await subscription.close()

    assert [e.todo_id for e in received] == [event.todo_id]


@pytest.mark.asyncio
async def test_logout_closes_open_subscriptions():
    first, second = ChangeEvent.created(make_snapshot()), ChangeEvent.created(make_snapshot())
    paths = []

    def handler(request):
        paths.append(request.url.path)
        if request.url.path == "/auth/logout":
            return httpx.Response(200, json={"message": "Logged out"})
        return httpx.Response(
            200,
            content=(format_sse(first) + format_sse(second)).encode(),
            headers={"content-type": "text/event-stream"},
        )

    async with make_client(handler) as client:
        client.token = "tok"
        streaming = client.subscribe(first.new.user_id)
        idle = client.subscribe(first.new.user_id)
        events = streaming.__aiter__()
        assert (await events.__anext__()).todo_id == first.todo_id

        await client.logout()

        assert streaming.closed and idle.closed
        assert client.token is None
        with pytest.raises(StopAsyncIteration):
            await events.__anext__()

    assert paths == ["/api/todos/changes", "/auth/logout"]
