import asyncio
from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

import httpx

from tasktracker.client.api import TaskAPIClient
from tasktracker.client.task_list import EMPTY_STATE_ACTION, ListView, TaskList

TOMORROW = date.today() + timedelta(days=1)


def _task(title: str, minutes_ago: int = 0) -> dict:
    return {
        "id": str(uuid4()),
        "title": title,
        "description": "",
        "priority": "Medium",
        "due_date": TOMORROW.isoformat(),
        "status": "Pending",
        "created_at": (datetime.now(timezone.utc) - timedelta(minutes=minutes_ago)).isoformat(),
    }


class ScriptedAPI:
    """Answers successive GETs from ``responses``; an Exception entry is raised."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.gets = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.gets += 1
        nxt = self.responses.pop(0)
        if isinstance(nxt, Exception):
            raise nxt
        if isinstance(nxt, httpx.Response):
            return nxt
        return httpx.Response(200, json=nxt)


def _list(handler) -> TaskList:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test")
    return TaskList(TaskAPIClient(http=http))


def test_loading_until_first_fetch_completes():
    tasks = _list(ScriptedAPI([]))

    assert tasks.view is ListView.LOADING
    assert tasks.items() == []


def test_empty_state_opens_dialog():
    tasks = _list(ScriptedAPI([]))

    asyncio.run(tasks.mount())

    assert tasks.view is ListView.EMPTY
    assert tasks.items() == []
    assert EMPTY_STATE_ACTION == "Create your first task"
    assert tasks.is_dialog_open is False
    tasks.open_dialog()
    assert tasks.is_dialog_open is True


def test_grid_items_keyed_by_id_with_refresh_callback():
    rows = [_task("newer"), _task("older", minutes_ago=5)]
    tasks = _list(ScriptedAPI(rows))

    asyncio.run(tasks.mount())

    assert tasks.view is ListView.GRID
    items = tasks.items()
    assert [str(i.key) for i in items] == [r["id"] for r in rows]
    assert [i.task.title for i in items] == ["newer", "older"]
    assert all(i.on_update == tasks.refresh for i in items)


def test_failed_fetch_keeps_previous_tasks():
    rows = [_task("kept")]
    api = ScriptedAPI(rows, httpx.ConnectError("store unreachable"))
    tasks = _list(api)

    async def scenario():
        await tasks.mount()
        await tasks.refresh()

    asyncio.run(scenario())

    assert api.gets == 2
    assert [t.title for t in tasks.tasks] == ["kept"]
    assert tasks.view is ListView.GRID
    assert tasks.is_loading is False
    assert tasks.fetch_error == "store unreachable"


def test_failed_first_fetch_shows_empty_list():
    api = ScriptedAPI(httpx.Response(500, json={"error": "no such table: tasks"}))
    tasks = _list(api)

    asyncio.run(tasks.mount())

    assert tasks.tasks == []
    assert tasks.view is ListView.EMPTY
    assert "no such table" in tasks.fetch_error


def test_successful_fetch_clears_previous_error():
    tasks = _list(ScriptedAPI(httpx.ConnectError("down"), [_task("a")]))

    async def scenario():
        await tasks.mount()
        assert tasks.fetch_error == "down"
        await tasks.refresh()

    asyncio.run(scenario())

    assert tasks.fetch_error is None


def test_close_cancels_in_flight_fetch():
    started = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        started.set()
        await asyncio.sleep(3600)
        return httpx.Response(200, json=[])  # pragma: no cover

    tasks = _list(handler)

    async def scenario():
        mount = asyncio.create_task(tasks.mount())
        await started.wait()
        tasks.close()
        await mount

    asyncio.run(asyncio.wait_for(scenario(), timeout=5))

    assert tasks.tasks == []
    assert tasks.is_loading is False


def test_newer_refresh_supersedes_running_one():
    first_started = asyncio.Event()
    calls = []

    async def handler(request: httpx.Request) -> httpx.Response:
        calls.append(len(calls))
        if len(calls) == 1:
            first_started.set()
            await asyncio.sleep(3600)
        return httpx.Response(200, json=[_task("fresh")])

    tasks = _list(handler)

    async def scenario():
        stale = asyncio.create_task(tasks.refresh())
        await first_started.wait()
        await tasks.refresh()
        await stale

    asyncio.run(asyncio.wait_for(scenario(), timeout=5))

    assert [t.title for t in tasks.tasks] == ["fresh"]
    assert tasks.is_loading is False


def test_creating_through_hosted_form_closes_dialog_and_refetches(app):
    async def scenario():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
            tasks = TaskList(TaskAPIClient(http=http))
            await tasks.mount()
            assert tasks.view is ListView.EMPTY

            tasks.open_dialog()
            tasks.form.title = "Buy milk"
            tasks.form.priority = "Low"
            tasks.form.due_date = TOMORROW
            assert await tasks.form.submit() is True
            return tasks

    tasks = asyncio.run(scenario())

    assert tasks.is_dialog_open is False
    assert tasks.view is ListView.GRID
    [task] = tasks.tasks
    assert (task.title, task.priority, task.status, task.due_date) == (
        "Buy milk", "Low", "Pending", TOMORROW
    )
    assert tasks.toaster.last.message == "Task created successfully"
