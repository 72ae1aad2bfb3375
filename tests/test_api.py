import pytest

from grid_dispatch.api import create_api
from grid_dispatch.dispatch_service import DispatchCoordinator

OPEN_GRID = [["."] * 3 for _ in range(3)]


@pytest.fixture
async def client(aiohttp_client):
    return await aiohttp_client(create_api(DispatchCoordinator()))


async def test_add_call_returns_sorted_queue(client):
    await client.post("/api/add-call", json={"severity": 5, "waitingTime": 0, "location": {"r": 0, "c": 1}})
    resp = await client.post("/api/add-call",
                             json={"severity": 1, "waitingTime": 60, "location": {"row": 2, "col": 2}})
    assert resp.status == 200
    assert resp.headers["Access-Control-Allow-Origin"] == "*"
    body = await resp.json()
    assert body["message"] == "Call Added"
    assert body["incident"]["callId"] == "E002"
    assert [inc["priority"] for inc in body["queue"]] == [70, 50]


async def test_dispatch_next_on_empty_queue(client):
    resp = await client.post("/api/dispatch-next",
                             json={"grid": OPEN_GRID, "width": 3, "height": 3, "start": {"r": 0, "c": 0}})
    assert resp.status == 200
    assert await resp.json() == {"message": "No calls in queue", "completed": True}


async def test_dispatch_next_returns_path(client):
    await client.post("/api/add-call", json={"severity": 2, "waitingTime": 0, "location": {"r": 2, "c": 2}})
    await client.post("/api/add-call", json={"severity": 1, "waitingTime": 0, "location": {"r": 0, "c": 1}})

    resp = await client.post("/api/dispatch-next",
                             json={"grid": OPEN_GRID, "width": 3, "height": 3, "start": {"r": 0, "c": 0}})
    body = await resp.json()

    assert body["cost"] == 4
    assert len(body["path"]) == 5
    assert body["dispatchedCall"]["callId"] == "E001"
    assert [inc["callId"] for inc in body["remainingQueue"]] == ["E002"]


async def test_unreachable_cost_is_null(client):
    grid = [[".", "X", "D"]]
    await client.post("/api/add-call", json={"severity": 2, "waitingTime": 0, "location": {"r": 0, "c": 2}})
    resp = await client.post("/api/dispatch-next",
                             json={"grid": grid, "width": 3, "height": 1, "start": {"r": 0, "c": 0}})
    body = await resp.json()
    assert body["path"] == []
    assert body["cost"] is None


async def test_queue_status_and_clear(client):
    await client.post("/api/add-call", json={"severity": 2, "waitingTime": 0, "location": {"r": 0, "c": 2}})
    queue = await (await client.get("/api/queue")).json()
    assert len(queue) == 1
    status = await (await client.get("/api/status")).json()
    assert status == {"pending": 1, "dispatched_total": 0}
    cleared = await (await client.post("/api/clear")).json()
    assert cleared["pending"] == 0


@pytest.mark.parametrize("body", [
    {"severity": "high", "waitingTime": 0, "location": {"r": 0, "c": 0}},
    {"severity": 1, "location": {"r": 0, "c": 0}},
    {"severity": 1, "waitingTime": 0, "location": {"x": 0}},
    [1, 2, 3],
])
async def test_add_call_rejects_bad_body(client, body):
    resp = await client.post("/api/add-call", json=body)
    assert resp.status == 400
    assert (await resp.json())["ok"] is False


async def test_rejects_invalid_json(client):
    resp = await client.post("/api/dispatch-next", data="{not json",
                             headers={"Content-Type": "application/json"})
    assert resp.status == 400


async def test_options_preflight(client):
    resp = await client.options("/api/dispatch-next")
    assert resp.status == 200
    assert "POST" in resp.headers["Access-Control-Allow-Methods"]
