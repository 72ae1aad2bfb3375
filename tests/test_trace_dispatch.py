import pytest

from grid_dispatch.api import create_api
from grid_dispatch.dispatch_service import DispatchCoordinator
from grid_dispatch.trace_dispatch import build_parser, parse_grid, trace


@pytest.fixture
async def api_url(aiohttp_server):
    server = await aiohttp_server(create_api(DispatchCoordinator()))
    return str(server.make_url("")).rstrip("/")


def test_parse_grid_skips_blank_lines():
    assert parse_grid("S.T\n\n.XD  \n") == [["S", ".", "T"], [".", "X", "D"]]


def test_parser_collects_incidents():
    args = build_parser().parse_args(
        ["grid.txt", "--start", "1,2", "--incident", "5,0,2,2", "--incident", "1,60,0,2"])
    assert args.start == {"r": 1, "c": 2}
    assert args.incident == [
        {"severity": 5, "waitingTime": 0, "location": {"r": 2, "c": 2}},
        {"severity": 1, "waitingTime": 60, "location": {"r": 0, "c": 2}},
    ]


async def test_trace_dispatches_highest_priority(api_url, capsys):
    grid = parse_grid("S..\n...\n..D\n")
    incidents = [
        {"severity": 5, "waitingTime": 0, "location": {"r": 0, "c": 2}},
        {"severity": 1, "waitingTime": 60, "location": {"r": 2, "c": 2}},
    ]

    result = await trace(api_url, grid, {"r": 0, "c": 0}, incidents)

    assert result["dispatchedCall"]["callId"] == "E002"
    assert result["cost"] == 4
    assert len(result["path"]) == 5
    assert [inc["callId"] for inc in result["remainingQueue"]] == ["E001"]
    out = capsys.readouterr().out
    assert "TRACE SUMMARY" in out
    assert "Dispatched:     E002 (priority 70)" in out


async def test_trace_reports_unreachable(api_url, capsys):
    grid = parse_grid("SXD\n")
    incidents = [{"severity": 2, "waitingTime": 0, "location": {"r": 0, "c": 2}}]

    result = await trace(api_url, grid, {"r": 0, "c": 0}, incidents)

    assert result["path"] == []
    assert result["cost"] is None
    assert "NONE (unreachable)" in capsys.readouterr().out


async def test_trace_with_empty_queue(api_url, capsys):
    result = await trace(api_url, parse_grid("S.\n"), {"r": 0, "c": 0}, [])

    assert result == {"message": "No calls in queue", "completed": True}
    assert "Queue was empty, nothing dispatched" in capsys.readouterr().out
