#!/usr/bin/env python3
"""
One-shot dispatch trace — reports incidents to a running server, asks for a
dispatch and prints the route plus timing for every step.

    grid-dispatch-trace grid.txt --start 0,0 --incident 5,0,2,2 --incident 1,60,0,2

The grid file holds one row per line, one character per cell.
"""

import argparse
import asyncio
import os
import time

import aiohttp

DISPATCH_API = os.environ.get("GRID_DISPATCH_API_URL", "http://localhost:3000")


def elapsed(t0):
    return f"{time.time() - t0:.2f}s"


def parse_grid(text: str) -> list[list[str]]:
    """One row per non-blank line; trailing whitespace is ignored."""
    return [list(line.rstrip()) for line in text.splitlines() if line.strip()]


def parse_coord(value: str) -> dict:
    row, col = (int(part) for part in value.split(","))
    return {"r": row, "c": col}


def parse_incident(value: str) -> dict:
    severity, wait, row, col = (int(part) for part in value.split(","))
    return {"severity": severity, "waitingTime": wait, "location": {"r": row, "c": col}}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Trace one dispatch against a grid-dispatch server")
    parser.add_argument("grid", help="grid file, one row per line")
    parser.add_argument("--start", type=parse_coord, default={"r": 0, "c": 0},
                        help="depot as row,col (default 0,0)")
    parser.add_argument("--incident", type=parse_incident, action="append", default=[],
                        help="severity,wait,row,col (repeatable)")
    parser.add_argument("--api", default=DISPATCH_API, help="server base URL")
    return parser


async def trace(api: str, grid: list[list[str]], start: dict, incidents: list[dict]) -> dict:
    t0 = time.time()
    print(f"{'=' * 70}")
    print(f"DISPATCH TRACE — {time.strftime('%Y-%m-%d %H:%M:%S UTC', time.gmtime())}")
    print(f"{'=' * 70}")

    async with aiohttp.ClientSession() as session:
        for number, body in enumerate(incidents, 1):
            print(f"\n[T+{elapsed(t0)}] STEP {number}: POST /api/add-call")
            async with session.post(f"{api}/api/add-call", json=body) as resp:
                resp.raise_for_status()
                added = await resp.json()
            inc = added["incident"]
            print(f"  {inc['callId']} at ({inc['location']['r']}, {inc['location']['c']}) "
                  f"| Priority {inc['priority']} | queue length {len(added['queue'])}")

        print(f"\n[T+{elapsed(t0)}] DISPATCH: POST /api/dispatch-next")
        t_dispatch = time.time()
        payload = {
            "grid": grid,
            "width": max((len(row) for row in grid), default=0),
            "height": len(grid),
            "start": start,
        }
        async with session.post(f"{api}/api/dispatch-next", json=payload) as resp:
            resp.raise_for_status()
            result = await resp.json()
        print(f"  Response in {time.time() - t_dispatch:.3f}s")

    print(f"\n{'=' * 70}")
    print("TRACE SUMMARY")
    print(f"{'=' * 70}")
    if result.get("completed"):
        print("  Queue was empty, nothing dispatched")
        return result

    call = result["dispatchedCall"]
    print(f"  Dispatched:     {call['callId']} (priority {call['priority']})")
    if result["path"]:
        print(f"  Path:           {' -> '.join(result['path'])}")
        print(f"  Cost:           {result['cost']}")
    else:
        print("  Path:           NONE (unreachable)")
    print(f"  Still queued:   {len(result['remainingQueue'])}")
    print(f"\n  Total trace time: {elapsed(t0)}")
    return result


def main(argv=None):
    args = build_parser().parse_args(argv)
    with open(args.grid, "r", encoding="utf-8") as f:
        grid = parse_grid(f.read())
    asyncio.run(trace(args.api, grid, args.start, args.incident))


if __name__ == "__main__":
    main()
