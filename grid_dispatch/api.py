#!/usr/bin/env python3
"""
REST API for the grid dispatch engine (aiohttp).

  POST /api/add-call        report an incident
  POST /api/dispatch-next   dispatch the top incident over the posted grid
  GET  /api/queue           pending incidents, highest priority first
  GET  /api/status          queue counters
  POST /api/clear           drop every pending incident

Request bodies are validated with pydantic; anything malformed is a 400.
"""

import asyncio
import json
import logging
import math
import os
import sys

from aiohttp import web
from pydantic import AliasChoices, BaseModel, Field, ValidationError

from .dispatch_service import DispatchCoordinator, QueueEmpty

# --- Config ---
HOST = os.environ.get("GRID_DISPATCH_HOST", "0.0.0.0")
PORT = int(os.environ.get("GRID_DISPATCH_PORT", "3000"))
LOG_LEVEL = os.environ.get("GRID_DISPATCH_LOG_LEVEL", "INFO").upper()

logger = logging.getLogger(__name__)

COORDINATOR_KEY = web.AppKey("coordinator", DispatchCoordinator)


class Location(BaseModel):
    row: int = Field(validation_alias=AliasChoices("r", "row"))
    col: int = Field(validation_alias=AliasChoices("c", "col"))

    def as_tuple(self) -> tuple[int, int]:
        return (self.row, self.col)


class IncidentReport(BaseModel):
    severity: int
    waiting_time: int = Field(validation_alias=AliasChoices("waitingTime", "waiting_time"))
    location: Location


class DispatchRequest(BaseModel):
    grid: list[list[str]]
    width: int = Field(ge=0)
    height: int = Field(ge=0)
    start: Location


def _cost_to_json(cost: float):
    # JSON has no Infinity; an unreachable cost goes out as null
    return None if math.isinf(cost) else cost


def cors_response(data, status=200):
    resp = web.json_response(data, status=status)
    resp.headers["Access-Control-Allow-Origin"] = "*"
    resp.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    resp.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return resp


async def _parse(request: web.Request, model):
    """Decode and validate a JSON body. Returns (model, None) or (None, error response)."""
    try:
        data = await request.json()
    except json.JSONDecodeError as e:
        return None, cors_response({"ok": False, "error": f"invalid JSON: {e}"}, status=400)
    try:
        return model.model_validate(data), None
    except ValidationError as e:
        return None, cors_response(
            {"ok": False, "error": "invalid request", "details": json.loads(e.json())},
            status=400,
        )


def create_api(coordinator: DispatchCoordinator) -> web.Application:
    """Create the REST API around an existing coordinator."""

    async def add_call(request):
        report, error = await _parse(request, IncidentReport)
        if error is not None:
            return error
        incident = coordinator.report_incident(
            report.severity, report.waiting_time, report.location.as_tuple())
        return cors_response({
            "message": "Call Added",
            "incident": incident.to_dict(),
            "queue": [inc.to_dict() for inc in coordinator.snapshot()],
        })

    async def dispatch_next(request):
        req, error = await _parse(request, DispatchRequest)
        if error is not None:
            return error
        outcome = coordinator.dispatch_next(req.grid, req.width, req.height, req.start.as_tuple())
        if isinstance(outcome, QueueEmpty):
            return cors_response({"message": "No calls in queue", "completed": True})
        return cors_response({
            "path": outcome.path,
            "cost": _cost_to_json(outcome.cost),
            "dispatchedCall": outcome.incident.to_dict(),
            "remainingQueue": [inc.to_dict() for inc in outcome.remaining],
        })

    async def get_queue(request):
        return cors_response([inc.to_dict() for inc in coordinator.snapshot()])

    async def get_status(request):
        return cors_response(coordinator.get_status())

    async def clear_queue(request):
        coordinator.clear()
        return cors_response(coordinator.get_status())

    async def handle_options(request):
        return cors_response({})

    app = web.Application()
    app[COORDINATOR_KEY] = coordinator
    app.router.add_post("/api/add-call", add_call)
    app.router.add_post("/api/dispatch-next", dispatch_next)
    app.router.add_get("/api/queue", get_queue)
    app.router.add_get("/api/status", get_status)
    app.router.add_post("/api/clear", clear_queue)
    app.router.add_options("/api/{path:.*}", handle_options)
    return app


async def serve(host: str = HOST, port: int = PORT):
    coordinator = DispatchCoordinator()
    app = create_api(coordinator)
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    logger.info(f"Server running on http://{host}:{port}")
    try:
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        logger.info("Stopped.")


if __name__ == "__main__":
    main()
