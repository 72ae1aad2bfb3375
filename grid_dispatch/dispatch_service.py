"""
Dispatch Service — composes the incident queue, the grid graph and the
path search.

Incidents are reported into a max-priority queue. A dispatch request pulls
the top incident, builds a graph from the grid the caller sends, and
routes from the depot to the incident. The grid is never stored.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

from .grid_graph import build_graph, node_id
from .priority_queue import Incident, IncidentQueue
from .shortest_path import dijkstra

logger = logging.getLogger(__name__)


@dataclass
class QueueEmpty:
    """No pending incidents. A normal outcome, not a fault."""


@dataclass
class Dispatched:
    incident: Incident
    path: list[str]
    cost: float
    remaining: list[Incident] = field(default_factory=list)

    @property
    def reachable(self) -> bool:
        return bool(self.path)


DispatchOutcome = Union[QueueEmpty, Dispatched]


class DispatchCoordinator:
    """Owns the incident queue. One lock serialises every operation."""

    def __init__(self, queue: Optional[IncidentQueue] = None):
        self.queue = queue if queue is not None else IncidentQueue()
        self._lock = threading.Lock()
        self._counter = 0
        self.dispatched_total = 0

    def _next_id(self) -> str:
        self._counter += 1
        return f"E{self._counter:03d}"

    def report_incident(self, severity: int, waiting_time: int,
                        location: tuple[int, int]) -> Incident:
        """Queue a new incident. Values are not range-checked."""
        with self._lock:
            incident = self.queue.insert(self._next_id(), severity, waiting_time, location)
            row, col = incident.location
            logger.info(f"NEW CALL: {incident.id} at ({row}, {col}) | "
                        f"Sev: {severity} | Wait: {waiting_time} | Priority: {incident.priority}")
            logger.debug("\n" + self.queue.format_heap())
            return incident

    def dispatch_next(self, grid: Sequence[Sequence[str]], width: int, height: int,
                      start: tuple[int, int]) -> DispatchOutcome:
        """
        Extract the top incident and route to it.

        The incident leaves the queue before the search runs, so an
        unreachable incident is still consumed.
        """
        with self._lock:
            incident = self.queue.extract_max()
            if incident is None:
                logger.info("QUEUE EMPTY — no calls to process")
                return QueueEmpty()

            self.dispatched_total += 1
            logger.info(f"DISPATCHING TO: {incident.id} | Priority: {incident.priority}")

            graph = build_graph(grid, width, height)
            logger.debug("\n" + graph.describe())

            result = dijkstra(graph, node_id(*start), node_id(*incident.location))
            if result.reachable:
                logger.info(f"PATH FOUND: {' -> '.join(result.path)} | Cost: {result.cost}")
            else:
                logger.info(f"NO PATH FOUND to {incident.id}")

            return Dispatched(
                incident=incident,
                path=result.path,
                cost=result.cost,
                remaining=self.queue.snapshot(),
            )

    def snapshot(self) -> list[Incident]:
        with self._lock:
            return self.queue.snapshot()

    def pending_count(self) -> int:
        with self._lock:
            return len(self.queue)

    def clear(self):
        """Drop every pending incident."""
        with self._lock:
            self.queue.clear()
        logger.info("CLEARED — all pending calls removed")

    def get_status(self) -> dict:
        with self._lock:
            return {
                "pending": len(self.queue),
                "dispatched_total": self.dispatched_total,
            }
