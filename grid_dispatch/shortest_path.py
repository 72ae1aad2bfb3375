"""
Least-cost path search (Dijkstra) over a Graph.

The frontier is a plain heapq of (distance, node) entries with no
decrease-key: an improved distance pushes a fresh entry and the stale one
is discarded when it surfaces.
"""

import heapq
import logging
import math
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

UNREACHABLE = math.inf


@dataclass
class PathResult:
    """Node ids from start to goal, and total cost. Empty path means unreachable."""
    path: list[str] = field(default_factory=list)
    cost: float = UNREACHABLE

    @property
    def reachable(self) -> bool:
        return bool(self.path)


def dijkstra(graph, start: str, goal: str) -> PathResult:
    """
    Shortest path from ``start`` to ``goal``.

    ``start`` is seeded at distance 0 whether or not it is a node of the
    graph, so a start on an impassable cell simply has nothing to relax.
    Stops as soon as the goal is finalised.
    """
    dist = {start: 0}
    prev: dict[str, str] = {}
    visited = set()
    frontier = [(0, start)]
    step = 1

    while frontier:
        current_dist, current = heapq.heappop(frontier)
        if current in visited:
            continue
        visited.add(current)
        logger.debug(f"Step {step}: visited {current}")

        if current == goal:
            logger.debug("Target reached!")
            break

        updates = []
        for neighbour, weight in graph.neighbors(current):
            if neighbour in visited:
                continue
            candidate = current_dist + weight
            if candidate < dist.get(neighbour, math.inf):
                dist[neighbour] = candidate
                prev[neighbour] = current
                heapq.heappush(frontier, (candidate, neighbour))
                updates.append(f"{neighbour}={candidate}")

        if updates:
            logger.debug("Distances updated: " + "  ".join(updates))
        else:
            logger.debug("No distances updated.")
        step += 1

    path = [goal]
    while path[-1] in prev:
        path.append(prev[path[-1]])
    path.reverse()

    if path[0] != start:
        return PathResult()
    return PathResult(path=path, cost=dist[goal])
