"""Grid dispatch engine: prioritised incident queue plus least-cost routing."""

from .dispatch_service import DispatchCoordinator, Dispatched, QueueEmpty
from .grid_graph import Graph, build_graph, cell_cost, node_id
from .priority_queue import Incident, IncidentQueue
from .shortest_path import PathResult, dijkstra

__all__ = [
    "DispatchCoordinator",
    "Dispatched",
    "QueueEmpty",
    "Graph",
    "build_graph",
    "cell_cost",
    "node_id",
    "Incident",
    "IncidentQueue",
    "PathResult",
    "dijkstra",
]
