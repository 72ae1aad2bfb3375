"""
Weighted adjacency graph built from a 2-D cell-type grid.

Nodes are traversable cells keyed "row,col". Each traversable 4-neighbour
gets a directed edge weighted by the cost of entering the neighbour cell.
Impassable cells produce no node and no edge.
"""

from typing import Optional, Sequence

from .cell_types import CELL_COSTS, DEFAULT_COST, IMPASSABLE

# up, down, left, right
DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def node_id(row: int, col: int) -> str:
    return f"{row},{col}"


def cell_cost(cell_type: str) -> float:
    """Cost of stepping into a cell. Unknown markers are open road."""
    if cell_type == IMPASSABLE:
        return float("inf")
    return CELL_COSTS.get(cell_type, DEFAULT_COST)


class Graph:
    """Directed adjacency list: node -> [(neighbour, weight), ...]."""

    def __init__(self):
        self.adjacency: dict[str, list[tuple[str, float]]] = {}

    def add_node(self, node: str):
        if node not in self.adjacency:
            self.adjacency[node] = []

    def add_edge(self, source: str, target: str, weight: float):
        self.add_node(source)
        self.adjacency[source].append((target, weight))

    def neighbors(self, node: str) -> list[tuple[str, float]]:
        return self.adjacency.get(node, [])

    def __contains__(self, node: str) -> bool:
        return node in self.adjacency

    def __len__(self) -> int:
        return len(self.adjacency)

    def describe(self) -> str:
        lines = ["GRAPH (Adjacency List)"]
        for node, edges in self.adjacency.items():
            lines.append(f"Node {node}:")
            for target, weight in edges:
                lines.append(f" -> {target} cost={weight}")
        return "\n".join(lines)


def _cell_at(grid: Sequence[Sequence[str]], row: int, col: int) -> Optional[str]:
    # width/height may promise more than the caller actually sent
    if row >= len(grid):
        return None
    line = grid[row]
    if col >= len(line):
        return None
    return line[col]


def _traversable(cell: Optional[str]) -> bool:
    return cell is not None and cell != IMPASSABLE


def build_graph(grid: Sequence[Sequence[str]], width: int, height: int) -> Graph:
    """Build a fresh graph from a grid snapshot. The grid is only read."""
    graph = Graph()
    # only cells actually sent can become nodes
    for row in range(min(height, len(grid))):
        for col in range(min(width, len(grid[row]))):
            if not _traversable(_cell_at(grid, row, col)):
                continue
            source = node_id(row, col)
            graph.add_node(source)
            for dr, dc in DIRECTIONS:
                nr, nc = row + dr, col + dc
                if not (0 <= nr < height and 0 <= nc < width):
                    continue
                neighbour = _cell_at(grid, nr, nc)
                if _traversable(neighbour):
                    graph.add_edge(source, node_id(nr, nc), cell_cost(neighbour))
    return graph
