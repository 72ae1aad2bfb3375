"""
Cell-type vocabulary for the terrain grid.
Each cell is a single character; the value is the cost of stepping INTO it.
"""

ORIGIN = "S"
OPEN = "."
TERRAIN = "T"
DESTINATION = "D"
IMPASSABLE = "X"

CELL_COSTS = {
    ORIGIN: 1,
    OPEN: 1,
    TERRAIN: 3,
    DESTINATION: 1,
}

# Incident markers painted on the grid (E1, E2, ...) fall through to this
DEFAULT_COST = 1
