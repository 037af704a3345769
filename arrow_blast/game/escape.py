"""
Escape Resolver - decides whether an arrow's exit path is clear.

Only other arrows block an exit; wall blocks play no role. The same ray
helper is used by the runtime engine and by the level generator.
"""

from typing import List

from .grid_state import GridState
from .types import ArrowEntity, Cell, Direction, DIRECTION_VECTORS


def exit_ray(head: Cell, direction: Direction, cols: int, rows: int) -> List[Cell]:
    """
    Cells an arrow passes through on its way out, from head + d to the edge.

    Args:
        head: Head cell of the arrow
        direction: Exit direction
        cols: Arrow grid columns
        rows: Arrow grid rows

    Returns:
        In-bounds cells in walking order (empty for an arrow on the boundary)
    """
    dx, dy = DIRECTION_VECTORS[direction]
    x, y = head[0] + dx, head[1] + dy
    cells = []
    while 0 <= x < cols and 0 <= y < rows:
        cells.append((x, y))
        x += dx
        y += dy
    return cells


def can_escape(grid: GridState, arrow: ArrowEntity) -> bool:
    """True if no other arrow occupies any cell of the arrow's exit ray."""
    for x, y in exit_ray(arrow.head, arrow.direction, grid.grid_cols, grid.grid_rows):
        occupant = grid.arrow_grid[x][y]
        if occupant is not None and occupant is not arrow:
            return False
    return True


def escapable_arrows(grid: GridState) -> List[int]:
    """Ids of all arrows that can currently be collected."""
    return [a.id for a in grid.arrows() if can_escape(grid, a)]
