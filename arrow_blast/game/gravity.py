"""
Gravity Engine - keeps wall columns contiguous from y=0 upward.
"""

from dataclasses import dataclass
from typing import List

from .grid_state import GridState


@dataclass(frozen=True)
class BlockMove:
    """A block that fell from one wall cell to another."""
    block_id: int
    x: int
    from_y: int
    to_y: int


def on_block_removed(grid: GridState, x: int, y: int) -> List[BlockMove]:
    """
    Compact the column above a removed block down by one cell.

    The caller clears (x, y) first. Must run once per removal, before exposed
    blocks are queried again. Running it again on a column that is already
    compact moves nothing.

    Args:
        grid: Grid state whose wall was just modified
        x: Column of the removed block
        y: Row of the removed block

    Returns:
        Moves applied, bottom-most first
    """
    moves = []
    for k in range(y + 1, grid.height):
        above = grid.wall[x][k]
        if above is not None and grid.wall[x][k - 1] is None:
            grid.move_block(above, x, k - 1)
            moves.append(BlockMove(block_id=above.id, x=x, from_y=k, to_y=k - 1))
    return moves


def settle(grid: GridState) -> List[BlockMove]:
    """Drop every floating block to the lowest free cell of its column."""
    moves = []
    for x in range(grid.width):
        target = 0
        for y in range(grid.height):
            block = grid.wall[x][y]
            if block is None:
                continue
            if y != target:
                grid.move_block(block, x, target)
                moves.append(BlockMove(block_id=block.id, x=x, from_y=y, to_y=target))
            target += 1
    return moves
