"""
Grid State - the wall grid and the arrow grid of a loaded level.

Pure data plus accessors. Gravity, escape checks and events live elsewhere.
"""

from enum import IntEnum
from typing import Dict, List, Optional, Union

from .exceptions import InvalidBlueprint
from .types import (
    ArrowEntity,
    BlockEntity,
    Cell,
    Color,
    Direction,
    DIRECTION_VECTORS,
    LevelBlueprint,
    MAX_ARROW_LENGTH,
    MIN_ARROW_LENGTH,
)


class GridKind(IntEnum):
    """Which of the two grids to address."""
    WALL = 0
    ARROWS = 1


Occupant = Union[None, BlockEntity, ArrowEntity]


class GridState:
    """
    Authoritative grid state of a level.

    The wall grid is indexed [x][y] with y=0 at the bottom. The arrow grid is
    indexed [x][y] with every segment cell referencing its ArrowEntity.
    """

    def __init__(self):
        self.width: int = 0
        self.height: int = 0
        self.grid_cols: int = 0
        self.grid_rows: int = 0

        self.wall: List[List[Optional[BlockEntity]]] = []
        self.arrow_grid: List[List[Optional[ArrowEntity]]] = []
        self._arrows: Dict[int, ArrowEntity] = {}

    def load(self, blueprint: LevelBlueprint) -> None:
        """
        Reset both grids to the blueprint contents.

        Validation happens on fresh grids; the current state is only replaced
        once the whole blueprint is accepted.

        Args:
            blueprint: Level to load

        Raises:
            InvalidBlueprint: Bounds violation, overlap or malformed arrow
        """
        width, height = blueprint.width, blueprint.height
        cols, rows = blueprint.grid_cols, blueprint.grid_rows
        if width <= 0 or height <= 0:
            raise InvalidBlueprint(f"Wall size must be positive, got {width}x{height}")
        if cols <= 0 or rows <= 0:
            raise InvalidBlueprint(f"Arrow grid size must be positive, got {cols}x{rows}")

        wall: List[List[Optional[BlockEntity]]] = [[None] * height for _ in range(width)]
        for block_id, spec in enumerate(blueprint.blocks):
            x, y = spec.x, spec.y
            if not (0 <= x < width and 0 <= y < height):
                raise InvalidBlueprint(f"Block {block_id} at ({x}, {y}) is outside the {width}x{height} wall")
            if wall[x][y] is not None:
                raise InvalidBlueprint(f"Block {block_id} overlaps block {wall[x][y].id} at ({x}, {y})")
            color = _enum(Color, spec.color, f"Block {block_id}")
            wall[x][y] = BlockEntity(id=block_id, color=color, x=x, y=y)

        arrow_grid: List[List[Optional[ArrowEntity]]] = [[None] * rows for _ in range(cols)]
        arrows: Dict[int, ArrowEntity] = {}
        for arrow_id, spec in enumerate(blueprint.arrows):
            if not (MIN_ARROW_LENGTH <= spec.length <= MAX_ARROW_LENGTH):
                raise InvalidBlueprint(f"Arrow {arrow_id} has invalid length {spec.length}")
            cells = spec.cells()
            if len(cells) != spec.length:
                raise InvalidBlueprint(
                    f"Arrow {arrow_id} has {len(cells)} segments but length {spec.length}"
                )
            if cells[0] != (spec.head_x, spec.head_y):
                raise InvalidBlueprint(f"Arrow {arrow_id} segments do not start at its head")
            direction = _enum(Direction, spec.direction, f"Arrow {arrow_id}")
            _check_chain(arrow_id, cells)
            _check_neck(arrow_id, cells, direction)

            arrow = ArrowEntity(
                id=arrow_id,
                color=_enum(Color, spec.color, f"Arrow {arrow_id}"),
                direction=direction,
                length=spec.length,
                segments=tuple(cells),
            )
            for x, y in cells:
                if not (0 <= x < cols and 0 <= y < rows):
                    raise InvalidBlueprint(
                        f"Arrow {arrow_id} cell ({x}, {y}) is outside the {cols}x{rows} arrow grid"
                    )
                if arrow_grid[x][y] is not None:
                    raise InvalidBlueprint(
                        f"Arrow {arrow_id} overlaps arrow {arrow_grid[x][y].id} at ({x}, {y})"
                    )
                arrow_grid[x][y] = arrow
            arrows[arrow_id] = arrow

        self.width, self.height = width, height
        self.grid_cols, self.grid_rows = cols, rows
        self.wall = wall
        self.arrow_grid = arrow_grid
        self._arrows = arrows

    # --- Bounds ---

    def in_wall_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def in_arrow_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.grid_cols and 0 <= y < self.grid_rows

    # --- Queries ---

    def occupant_at(self, grid: GridKind, x: int, y: int) -> Occupant:
        """
        Get what occupies a cell.

        Args:
            grid: GridKind.WALL or GridKind.ARROWS
            x: Column
            y: Row

        Returns:
            None, the BlockEntity or the ArrowEntity at the cell

        Raises:
            IndexError: If the cell is outside the addressed grid
        """
        if grid == GridKind.WALL:
            return self.block_at(x, y)
        return self.arrow_at(x, y)

    def block_at(self, x: int, y: int) -> Optional[BlockEntity]:
        if not self.in_wall_bounds(x, y):
            raise IndexError(f"Wall cell ({x}, {y}) out of bounds")
        return self.wall[x][y]

    def arrow_at(self, x: int, y: int) -> Optional[ArrowEntity]:
        if not self.in_arrow_bounds(x, y):
            raise IndexError(f"Arrow cell ({x}, {y}) out of bounds")
        return self.arrow_grid[x][y]

    def arrow_by_id(self, arrow_id: int) -> Optional[ArrowEntity]:
        return self._arrows.get(arrow_id)

    def arrows(self) -> List[ArrowEntity]:
        """Live arrows in id order."""
        return [self._arrows[k] for k in sorted(self._arrows)]

    def has_arrows(self) -> bool:
        return bool(self._arrows)

    def blocks(self) -> List[BlockEntity]:
        """Live blocks, column by column from the bottom."""
        return [b for column in self.wall for b in column if b is not None]

    def block_count(self) -> int:
        return sum(1 for column in self.wall for b in column if b is not None)

    def column_height(self, x: int) -> int:
        """Index of the top-most occupied cell plus one (0 for an empty column)."""
        column = self.wall[x]
        for y in range(self.height - 1, -1, -1):
            if column[y] is not None:
                return y + 1
        return 0

    # --- Mutation ---

    def remove_block(self, x: int, y: int) -> Optional[BlockEntity]:
        """Remove the block at a cell. No-op returning None if the cell is empty."""
        block = self.block_at(x, y)
        if block is not None:
            self.wall[x][y] = None
        return block

    def remove_arrow(self, arrow: ArrowEntity) -> bool:
        """Remove all cells of an arrow. No-op returning False if it is not on the grid."""
        if self._arrows.get(arrow.id) is not arrow:
            return False
        for x, y in arrow.segments:
            if self.arrow_grid[x][y] is arrow:
                self.arrow_grid[x][y] = None
        del self._arrows[arrow.id]
        return True

    def move_block(self, block: BlockEntity, x: int, y: int) -> None:
        """Move a block to an empty cell, updating the entity in place."""
        if self.block_at(x, y) is not None:
            raise ValueError(f"Wall cell ({x}, {y}) is already occupied")
        self.wall[block.x][block.y] = None
        block.x, block.y = x, y
        self.wall[x][y] = block


def _check_chain(arrow_id: int, cells: List[Cell]) -> None:
    """Segments must be distinct and each 4-adjacent to the previous one."""
    if len(set(cells)) != len(cells):
        raise InvalidBlueprint(f"Arrow {arrow_id} repeats a segment cell")
    for (ax, ay), (bx, by) in zip(cells, cells[1:]):
        if abs(ax - bx) + abs(ay - by) != 1:
            raise InvalidBlueprint(f"Arrow {arrow_id} segments ({ax}, {ay}) and ({bx}, {by}) are not adjacent")


def _check_neck(arrow_id: int, cells: List[Cell], direction: Direction) -> None:
    """The segment after the head must trail it, opposite the pointing direction."""
    if len(cells) < 2:
        return
    dx, dy = DIRECTION_VECTORS[direction]
    (hx, hy), neck = cells[0], cells[1]
    if neck != (hx - dx, hy - dy):
        raise InvalidBlueprint(
            f"Arrow {arrow_id} points {direction.name} but its body leaves the head at {neck}"
        )


def _enum(kind, value, owner: str):
    try:
        return kind(value)
    except ValueError:
        raise InvalidBlueprint(f"{owner} has unknown {kind.__name__.lower()} {value!r}") from None
