"""
Level Generator - random levels that are solvable and exactly ammo-balanced.

Arrows are placed one at a time on a simulated arrow grid. A candidate is
accepted only if it does not sit on the exit ray of any arrow placed before
it, and its own exit ray is clear. Every arrow therefore stays collectible
for the rest of the level's life, so any removal order (in particular the
reverse placement order) is legal.

For each accepted arrow, exactly ammo_for_length(length) blocks of its color
are stacked onto the wall, grouped into a narrow cluster of columns.
"""

import logging
import math
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple

from ..game.escape import exit_ray
from ..game.types import (
    ArrowSpec,
    BlockSpec,
    Cell,
    Color,
    Direction,
    LevelBlueprint,
    MAX_ARROW_LENGTH,
    MIN_ARROW_LENGTH,
    ammo_for_length,
    arrow_cells,
)
from ..utils.config_loader import GeneratorConfig


logger = logging.getLogger(__name__)


# Stop reasons reported in GenerationReport
FILL_REACHED = "fill_reached"
MAX_ARROWS = "max_arrows"
NO_PLACEMENT = "no_valid_placement"


@dataclass(frozen=True)
class GenerationReport:
    """Summary of the last generate() call."""
    seed: int
    arrows_placed: int
    cells_filled: int
    target_cells: int
    blocks_placed: int
    wall_height: int
    stop_reason: str

    @property
    def fill_reached(self) -> bool:
        return self.cells_filled >= self.target_cells


@dataclass
class _PlacedArrow:
    color: Color
    direction: Direction
    cells: List[Cell]
    ray: Set[Cell]


class LevelGenerator:
    """
    Builds LevelBlueprints.

    The generator is deterministic: the same seed and sizes always produce the
    same blueprint.
    """

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """
        Initialize the generator.

        Args:
            config: Generator settings (defaults: 80% fill, all colors, lengths 1-4)
        """
        self.config = config or GeneratorConfig()
        self.colors = [Color(c) for c in self.config.colors]
        self.lengths = sorted(int(n) for n in self.config.lengths)

        if not self.colors:
            raise ValueError("Generator needs at least one color")
        if not self.lengths:
            raise ValueError("Generator needs at least one arrow length")
        for length in self.lengths:
            if not MIN_ARROW_LENGTH <= length <= MAX_ARROW_LENGTH:
                raise ValueError(f"Arrow lengths must be 1..4, got {length}")
        if not 0.0 < self.config.fill_fraction <= 1.0:
            raise ValueError(f"fill_fraction must be in (0, 1], got {self.config.fill_fraction}")
        if self.config.max_cluster_span < 1:
            raise ValueError("max_cluster_span must be at least 1")

        self.last_report: Optional[GenerationReport] = None

    def generate(
        self,
        seed: int,
        wall_width: int,
        wall_height_hint: int,
        grid_rows: int,
        grid_cols: int,
        name: str = ""
    ) -> LevelBlueprint:
        """
        Generate a level.

        Args:
            seed: Random seed
            wall_width: Wall columns
            wall_height_hint: Minimum wall height (the wall grows if a column is taller)
            grid_rows: Arrow grid rows
            grid_cols: Arrow grid columns
            name: Optional level name

        Returns:
            LevelBlueprint with arrows in placement order
        """
        if wall_width <= 0 or wall_height_hint <= 0:
            raise ValueError(f"Wall size must be positive, got {wall_width}x{wall_height_hint}")
        if grid_rows <= 0 or grid_cols <= 0:
            raise ValueError(f"Arrow grid size must be positive, got {grid_cols}x{grid_rows}")

        rng = random.Random(seed)
        # Never zero; round() absorbs float noise before ceil
        target_cells = max(1, math.ceil(round(self.config.fill_fraction * grid_rows * grid_cols, 6)))
        max_arrows = self.config.max_arrows

        occupied: Set[Cell] = set()
        placed: List[_PlacedArrow] = []
        heights = [0] * wall_width
        blocks: List[BlockSpec] = []
        stop_reason = FILL_REACHED

        while len(occupied) < target_cells:
            if max_arrows is not None and len(placed) >= max_arrows:
                stop_reason = MAX_ARROWS
                break

            color = rng.choice(self.colors)
            length = rng.choice(self.lengths)

            candidate = None
            # Fall back to shorter arrows before giving up
            for try_length in [n for n in reversed(self.lengths) if n <= length]:
                candidate = self._find_placement(rng, try_length, occupied, placed, grid_cols, grid_rows)
                if candidate is not None:
                    break

            if candidate is None:
                stop_reason = NO_PLACEMENT
                break

            direction, cells = candidate
            arrow = _PlacedArrow(
                color=color,
                direction=direction,
                cells=cells,
                ray=set(exit_ray(cells[0], direction, grid_cols, grid_rows)),
            )
            placed.append(arrow)
            occupied.update(cells)

            self._stack_blocks(rng, color, ammo_for_length(len(cells)), heights, blocks)

        wall_height = max([wall_height_hint] + heights)
        arrows = tuple(
            ArrowSpec(
                color=a.color,
                direction=a.direction,
                length=len(a.cells),
                head_x=a.cells[0][0],
                head_y=a.cells[0][1],
                segments=tuple(a.cells),
            )
            for a in placed
        )

        self.last_report = GenerationReport(
            seed=seed,
            arrows_placed=len(placed),
            cells_filled=len(occupied),
            target_cells=target_cells,
            blocks_placed=len(blocks),
            wall_height=wall_height,
            stop_reason=stop_reason,
        )
        logger.info(
            "Generated level seed=%d: %d arrows, %d/%d cells, %d blocks, wall %dx%d (%s)",
            seed, len(placed), len(occupied), target_cells, len(blocks),
            wall_width, wall_height, stop_reason,
        )

        return LevelBlueprint(
            width=wall_width,
            height=wall_height,
            grid_rows=grid_rows,
            grid_cols=grid_cols,
            blocks=tuple(blocks),
            arrows=arrows,
            name=name or f"random_{seed}",
        )

    def _find_placement(
        self,
        rng: random.Random,
        length: int,
        occupied: Set[Cell],
        placed: Sequence[_PlacedArrow],
        cols: int,
        rows: int
    ) -> Optional[Tuple[Direction, List[Cell]]]:
        """First (direction, cells) that fits, scanning empty heads and directions in random order."""
        heads = [(x, y) for x in range(cols) for y in range(rows) if (x, y) not in occupied]
        rng.shuffle(heads)

        for head in heads:
            directions = list(Direction)
            rng.shuffle(directions)
            for direction in directions:
                cells = arrow_cells(head[0], head[1], direction, length)

                # Body must fit on empty cells
                if any(not (0 <= x < cols and 0 <= y < rows) or (x, y) in occupied for x, y in cells):
                    continue

                # Must not block any earlier arrow
                body = set(cells)
                if any(body & p.ray for p in placed):
                    continue

                # Must be collectible itself
                if any(c in occupied for c in exit_ray(head, direction, cols, rows)):
                    continue

                return direction, cells
        return None

    def _stack_blocks(
        self,
        rng: random.Random,
        color: Color,
        count: int,
        heights: List[int],
        blocks: List[BlockSpec]
    ) -> None:
        """Stack blocks of one color onto the lowest columns of a random cluster window."""
        width = len(heights)
        span = rng.randint(1, min(self.config.max_cluster_span, width))
        center = rng.randrange(width)
        start = max(0, min(center - (span - 1) // 2, width - span))
        window = range(start, start + span)

        for _ in range(count):
            column = min(window, key=lambda c: (heights[c], c))
            blocks.append(BlockSpec(color=color, x=column, y=heights[column]))
            heights[column] += 1


def generate(
    seed: int,
    wall_width: int,
    wall_height_hint: int,
    grid_rows: int,
    grid_cols: int,
    config: Optional[GeneratorConfig] = None
) -> LevelBlueprint:
    """Generate a level with a one-off LevelGenerator."""
    return LevelGenerator(config).generate(seed, wall_width, wall_height_hint, grid_rows, grid_cols)
