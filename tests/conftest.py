"""
Pytest configuration and fixtures for Arrow Blast tests.

Provides small hand-built level blueprints shared across the test modules.
"""

import sys
from pathlib import Path

import pytest


# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))
sys.path.insert(0, str(PROJECT_ROOT / "scripts"))


@pytest.fixture
def stacked_red_level():
    """1-wide wall with two stacked red blocks and one free red arrow."""
    from arrow_blast.game.types import ArrowSpec, BlockSpec, Color, Direction, LevelBlueprint

    return LevelBlueprint(
        width=1, height=2, grid_rows=1, grid_cols=1,
        blocks=(BlockSpec(Color.RED, 0, 0), BlockSpec(Color.RED, 0, 1)),
        arrows=(ArrowSpec(Color.RED, Direction.UP, 1, 0, 0),),
        name="stacked_red",
    )


@pytest.fixture
def blocked_column_level():
    """Two UP arrows in one column; the lower one waits for the upper one."""
    from arrow_blast.game.types import ArrowSpec, BlockSpec, Color, Direction, LevelBlueprint

    blocks = tuple(BlockSpec(Color.RED, 0, y) for y in range(10)) + \
        tuple(BlockSpec(Color.BLUE, 1, y) for y in range(10))
    return LevelBlueprint(
        width=2, height=10, grid_rows=2, grid_cols=1,
        blocks=blocks,
        arrows=(
            ArrowSpec(Color.RED, Direction.UP, 1, 0, 1),   # id 0, lower
            ArrowSpec(Color.BLUE, Direction.UP, 1, 0, 0),  # id 1, upper
        ),
        name="blocked_column",
    )


@pytest.fixture
def mixed_level():
    """A small balanced level with arrows of several lengths and directions."""
    from arrow_blast.game.types import ArrowSpec, BlockSpec, Color, Direction, LevelBlueprint

    blocks = []
    blocks += [BlockSpec(Color.RED, 0, y) for y in range(20)]
    blocks += [BlockSpec(Color.GREEN, 1, y) for y in range(10)]
    blocks += [BlockSpec(Color.BLUE, 2, y) for y in range(10)]
    return LevelBlueprint(
        width=3, height=20, grid_rows=3, grid_cols=3,
        blocks=tuple(blocks),
        arrows=(
            ArrowSpec(Color.RED, Direction.RIGHT, 2, 2, 0),   # cells (2,0),(1,0)
            ArrowSpec(Color.GREEN, Direction.DOWN, 1, 0, 2),
            ArrowSpec(Color.BLUE, Direction.LEFT, 1, 0, 1),
        ),
        name="mixed",
    )


@pytest.fixture
def small_config():
    """Default config shrunk to a fast generated level."""
    from arrow_blast.utils.config_loader import Config

    config = Config()
    config.level.wall_width = 4
    config.level.wall_height = 6
    config.level.grid_rows = 4
    config.level.grid_cols = 4
    config.session.max_steps = 500
    return config
