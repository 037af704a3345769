"""
Arrow Blast Environment - Gym-like wrapper implementing EnvInterface.
Provides a flat feature vector suitable for neural network input.
"""

import numpy as np
from typing import Tuple, Dict, Any, List, Optional

from ..core.env_interface import EnvInterface
from ..utils.config_loader import Config
from .arrow_blast_game import ArrowBlastGame
from .escape import can_escape
from .evaluator import exposed_blocks
from .types import Color, LevelBlueprint


NUM_COLORS = len(Color)


class ArrowBlastEnv(EnvInterface):
    """
    Gym-like environment wrapper for Arrow Blast implementing EnvInterface.

    State layout:
    - Per arrow-grid cell: occupied, escapable, color one-hot (8)
    - Per wall column: exposed color one-hot, empty flag, height (8)
    - Per slot: color one-hot, ammo (7)
    - Remaining blocks fraction, remaining arrows fraction (2)
    """

    CELL_FEATURES = 2 + NUM_COLORS
    COLUMN_FEATURES = NUM_COLORS + 2
    SLOT_FEATURES = NUM_COLORS + 1
    GLOBAL_FEATURES = 2

    # Ammo normalizer: the largest single-arrow load
    MAX_SLOT_AMMO = 40.0

    def __init__(self, config: Optional[Config] = None, blueprint: Optional[LevelBlueprint] = None):
        """
        Initialize the environment.

        Args:
            config: Full configuration (defaults if omitted)
            blueprint: Fixed level to play instead of generated ones
        """
        self.game = ArrowBlastGame(config=config, blueprint=blueprint)
        self.config = self.game.config

        if blueprint is not None:
            self.wall_width, self.wall_height = blueprint.width, blueprint.height
        else:
            self.wall_width = self.config.level.wall_width
            self.wall_height = self.config.level.wall_height
        self.slot_count = self.config.engine.slot_count

        self._initial_blocks = 1
        self._initial_arrows = 1
        self._capture_initial_counts()

    @property
    def state_size(self) -> int:
        cells = self.game.grid_cols * self.game.grid_rows
        return (
            cells * self.CELL_FEATURES
            + self.wall_width * self.COLUMN_FEATURES
            + self.slot_count * self.SLOT_FEATURES
            + self.GLOBAL_FEATURES
        )

    @property
    def action_size(self) -> int:
        return self.game.action_space_size

    def reset(self, record: bool = False) -> np.ndarray:
        """
        Reset environment and return initial state.

        Args:
            record: If True, start recording for replay

        Returns:
            Initial state as numpy array
        """
        self.game.reset()
        if record:
            self.game.start_recording()
        self._capture_initial_counts()
        return self._get_state()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, Dict[str, Any]]:
        """
        Execute action and return results.

        Args:
            action: 0 = wait, i > 0 = collect the arrow at cell i - 1

        Returns:
            Tuple of (next_state, reward, done, info)
        """
        _, reward, done, info = self.game.step(action)
        return self._get_state(), reward, done, info

    def action_mask(self) -> np.ndarray:
        """Wait plus the head cell of each collectible arrow."""
        mask = np.zeros(self.action_size, dtype=bool)
        mask[self.game.legal_actions()] = True
        return mask

    def _capture_initial_counts(self) -> None:
        grid = self.game.engine.grid
        self._initial_blocks = max(1, grid.block_count())
        self._initial_arrows = max(1, len(grid.arrows()))

    def _get_state(self) -> np.ndarray:
        """
        Convert engine state to a flat feature vector.

        Returns:
            State as numpy array of shape (state_size,)
        """
        engine = self.game.engine
        grid = engine.grid
        cols, rows = self.game.grid_cols, self.game.grid_rows

        # Arrow grid, row-major to match the action encoding
        cells = np.zeros((rows, cols, self.CELL_FEATURES), dtype=np.float32)
        for arrow in grid.arrows():
            escapable = can_escape(grid, arrow)
            for x, y in arrow.segments:
                cells[y, x, 0] = 1.0
                cells[y, x, 1] = float(escapable)
                cells[y, x, 2 + int(arrow.color)] = 1.0

        columns = np.zeros((self.wall_width, self.COLUMN_FEATURES), dtype=np.float32)
        for x, block in enumerate(exposed_blocks(grid)[:self.wall_width]):
            if block is None:
                columns[x, NUM_COLORS] = 1.0
            else:
                columns[x, int(block.color)] = 1.0
            columns[x, NUM_COLORS + 1] = min(1.0, grid.column_height(x) / max(1, self.wall_height))

        slots = np.zeros((self.slot_count, self.SLOT_FEATURES), dtype=np.float32)
        for index, slot in enumerate(engine.slots.slots[:self.slot_count]):
            if slot.occupied:
                slots[index, int(slot.color)] = 1.0
                slots[index, NUM_COLORS] = min(1.0, slot.ammo_count / self.MAX_SLOT_AMMO)

        progress = np.array([
            grid.block_count() / self._initial_blocks,
            len(grid.arrows()) / self._initial_arrows,
        ], dtype=np.float32)

        return np.concatenate([cells.ravel(), columns.ravel(), slots.ravel(), progress])

    def get_game_state(self) -> Dict[str, Any]:
        return self.game.get_state()

    def get_replay(self) -> List[Dict[str, Any]]:
        """
        Get the recorded game history.

        Returns:
            List of game state dictionaries
        """
        return self.game.stop_recording()

    def get_score(self) -> int:
        """Get current game score."""
        return self.game.score

    def is_recording(self) -> bool:
        """Check if game is being recorded."""
        return self.game.recording

    def seed(self, seed: Optional[int] = None) -> None:
        """Select the level seed used by the next reset."""
        if seed is not None:
            self.game.seed(seed)
