"""
Arrow Blast Game - GameInterface adapter over PuzzleEngine.

Action encoding:
- 0: wait (only advance the fire timer)
- i > 0: collect the arrow covering arrow-grid cell i - 1, where
  cell index = y * grid_cols + x; then advance the fire timer

Each step advances the engine by session.step_dt seconds.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..core.game_interface import GameInterface, GameMetadata
from ..generator.level_generator import LevelGenerator
from ..utils.config_loader import Config
from .boosters import BoosterInventory
from .engine import CollectResult, PuzzleEngine
from .escape import can_escape
from .evaluator import Outcome
from .events import BlockDestroyed, event_to_dict
from .types import Cell, LevelBlueprint


logger = logging.getLogger(__name__)


class ArrowBlastGame(GameInterface):
    """
    Arrow Blast with an integer action space and shaped rewards.

    Levels come from the generator (a new seed per episode) unless a fixed
    blueprint is given, in which case every reset replays that level.
    """

    @classmethod
    def get_metadata(cls) -> GameMetadata:
        """Return metadata about Arrow Blast."""
        return GameMetadata(
            name="Arrow Blast",
            id="arrow_blast",
            description="Collect free arrows to load ammo and shoot the color wall down",
            version="1.0.0",
            supports_human=True,
            recommended_algorithms=["dqn", "ppo"]
        )

    def __init__(self, config: Optional[Config] = None, blueprint: Optional[LevelBlueprint] = None):
        """
        Initialize the game.

        Args:
            config: Full configuration (defaults if omitted)
            blueprint: Fixed level to play instead of generated ones
        """
        self.config = config or Config()
        engine_cfg = self.config.engine
        self.engine = PuzzleEngine(
            slot_count=engine_cfg.slot_count,
            fire_interval=engine_cfg.fire_interval,
            settle_on_load=engine_cfg.settle_on_load,
            boosters=BoosterInventory(
                instant_exit=engine_cfg.instant_exit_boosters,
                extra_slot=engine_cfg.extra_slot_boosters,
            ),
        )
        self.generator = LevelGenerator(self.config.generator)
        self.fixed_blueprint = blueprint

        if blueprint is not None:
            self.grid_cols, self.grid_rows = blueprint.grid_cols, blueprint.grid_rows
        else:
            self.grid_cols, self.grid_rows = self.config.level.grid_cols, self.config.level.grid_rows

        rewards = self.config.rewards
        self.reward_block = rewards.block_destroyed
        self.reward_arrow = rewards.arrow_collected
        self.reward_blocked = rewards.blocked_attempt
        self.reward_slots_full = rewards.slots_full
        self.reward_win = rewards.win
        self.reward_loss = rewards.loss
        self.reward_step = rewards.step_penalty

        self.step_dt = self.config.session.step_dt
        self.max_steps = self.config.session.max_steps

        self._next_seed = self.config.generator.seed
        self.level_seed: Optional[int] = None

        # Episode state (initialized in reset)
        self.score: int = 0
        self.arrows_collected: int = 0
        self.steps: int = 0
        self.truncated: bool = False

        # Recording
        self.history: List[Dict[str, Any]] = []
        self.recording: bool = False

        self.reset()

    @property
    def action_space_size(self) -> int:
        """Wait plus one collect action per arrow-grid cell."""
        return 1 + self.grid_cols * self.grid_rows

    @property
    def action_names(self) -> List[str]:
        names = ["Wait"]
        for index in range(self.grid_cols * self.grid_rows):
            x, y = self.action_to_cell(index + 1)
            names.append(f"Collect ({x},{y})")
        return names

    def action_to_cell(self, action: int) -> Cell:
        """Arrow-grid cell addressed by a collect action."""
        index = action - 1
        return index % self.grid_cols, index // self.grid_cols

    def cell_to_action(self, cell: Cell) -> int:
        x, y = cell
        return 1 + y * self.grid_cols + x

    def seed(self, seed: int) -> None:
        """Seed the level sequence; the next reset generates level `seed`."""
        self._next_seed = seed

    def reset(self) -> Dict[str, Any]:
        """Load the next level and clear episode counters."""
        if self.fixed_blueprint is not None:
            blueprint = self.fixed_blueprint
        else:
            level = self.config.level
            self.level_seed = self._next_seed
            self._next_seed += 1
            blueprint = self.generator.generate(
                self.level_seed, level.wall_width, level.wall_height,
                level.grid_rows, level.grid_cols,
            )

        self.engine.load(blueprint)
        self.engine.drain_events()

        self.score = 0
        self.arrows_collected = 0
        self.steps = 0
        self.truncated = False

        self.history = []
        if self.recording:
            self._record_frame()

        return self.get_state()

    def legal_actions(self) -> List[int]:
        """Wait, plus the head cell of every arrow that would be collected right now."""
        actions = [0]
        if self.engine.state().is_terminal or self.engine.slots.is_full():
            return actions
        for arrow in self.engine.grid.arrows():
            if can_escape(self.engine.grid, arrow):
                actions.append(self.cell_to_action(arrow.head))
        return actions

    def is_valid_action(self, action: int) -> bool:
        """Check if action is inside the action space."""
        return 0 <= action < self.action_space_size

    def step(self, action: int) -> Tuple[Dict[str, Any], float, bool, Dict[str, Any]]:
        """
        Execute one game step.

        Args:
            action: Action index (see module docstring)

        Returns:
            Tuple of (state, reward, done, info)
        """
        if not self.is_valid_action(action):
            raise ValueError(f"Action {action} outside action space of size {self.action_space_size}")

        if self.engine.state().is_terminal or self.truncated:
            return self.get_state(), 0.0, True, self._info(None, 0)

        reward = self.reward_step
        collect_result = None

        if action > 0:
            collect_result = self.engine.collect_arrow(self.action_to_cell(action))
            if collect_result == CollectResult.COLLECTED:
                self.arrows_collected += 1
                reward += self.reward_arrow
            elif collect_result == CollectResult.SLOTS_FULL:
                reward += self.reward_slots_full
            elif collect_result in (CollectResult.BLOCKED_BY_ARROW, CollectResult.NO_ARROW):
                reward += self.reward_blocked

        fire = self.engine.tick(self.step_dt)
        destroyed = sum(1 for e in fire.events if isinstance(e, BlockDestroyed))
        self.score += destroyed
        reward += self.reward_block * destroyed

        self.steps += 1
        status = self.engine.state()
        if status.outcome == Outcome.WON:
            reward += self.reward_win
        elif status.outcome == Outcome.LOST:
            reward += self.reward_loss
        elif self.steps >= self.max_steps:
            self.truncated = True
            logger.debug("Episode truncated after %d steps", self.steps)

        done = status.is_terminal or self.truncated

        if self.recording:
            self._record_frame(fire.events)

        return self.get_state(), reward, done, self._info(collect_result, destroyed)

    def _info(self, collect_result: Optional[CollectResult], destroyed: int) -> Dict[str, Any]:
        status = self.engine.state()
        return {
            "score": self.score,
            "steps": self.steps,
            "arrows_collected": self.arrows_collected,
            "blocks_destroyed_this_step": destroyed,
            "collect_result": collect_result.name.lower() if collect_result is not None else None,
            "outcome": status.outcome.name.lower(),
            "loss_reason": status.reason.name.lower() if status.reason is not None else None,
            "truncated": self.truncated,
            "level_seed": self.level_seed,
        }

    def get_state(self) -> Dict[str, Any]:
        """Get current game state for presentation."""
        state = self.engine.snapshot().to_dict()
        state.update({
            "score": self.score,
            "steps": self.steps,
            "arrows_collected": self.arrows_collected,
            "game_over": self.engine.state().is_terminal or self.truncated,
            "level_seed": self.level_seed,
            "boosters": self.engine.boosters.to_dict(),
        })
        return state

    def get_score(self) -> int:
        """Blocks destroyed this episode."""
        return self.score

    def start_recording(self) -> None:
        """Start recording game history."""
        self.recording = True
        self.history = []
        self._record_frame()

    def stop_recording(self) -> List[Dict[str, Any]]:
        """Stop recording and return history."""
        self.recording = False
        return self.history

    def _record_frame(self, events=()) -> None:
        """Record current frame, with the events that led to it."""
        frame = self.get_state()
        frame["events"] = [event_to_dict(e) for e in events]
        self.history.append(frame)
