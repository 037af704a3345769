"""
Puzzle Engine - the per-action state transitions of Arrow Blast.

Composes GridState, the escape resolver, SlotQueue, gravity and the win/loss
evaluator. Every public call runs to completion and leaves a consistent
state; one engine instance is owned by one caller.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Optional, Tuple, Union

from . import evaluator, gravity
from .boosters import BoosterInventory, BoosterType
from .escape import can_escape
from .events import (
    ArrowCollected,
    BlockDestroyed,
    BlockMoved,
    BoosterUsed,
    GameEnded,
    GameEvent,
    SlotChanged,
)
from .evaluator import GameStatus
from .grid_state import GridState
from .slot_queue import DEFAULT_SLOT_COUNT, SlotQueue
from .types import ArrowEntity, Cell, Color, LevelBlueprint, Slot


logger = logging.getLogger(__name__)

DEFAULT_FIRE_INTERVAL = 0.2


class CollectResult(IntEnum):
    """Outcome of a collect attempt. None of these are errors."""
    COLLECTED = 0
    BLOCKED_BY_ARROW = 1
    SLOTS_FULL = 2
    NO_ARROW = 3
    GAME_OVER = 4
    NO_BOOSTER = 5


class FireOutcome(IntEnum):
    NO_ACTION = 0
    FIRED = 1


@dataclass(frozen=True)
class FireResult:
    """Result of a tick: whether a shot went off, plus the events since the last drain."""
    outcome: FireOutcome
    color: Optional[Color] = None
    events: Tuple[GameEvent, ...] = field(default_factory=tuple)

    @property
    def fired(self) -> bool:
        return self.outcome == FireOutcome.FIRED


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the engine state for the presentation layer."""
    width: int
    height: int
    grid_rows: int
    grid_cols: int
    wall: Tuple[Tuple[Optional[Color], ...], ...]   # [x][y], y=0 is the bottom
    arrows: Tuple[ArrowEntity, ...]
    slots: Tuple[Slot, ...]
    status: GameStatus

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary (-1 marks an empty wall cell)."""
        return {
            "width": self.width,
            "height": self.height,
            "grid_rows": self.grid_rows,
            "grid_cols": self.grid_cols,
            "wall": [[int(c) if c is not None else -1 for c in column] for column in self.wall],
            "arrows": [a.to_dict() for a in self.arrows],
            "slots": [s.to_dict() for s in self.slots],
            "status": self.status.to_dict(),
        }


class PuzzleEngine:
    """
    Orchestrates collect-arrow, fire and tick over a loaded level.

    Usage:
        engine = PuzzleEngine()
        engine.load(blueprint)
        engine.collect_arrow((0, 3))
        result = engine.tick(0.2)
    """

    def __init__(
        self,
        slot_count: int = DEFAULT_SLOT_COUNT,
        fire_interval: float = DEFAULT_FIRE_INTERVAL,
        settle_on_load: bool = True,
        boosters: Optional[BoosterInventory] = None
    ):
        """
        Initialize an empty engine.

        Args:
            slot_count: Number of ammo slots
            fire_interval: Seconds between shots
            settle_on_load: Drop floating blocks right after loading
            boosters: Booster charges, kept across loads (empty if omitted)
        """
        if fire_interval <= 0:
            raise ValueError(f"Fire interval must be positive, got {fire_interval}")
        self.slot_count = slot_count
        self.fire_interval = fire_interval
        self.settle_on_load = settle_on_load
        self.boosters = boosters if boosters is not None else BoosterInventory()

        self.grid = GridState()
        self.slots = SlotQueue(slot_count)
        self.blueprint: Optional[LevelBlueprint] = None

        self._fire_timer: float = 0.0
        self._status: GameStatus = evaluator.PLAYING
        self._events: List[GameEvent] = []
        self._loaded = False

    # --- Lifecycle ---

    def load(self, blueprint: LevelBlueprint) -> None:
        """
        Load a level, replacing any current state.

        Raises:
            InvalidBlueprint: If the blueprint is malformed (nothing is changed)
        """
        self.grid.load(blueprint)
        self.blueprint = blueprint
        self.slots = SlotQueue(self.slot_count)
        self._fire_timer = 0.0
        self._events = []
        self._loaded = True

        if self.settle_on_load:
            moves = gravity.settle(self.grid)
            if moves:
                logger.debug("Settled %d floating blocks on load", len(moves))

        self._status = evaluator.PLAYING
        self._refresh_status()
        logger.info(
            "Loaded level %r: %d blocks, %d arrows, wall %dx%d, arrow grid %dx%d",
            blueprint.name, self.grid.block_count(), len(self.grid.arrows()),
            blueprint.width, blueprint.height, blueprint.grid_cols, blueprint.grid_rows,
        )

    def restart(self) -> None:
        """Reload the current blueprint."""
        if self.blueprint is None:
            raise RuntimeError("No level loaded")
        self.load(self.blueprint)

    # --- Actions ---

    def collect_arrow(self, target: Union[int, Cell], instant_exit: bool = False) -> CollectResult:
        """
        Try to collect an arrow into the slot queue.

        Args:
            target: Arrow id, or any (x, y) cell covered by the arrow
            instant_exit: Spend an instant-exit charge to skip the escape check.
                The charge is only spent when the arrow is collected.

        Returns:
            CollectResult

        Raises:
            IndexError: If a target cell is outside the arrow grid
            ValueError: If a target sequence is not an (x, y) pair
        """
        if self._status.is_terminal:
            return CollectResult.GAME_OVER

        arrow = self._resolve_arrow(target)
        if arrow is None:
            return CollectResult.NO_ARROW

        if instant_exit:
            if not self.boosters.has(BoosterType.INSTANT_EXIT):
                return CollectResult.NO_BOOSTER
        elif not can_escape(self.grid, arrow):
            logger.debug("Arrow %d at %s is blocked", arrow.id, arrow.head)
            return CollectResult.BLOCKED_BY_ARROW

        slot_index = self.slots.first_empty_index()
        if not self.slots.try_fill(arrow.color, arrow.ammo):
            logger.debug("Arrow %d rejected: all %d slots full", arrow.id, self.slots.capacity)
            return CollectResult.SLOTS_FULL

        if instant_exit:
            self._spend(BoosterType.INSTANT_EXIT)
        self.grid.remove_arrow(arrow)
        self._events.append(ArrowCollected(
            arrow_id=arrow.id, color=arrow.color, ammo=arrow.ammo,
            slot_index=slot_index, head=arrow.head,
        ))
        self._emit_slot(slot_index)
        self._refresh_status()
        return CollectResult.COLLECTED

    def tick(self, dt: float) -> FireResult:
        """
        Advance the fire timer and shoot at most once.

        Args:
            dt: Elapsed seconds (non-negative)

        Returns:
            FireResult with any events queued since the last drain
        """
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        if self._status.is_terminal or not self._loaded:
            return FireResult(FireOutcome.NO_ACTION, events=tuple(self.drain_events()))

        self._fire_timer += dt
        color = None
        if self._fire_timer >= self.fire_interval:
            color = self._fire_once()
            if color is not None:
                self._fire_timer = 0.0

        outcome = FireOutcome.FIRED if color is not None else FireOutcome.NO_ACTION
        return FireResult(outcome, color=color, events=tuple(self.drain_events()))

    def add_extra_slot(self) -> bool:
        """
        Spend an extra-slot charge to grow the queue by one slot.

        Returns:
            False, with nothing spent, once the game is over or when no charge is left
        """
        if self._status.is_terminal or not self._spend(BoosterType.EXTRA_SLOT):
            return False
        capacity = self.slots.add_slot()
        self._emit_slot(capacity - 1)
        self._refresh_status()
        return True

    # --- Queries ---

    def state(self) -> GameStatus:
        return self._status

    def snapshot(self) -> Snapshot:
        wall = tuple(
            tuple(b.color if b is not None else None for b in column)
            for column in self.grid.wall
        )
        return Snapshot(
            width=self.grid.width,
            height=self.grid.height,
            grid_rows=self.grid.grid_rows,
            grid_cols=self.grid.grid_cols,
            wall=wall,
            arrows=tuple(self.grid.arrows()),
            slots=self.slots.slots,
            status=self._status,
        )

    def drain_events(self) -> List[GameEvent]:
        """Return and clear the pending events."""
        events, self._events = self._events, []
        return events

    def can_collect(self, arrow: ArrowEntity) -> bool:
        return can_escape(self.grid, arrow) and not self.slots.is_full()

    # --- Internals ---

    def _resolve_arrow(self, target: Union[int, Cell]) -> Optional[ArrowEntity]:
        if isinstance(target, Sequence) and not isinstance(target, str):
            if len(target) != 2:
                raise ValueError(f"Target cell must be (x, y), got {target!r}")
            x, y = target
            return self.grid.arrow_at(int(x), int(y))
        return self.grid.arrow_by_id(int(target))

    def _fire_once(self) -> Optional[Color]:
        """Shoot the active slot at a matching exposed block. Returns the color fired."""
        active = self.slots.active
        if not active.occupied:
            return None
        target = evaluator.find_target(self.grid, active.color)
        if target is None:
            return None

        color = active.color
        x, y = target
        block = self.grid.remove_block(x, y)
        self._events.append(BlockDestroyed(block_id=block.id, color=block.color, x=x, y=y))
        for move in gravity.on_block_removed(self.grid, x, y):
            self._events.append(BlockMoved(
                block_id=move.block_id, x=move.x, from_y=move.from_y, to_y=move.to_y
            ))

        self.slots.drain_one(0)
        if not active.occupied:
            # The active slot emptied: shift the queue forward
            self.slots.compact()
            for index in range(self.slots.capacity):
                self._emit_slot(index)
        else:
            self._emit_slot(0)

        self._refresh_status()
        return color

    def _spend(self, booster: BoosterType) -> bool:
        if not self.boosters.use(booster):
            return False
        self._events.append(BoosterUsed(
            booster=booster.name.lower(), remaining=self.boosters.get_amount(booster)
        ))
        return True

    def _emit_slot(self, index: int) -> None:
        slot = self.slots[index]
        self._events.append(SlotChanged(index=index, color=slot.color, ammo=slot.ammo_count))

    def _refresh_status(self) -> None:
        if self._status.is_terminal:
            return
        self._status = evaluator.evaluate(self.grid, self.slots)
        if self._status.is_terminal:
            info = self._status.to_dict()
            self._events.append(GameEnded(outcome=info["outcome"], reason=info["reason"]))
            logger.info("Game over: %s%s", info["outcome"], f" ({info['reason']})" if info["reason"] else "")
