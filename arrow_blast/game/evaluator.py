"""
Win/Loss Evaluator - classifies a grid + slot queue as playing, won or lost.

Everything here is recomputed from scratch on each call.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Tuple

from .grid_state import GridState
from .slot_queue import SlotQueue
from .types import BlockEntity, Color


class Outcome(IntEnum):
    PLAYING = 0
    WON = 1
    LOST = 2


class LossReason(IntEnum):
    STUCK = 0        # every slot occupied and the active color has no target
    OUT_OF_AMMO = 1  # blocks left but no arrows and no ammo


@dataclass(frozen=True)
class GameStatus:
    """Result of evaluating the current state."""
    outcome: Outcome
    reason: Optional[LossReason] = None

    @property
    def is_terminal(self) -> bool:
        return self.outcome != Outcome.PLAYING

    def to_dict(self):
        return {
            "outcome": self.outcome.name.lower(),
            "reason": self.reason.name.lower() if self.reason is not None else None,
        }


PLAYING = GameStatus(Outcome.PLAYING)
WON = GameStatus(Outcome.WON)
STUCK = GameStatus(Outcome.LOST, LossReason.STUCK)
OUT_OF_AMMO = GameStatus(Outcome.LOST, LossReason.OUT_OF_AMMO)


def exposed_blocks(grid: GridState) -> List[Optional[BlockEntity]]:
    """Lowest block of each column (None for empty columns)."""
    exposed = []
    for column in grid.wall:
        exposed.append(next((b for b in column if b is not None), None))
    return exposed


def has_blocks(grid: GridState) -> bool:
    return any(b is not None for b in exposed_blocks(grid))


def find_target(grid: GridState, color: Color) -> Optional[Tuple[int, int]]:
    """Cell of the left-most exposed block with the given color."""
    for block in exposed_blocks(grid):
        if block is not None and block.color == color:
            return block.x, block.y
    return None


def can_hit_color(grid: GridState, color: Color) -> bool:
    return find_target(grid, color) is not None


def evaluate(grid: GridState, slots: SlotQueue) -> GameStatus:
    """
    Classify the state. Won is checked first, then Stuck, then Out of Ammo.

    Args:
        grid: Current grid state
        slots: Current slot queue

    Returns:
        GameStatus
    """
    if not has_blocks(grid):
        return WON

    active = slots.active
    if slots.is_full() and not can_hit_color(grid, active.color):
        return STUCK

    if not grid.has_arrows() and slots.is_empty():
        return OUT_OF_AMMO

    return PLAYING
