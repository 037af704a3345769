"""
Arrow Blast puzzle resolution engine.

This package holds the rules: grid state, escape checks, the ammo slot queue,
gravity, win/loss evaluation and the PuzzleEngine orchestrator, plus the
GameInterface/EnvInterface adapters used by players and AI agents.
"""

from .types import (
    ArrowEntity,
    ArrowSpec,
    BlockEntity,
    BlockSpec,
    Cell,
    Color,
    Direction,
    DIRECTION_VECTORS,
    LevelBlueprint,
    Slot,
    ammo_for_length,
    arrow_cells,
)
from .exceptions import ArrowBlastError, InvalidBlueprint
from .grid_state import GridKind, GridState
from .escape import can_escape, escapable_arrows, exit_ray
from .slot_queue import SlotQueue
from .boosters import BoosterInventory, BoosterType
from .evaluator import GameStatus, LossReason, Outcome, evaluate
from .engine import CollectResult, FireOutcome, FireResult, PuzzleEngine, Snapshot

__all__ = [
    'ArrowBlastError',
    'ArrowEntity',
    'ArrowSpec',
    'BlockEntity',
    'BlockSpec',
    'BoosterInventory',
    'BoosterType',
    'Cell',
    'CollectResult',
    'Color',
    'Direction',
    'DIRECTION_VECTORS',
    'FireOutcome',
    'FireResult',
    'GameStatus',
    'GridKind',
    'GridState',
    'InvalidBlueprint',
    'LevelBlueprint',
    'LossReason',
    'Outcome',
    'PuzzleEngine',
    'Slot',
    'SlotQueue',
    'Snapshot',
    'ammo_for_length',
    'arrow_cells',
    'can_escape',
    'escapable_arrows',
    'evaluate',
    'exit_ray',
]
