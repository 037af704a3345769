"""
Events emitted by PuzzleEngine for the presentation layer.

The engine applies every transition instantly; animation and sound are
reconstructed from these records.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Union

from .types import Cell, Color


@dataclass(frozen=True)
class ArrowCollected:
    arrow_id: int
    color: Color
    ammo: int
    slot_index: int
    head: Cell


@dataclass(frozen=True)
class BlockDestroyed:
    block_id: int
    color: Color
    x: int
    y: int


@dataclass(frozen=True)
class BlockMoved:
    block_id: int
    x: int
    from_y: int
    to_y: int


@dataclass(frozen=True)
class SlotChanged:
    index: int
    color: Optional[Color]
    ammo: int


@dataclass(frozen=True)
class BoosterUsed:
    booster: str
    remaining: int


@dataclass(frozen=True)
class GameEnded:
    outcome: str
    reason: Optional[str]


GameEvent = Union[ArrowCollected, BlockDestroyed, BlockMoved, SlotChanged, BoosterUsed, GameEnded]


def event_to_dict(event: GameEvent) -> Dict[str, Any]:
    """Serialize an event with its type name, for replays and logs."""
    data = asdict(event)
    data["type"] = type(event).__name__
    return data
