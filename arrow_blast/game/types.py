"""
Arrow Blast data model - colors, directions, entities and level blueprints.

Coordinate conventions:
- Wall grid: (0, 0) is the bottom-left cell, y grows upward.
- Arrow grid: row 0 is the top row, y grows downward. An arrow pointing UP
  therefore exits through row 0.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Optional, Tuple


Cell = Tuple[int, int]


class Color(IntEnum):
    """Block and arrow colors (indices match the persisted level format)."""
    RED = 0
    BLUE = 1
    GREEN = 2
    YELLOW = 3
    PURPLE = 4
    ORANGE = 5


class Direction(IntEnum):
    """Exit direction of an arrow."""
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3


# Unit step of each direction on the arrow grid
DIRECTION_VECTORS: Dict[Direction, Cell] = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}

AMMO_BY_LENGTH: Dict[int, int] = {1: 10, 2: 20, 3: 30, 4: 40}

MIN_ARROW_LENGTH = 1
MAX_ARROW_LENGTH = 4


def ammo_for_length(length: int) -> int:
    """Ammo granted by collecting an arrow of the given length."""
    try:
        return AMMO_BY_LENGTH[length]
    except KeyError:
        raise ValueError(f"Arrow length must be 1..4, got {length}") from None


def arrow_cells(head_x: int, head_y: int, direction: Direction, length: int) -> List[Cell]:
    """
    Linear arrow layout: head first, body trailing opposite the exit direction.

    Args:
        head_x: Head column
        head_y: Head row
        direction: Exit direction
        length: Number of cells

    Returns:
        List of cells, index 0 is the head
    """
    dx, dy = DIRECTION_VECTORS[Direction(direction)]
    return [(head_x - dx * i, head_y - dy * i) for i in range(length)]


@dataclass
class BlockEntity:
    """A wall block. Gravity moves it by mutating x/y in place."""
    id: int
    color: Color
    x: int
    y: int

    def to_dict(self) -> Dict[str, int]:
        return {"id": self.id, "color": int(self.color), "x": self.x, "y": self.y}


@dataclass(frozen=True)
class ArrowEntity:
    """A collectible arrow occupying one or more arrow-grid cells."""
    id: int
    color: Color
    direction: Direction
    length: int
    segments: Tuple[Cell, ...]

    @property
    def head(self) -> Cell:
        return self.segments[0]

    @property
    def ammo(self) -> int:
        return ammo_for_length(self.length)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "color": int(self.color),
            "direction": int(self.direction),
            "length": self.length,
            "segments": [list(c) for c in self.segments],
        }


@dataclass
class Slot:
    """An ammo slot. A slot is occupied exactly when it holds ammo."""
    color: Optional[Color] = None
    ammo_count: int = 0

    @property
    def occupied(self) -> bool:
        return self.ammo_count > 0

    def clear(self) -> None:
        self.color = None
        self.ammo_count = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "color": int(self.color) if self.color is not None else -1,
            "ammo": self.ammo_count,
            "occupied": self.occupied,
        }


@dataclass(frozen=True)
class BlockSpec:
    """Block entry of a level blueprint."""
    color: Color
    x: int
    y: int


@dataclass(frozen=True)
class ArrowSpec:
    """
    Arrow entry of a level blueprint.

    When segments are omitted they are filled in with the linear layout, so two
    specs describing the same cells compare equal.
    """
    color: Color
    direction: Direction
    length: int
    head_x: int
    head_y: int
    segments: Optional[Tuple[Cell, ...]] = None

    def __post_init__(self):
        if not self.segments:
            cells = tuple(arrow_cells(self.head_x, self.head_y, self.direction, self.length))
            object.__setattr__(self, "segments", cells)
        else:
            object.__setattr__(self, "segments", tuple(tuple(c) for c in self.segments))

    def cells(self) -> List[Cell]:
        return list(self.segments)

    @property
    def ammo(self) -> int:
        return ammo_for_length(self.length)


@dataclass(frozen=True)
class LevelBlueprint:
    """
    Immutable description of a level: wall blocks plus arrows.

    Produced by the generator or the level codec, consumed by PuzzleEngine.load.
    """
    width: int
    height: int
    grid_rows: int
    grid_cols: int
    blocks: Tuple[BlockSpec, ...] = field(default_factory=tuple)
    arrows: Tuple[ArrowSpec, ...] = field(default_factory=tuple)
    name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary with explicit arrow segments."""
        return {
            "name": self.name,
            "width": self.width,
            "height": self.height,
            "grid_rows": self.grid_rows,
            "grid_cols": self.grid_cols,
            "blocks": [
                {"color": int(b.color), "x": b.x, "y": b.y}
                for b in self.blocks
            ],
            "arrows": [
                {
                    "color": int(a.color),
                    "direction": int(a.direction),
                    "length": a.length,
                    "head_x": a.head_x,
                    "head_y": a.head_y,
                    "segments": [list(c) for c in a.cells()],
                }
                for a in self.arrows
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LevelBlueprint":
        """
        Create a blueprint from a dictionary produced by to_dict().

        Raises:
            KeyError, TypeError, ValueError: on malformed input (the level
            codec turns these into InvalidBlueprint)
        """
        blocks = tuple(
            BlockSpec(color=Color(b["color"]), x=int(b["x"]), y=int(b["y"]))
            for b in data.get("blocks", [])
        )
        arrows = []
        for a in data.get("arrows", []):
            segments = a.get("segments")
            arrows.append(ArrowSpec(
                color=Color(a["color"]),
                direction=Direction(a["direction"]),
                length=int(a["length"]),
                head_x=int(a["head_x"]),
                head_y=int(a["head_y"]),
                segments=tuple((int(c[0]), int(c[1])) for c in segments) if segments else None,
            ))
        return cls(
            width=int(data["width"]),
            height=int(data["height"]),
            grid_rows=int(data["grid_rows"]),
            grid_cols=int(data["grid_cols"]),
            blocks=blocks,
            arrows=tuple(arrows),
            name=str(data.get("name", "")),
        )
