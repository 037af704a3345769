"""
Level Sequence - ordered list of levels with a current position.
"""
import logging
from pathlib import Path
from typing import List, Sequence, Union

from ..game.types import LevelBlueprint
from .codec import list_levels, load_level


logger = logging.getLogger(__name__)


class LevelSequence:
    """
    Tracks progress through a fixed list of levels.

    When loop is True, advancing past the last level wraps to the first;
    otherwise the sequence stays on the last level.
    """

    def __init__(self, levels: Sequence[LevelBlueprint], loop: bool = True):
        if not levels:
            raise ValueError("LevelSequence needs at least one level")
        self.levels: List[LevelBlueprint] = list(levels)
        self.loop = loop
        self.index = 0

    @classmethod
    def from_directory(cls, directory: Union[str, Path], loop: bool = True) -> "LevelSequence":
        """Load every level file of a directory, in file name order."""
        paths = list_levels(directory)
        if not paths:
            raise FileNotFoundError(f"No level files in {directory}")
        logger.info("Loaded %d levels from %s", len(paths), directory)
        return cls([load_level(p) for p in paths], loop=loop)

    def __len__(self) -> int:
        return len(self.levels)

    def current(self) -> LevelBlueprint:
        return self.levels[self.index]

    def advance(self) -> bool:
        """
        Move to the next level.

        Returns:
            True if a new level is current (including after wrapping),
            False if the sequence was already on its last level
        """
        if self.index + 1 < len(self.levels):
            self.index += 1
            return True
        if self.loop:
            self.index = 0
            return True
        return False

    def set_index(self, index: int) -> None:
        if not 0 <= index < len(self.levels):
            raise IndexError(f"Level index {index} out of range")
        self.index = index

    def reset(self) -> None:
        self.index = 0
