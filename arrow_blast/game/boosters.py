"""
Booster Inventory - counted charges for the instant-exit and extra-slot boosters.

The inventory belongs to the player, not to a level: PuzzleEngine keeps the
same inventory across load() and restart().
"""

import logging
from enum import IntEnum
from typing import Dict


logger = logging.getLogger(__name__)


class BoosterType(IntEnum):
    INSTANT_EXIT = 0  # collect an arrow without checking its exit ray
    EXTRA_SLOT = 1    # grow the slot queue by one


class BoosterInventory:
    """
    Charges per booster type. Counts never go negative.

    Usage:
        boosters = BoosterInventory(instant_exit=2)
        if boosters.use(BoosterType.INSTANT_EXIT):
            ...
    """

    def __init__(self, instant_exit: int = 0, extra_slot: int = 0):
        self._counts: Dict[BoosterType, int] = {booster: 0 for booster in BoosterType}
        self.add(BoosterType.INSTANT_EXIT, instant_exit)
        self.add(BoosterType.EXTRA_SLOT, extra_slot)

    def get_amount(self, booster: BoosterType) -> int:
        return self._counts[BoosterType(booster)]

    def has(self, booster: BoosterType) -> bool:
        return self.get_amount(booster) > 0

    def add(self, booster: BoosterType, amount: int = 1) -> int:
        """
        Grant charges. Non-positive amounts are ignored.

        Returns:
            The new count for that booster
        """
        booster = BoosterType(booster)
        if amount > 0:
            self._counts[booster] += amount
        return self._counts[booster]

    def use(self, booster: BoosterType) -> bool:
        """Spend one charge. False (and nothing changes) when none are left."""
        booster = BoosterType(booster)
        if self._counts[booster] <= 0:
            logger.debug("No %s boosters left", booster.name.lower())
            return False
        self._counts[booster] -= 1
        return True

    def reset(self) -> None:
        """Drop every charge."""
        for booster in self._counts:
            self._counts[booster] = 0

    def to_dict(self) -> Dict[str, int]:
        return {booster.name.lower(): count for booster, count in self._counts.items()}
