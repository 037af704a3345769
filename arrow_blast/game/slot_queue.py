"""
Slot Queue - fixed-capacity FIFO of ammo slots.

Collected arrows fill the first empty slot. Only the active slot (index 0)
fires; when it runs dry a single compaction pass shifts the queue forward.
"""

from typing import Tuple

from .types import Color, Slot


DEFAULT_SLOT_COUNT = 5


class SlotQueue:
    """
    Ordered sequence of ammo slots.

    Invariant (kept by the engine calling compact() after every slot that
    empties): no empty slot precedes an occupied one.
    """

    def __init__(self, capacity: int = DEFAULT_SLOT_COUNT):
        if capacity < 1:
            raise ValueError(f"Slot capacity must be at least 1, got {capacity}")
        self._slots = [Slot() for _ in range(capacity)]

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def slots(self) -> Tuple[Slot, ...]:
        """Copies of the slots, front first."""
        return tuple(Slot(color=s.color, ammo_count=s.ammo_count) for s in self._slots)

    @property
    def active(self) -> Slot:
        return self._slots[0]

    def __getitem__(self, index: int) -> Slot:
        return self._slots[index]

    def __len__(self) -> int:
        return len(self._slots)

    def try_fill(self, color: Color, amount: int) -> bool:
        """
        Put ammo into the first empty slot.

        Args:
            color: Ammo color
            amount: Ammo count (must be positive)

        Returns:
            False if every slot is occupied
        """
        if amount <= 0:
            raise ValueError(f"Ammo amount must be positive, got {amount}")
        index = self.first_empty_index()
        if index < 0:
            return False
        slot = self._slots[index]
        slot.color = Color(color)
        slot.ammo_count = amount
        return True

    def first_empty_index(self) -> int:
        """Index the next fill would use, or -1 when the queue is full."""
        for index, slot in enumerate(self._slots):
            if not slot.occupied:
                return index
        return -1

    def drain_one(self, index: int = 0) -> bool:
        """
        Use one unit of ammo from a slot.

        Only the active slot may drain; other in-range indices are refused.

        Returns:
            True if a unit was consumed
        """
        if not 0 <= index < len(self._slots):
            raise IndexError(f"Slot index {index} out of range")
        if index != 0:
            return False
        slot = self._slots[0]
        if not slot.occupied:
            return False
        slot.ammo_count -= 1
        if slot.ammo_count == 0:
            slot.clear()
        return True

    def compact(self) -> bool:
        """
        Single left-to-right pass moving slot[i+1] into an empty slot[i].

        One pass is enough because at most one slot empties per action.

        Returns:
            True if any slot moved
        """
        moved = False
        for i in range(len(self._slots) - 1):
            current, following = self._slots[i], self._slots[i + 1]
            if not current.occupied and following.occupied:
                current.color, current.ammo_count = following.color, following.ammo_count
                following.clear()
                moved = True
        return moved

    def add_slot(self) -> int:
        """Append an empty slot (extra-slot booster). Returns the new capacity."""
        self._slots.append(Slot())
        return len(self._slots)

    def is_full(self) -> bool:
        return all(s.occupied for s in self._slots)

    def is_empty(self) -> bool:
        return not any(s.occupied for s in self._slots)

    def occupied_count(self) -> int:
        return sum(1 for s in self._slots if s.occupied)

    def total_ammo(self) -> int:
        return sum(s.ammo_count for s in self._slots)
