"""
Tests for the ammo slot queue.
"""

import pytest


class TestSlotQueueFill:
    """Tests for filling slots."""

    def test_default_capacity(self):
        """Test the queue starts with five empty slots."""
        from arrow_blast.game.slot_queue import SlotQueue

        queue = SlotQueue()

        assert queue.capacity == 5
        assert queue.is_empty()
        assert not queue.active.occupied

    def test_invalid_capacity(self):
        """Test a queue needs at least one slot."""
        from arrow_blast.game.slot_queue import SlotQueue

        with pytest.raises(ValueError):
            SlotQueue(0)

    def test_fill_uses_first_empty_slot(self):
        """Test ammo goes to slots in FIFO order."""
        from arrow_blast.game.slot_queue import SlotQueue
        from arrow_blast.game.types import Color

        queue = SlotQueue(3)

        assert queue.try_fill(Color.RED, 10)
        assert queue.try_fill(Color.BLUE, 20)

        assert queue[0].color == Color.RED
        assert queue[1].color == Color.BLUE
        assert queue[1].ammo_count == 20
        assert queue.first_empty_index() == 2

    def test_fill_when_full(self):
        """Test a full queue rejects more ammo without changes."""
        from arrow_blast.game.slot_queue import SlotQueue
        from arrow_blast.game.types import Color

        queue = SlotQueue(1)
        queue.try_fill(Color.RED, 10)

        assert queue.is_full()
        assert queue.try_fill(Color.BLUE, 10) is False
        assert queue.first_empty_index() == -1
        assert queue.active.color == Color.RED

    def test_fill_rejects_non_positive_amount(self):
        """Test zero or negative ammo is an error."""
        from arrow_blast.game.slot_queue import SlotQueue
        from arrow_blast.game.types import Color

        with pytest.raises(ValueError):
            SlotQueue().try_fill(Color.RED, 0)

    def test_slots_are_copies(self):
        """Test the slots tuple cannot mutate the queue."""
        from arrow_blast.game.slot_queue import SlotQueue
        from arrow_blast.game.types import Color

        queue = SlotQueue(2)
        queue.try_fill(Color.RED, 10)
        queue.slots[0].clear()

        assert queue.active.ammo_count == 10


class TestSlotQueueDrain:
    """Tests for drain_one and compact."""

    def test_drain_active_slot(self):
        """Test draining decrements and empties at zero."""
        from arrow_blast.game.slot_queue import SlotQueue
        from arrow_blast.game.types import Color

        queue = SlotQueue(2)
        queue.try_fill(Color.RED, 2)

        assert queue.drain_one() is True
        assert queue.active.ammo_count == 1
        assert queue.drain_one() is True
        assert not queue.active.occupied
        assert queue.active.color is None
        assert queue.drain_one() is False

    def test_drain_only_active_slot(self):
        """Test non-active slots never drain; out-of-range indices raise."""
        from arrow_blast.game.slot_queue import SlotQueue
        from arrow_blast.game.types import Color

        queue = SlotQueue(2)
        queue.try_fill(Color.RED, 10)
        queue.try_fill(Color.BLUE, 10)

        assert queue.drain_one(1) is False
        assert queue[1].ammo_count == 10
        with pytest.raises(IndexError):
            queue.drain_one(2)

    def test_compact_after_active_empties(self):
        """Test the FIFO shift: red(2nd), blue, green, yellow, empty."""
        from arrow_blast.game.slot_queue import SlotQueue
        from arrow_blast.game.types import Color

        queue = SlotQueue(5)
        for color, ammo in [(Color.RED, 1), (Color.RED, 20), (Color.BLUE, 10),
                            (Color.GREEN, 10), (Color.YELLOW, 10)]:
            queue.try_fill(color, ammo)

        queue.drain_one(0)
        assert queue.compact() is True

        assert [s.color for s in queue.slots] == [
            Color.RED, Color.BLUE, Color.GREEN, Color.YELLOW, None
        ]
        assert queue.active.ammo_count == 20
        assert queue.occupied_count() == 4

    def test_compact_without_gap(self):
        """Test compact on a gap-free queue moves nothing."""
        from arrow_blast.game.slot_queue import SlotQueue
        from arrow_blast.game.types import Color

        queue = SlotQueue(3)
        queue.try_fill(Color.RED, 10)

        assert queue.compact() is False

    def test_add_slot(self):
        """Test the extra-slot booster appends an empty tail slot."""
        from arrow_blast.game.slot_queue import SlotQueue
        from arrow_blast.game.types import Color

        queue = SlotQueue(1)
        queue.try_fill(Color.RED, 10)

        assert queue.add_slot() == 2
        assert not queue.is_full()
        assert queue.try_fill(Color.BLUE, 10)
        assert queue.total_ammo() == 20


def _assert_front_packed(queue):
    occupied = [slot.occupied for slot in queue.slots]
    assert occupied == sorted(occupied, reverse=True), occupied


class TestSlotQueueOrdering:
    """Tests for FIFO order under interleaved fills, drains and growth."""

    @pytest.mark.parametrize("seed", range(10))
    def test_random_interleaving_keeps_fifo(self, seed):
        """Test random fill/drain/add_slot sequences never leave a gap and keep arrival order."""
        import random

        from arrow_blast.game.slot_queue import SlotQueue
        from arrow_blast.game.types import Color

        rng = random.Random(seed)
        queue = SlotQueue(rng.randint(1, 5))
        expected = []  # [color, ammo] in arrival order

        for _ in range(400):
            roll = rng.random()
            if roll < 0.45:
                color, amount = rng.choice(list(Color)), rng.randint(1, 4)
                filled = queue.try_fill(color, amount)
                assert filled == (len(expected) < queue.capacity)
                if filled:
                    expected.append([color, amount])
            elif roll < 0.95:
                drained = queue.drain_one(0)
                assert drained == bool(expected)
                if drained:
                    expected[0][1] -= 1
                    if expected[0][1] == 0:
                        expected.pop(0)
                        queue.compact()
            elif queue.capacity < 8:
                queue.add_slot()

            _assert_front_packed(queue)
            assert [[s.color, s.ammo_count] for s in queue.slots if s.occupied] == expected
            assert queue.total_ammo() == sum(ammo for _, ammo in expected)

    def test_add_slot_while_full_then_drain(self):
        """Test a slot added to a full queue is filled last and drains in order."""
        from arrow_blast.game.slot_queue import SlotQueue
        from arrow_blast.game.types import Color

        queue = SlotQueue(2)
        queue.try_fill(Color.RED, 1)
        queue.try_fill(Color.BLUE, 1)
        queue.add_slot()
        queue.try_fill(Color.GREEN, 1)

        seen = []
        while not queue.is_empty():
            seen.append(queue.active.color)
            queue.drain_one(0)
            queue.compact()
            _assert_front_packed(queue)

        assert seen == [Color.RED, Color.BLUE, Color.GREEN]
