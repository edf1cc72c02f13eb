"""Ordered selection over a contiguous integer range.

An ``OrderedSelectionSet`` starts as every integer in ``[lower, upper]`` and
supports removing the k-th smallest remaining value or a specific value. It is
how the builder samples without replacement: draw a position with the random
stream, then take the element at that position.

Besides the exact size, the set tracks a *pseudo-size* that drops on every
removal attempt, including attempts to remove values that are no longer
present. Some callers bound their draws by the pseudo-size, so it must keep
this behavior even though it under-counts availability.

Presence is kept in a Fenwick tree that is never materialized: over an
untouched range every node holds its low bit, so only the amounts removed
below each node are stored. Creating a set is O(1) and both removals are
O(log n).
"""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Set


class OrderedSelectionSet:
    """Positional without-replacement sampling over ``[lower, upper]``."""

    def __init__(self, lower: int, upper: int) -> None:
        self._lower = lower
        self._capacity = max(upper - lower + 1, 0)
        self._removed: Set[int] = set()
        # Fenwick node i holds lowbit(i) minus the removals it covers
        self._deficit: Dict[int, int] = {}
        self._size = self._capacity
        self._pseudo_size = upper - lower + 1
        self._top_step = 1 << (self._capacity.bit_length() - 1) if self._capacity else 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, int):
            return False
        slot = value - self._lower
        return 0 <= slot < self._capacity and slot not in self._removed

    def __iter__(self) -> Iterator[int]:
        removed = self._removed
        for slot in range(self._capacity):
            if slot not in removed:
                yield self._lower + slot

    def __repr__(self) -> str:
        return (
            f"OrderedSelectionSet(lower={self._lower}, size={self._size}, "
            f"pseudo_size={self.pseudo_size()})"
        )

    def size(self) -> int:
        """Return the exact number of remaining values."""
        return self._size

    def pseudo_size(self) -> int:
        """Return the pseudo-size, clamped at zero."""
        return max(0, self._pseudo_size)

    def choose_at(self, position: int) -> Optional[int]:
        """Remove and return the ``position``-th smallest remaining value.

        Args:
            position: 1-based rank among the remaining values.

        Returns:
            The removed value, or ``None`` when ``position`` is outside
            ``[1, size()]``. Out-of-range requests leave the set untouched.
        """
        if position < 1 or position > self._size:
            return None
        slot = self._find_rank(position)
        self._clear(slot)
        self._pseudo_size -= 1
        return self._lower + slot

    def remove_value(self, value: int) -> None:
        """Remove ``value`` if present; the pseudo-size drops either way."""
        self._pseudo_size -= 1
        slot = value - self._lower
        if 0 <= slot < self._capacity and slot not in self._removed:
            self._clear(slot)

    def _find_rank(self, rank: int) -> int:
        """Return the 0-based slot of the ``rank``-th present flag."""
        deficit = self._deficit
        index = 0
        step = self._top_step
        while step:
            node = index + step
            if node <= self._capacity:
                count = step - deficit.get(node, 0)
                if count < rank:
                    index = node
                    rank -= count
            step >>= 1
        return index

    def _clear(self, slot: int) -> None:
        self._removed.add(slot)
        self._size -= 1
        deficit = self._deficit
        i = slot + 1
        while i <= self._capacity:
            deficit[i] = deficit.get(i, 0) + 1
            i += i & -i
