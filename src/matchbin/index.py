"""Weighted index — cumulative weights over a fixed number of slots.

Backed by a binary indexed (Fenwick) tree so that weight updates and
"which slot holds this cumulative position" lookups are both O(log n).
That makes repeated weighted draws with replacement cheap: the index is
built once per selection and queried once per draw.
"""

from __future__ import annotations

import math
from typing import Iterable


class WeightedIndex:
    """Cumulative-weight structure over ``size`` slots, all initially 0."""

    def __init__(self, size: int):
        if size < 0:
            raise ValueError(f"Slot count must be non-negative, got {size}")
        self._weights = [0.0] * size
        self._tree = [0.0] * (size + 1)
        self._total = 0.0

    @classmethod
    def from_weights(cls, weights: Iterable[float]) -> WeightedIndex:
        weights = list(weights)
        index = cls(len(weights))
        for slot, weight in enumerate(weights):
            index.set_weight(slot, weight)
        return index

    def __len__(self) -> int:
        return len(self._weights)

    def __repr__(self) -> str:
        return f"WeightedIndex(size={len(self)}, total_weight={self._total!r})"

    @property
    def total_weight(self) -> float:
        return self._total

    def weight(self, slot: int) -> float:
        self._check_slot(slot)
        return self._weights[slot]

    def set_weight(self, slot: int, weight: float) -> None:
        """Assign ``weight`` to ``slot``."""
        if weight < 0:
            raise ValueError(f"Weight must be non-negative, got {weight!r} for slot {slot}")
        self._check_slot(slot)
        self._weights[slot] = weight
        self._update(slot)

    def adjust(self, slot: int, delta: float) -> None:
        """Add ``delta`` to the weight of ``slot``."""
        self.set_weight(slot, self.weight(slot) + delta)

    def prefix_weight(self, slot: int) -> float:
        """Sum of weights of slots ``0..slot`` inclusive."""
        self._check_slot(slot)
        return self._prefix(slot + 1)

    def find_slot(self, position: float) -> int:
        """Return the slot whose cumulative range ``[prefix(i-1), prefix(i))`` holds ``position``.

        Raises ValueError if the index carries no weight or ``position`` is
        outside ``[0, total_weight)``.
        """
        if self._total <= 0:
            raise ValueError("Cannot look up a position in an index with zero total weight")
        if not 0 <= position < self._total:
            raise ValueError(
                f"Position {position!r} out of range [0, {self._total!r})"
            )

        # Descend the tree: find the largest prefix whose sum is <= position.
        size = len(self._weights)
        pos = 0
        remaining = position
        step = 1 << size.bit_length()
        while step:
            nxt = pos + step
            if nxt <= size and self._tree[nxt] <= remaining:
                pos = nxt
                remaining -= self._tree[nxt]
            step >>= 1

        # Float drift can land on an unweighted slot; move to the nearest weighted one.
        slot = min(pos, size - 1)
        back = slot
        while back > 0 and self._weights[back] == 0:
            back -= 1
        if self._weights[back] > 0:
            return back
        while self._weights[slot] == 0:
            slot += 1
        return slot

    def copy(self) -> WeightedIndex:
        """Independent copy; later updates to either index do not affect the other."""
        other = WeightedIndex(0)
        other._weights = list(self._weights)
        other._tree = list(self._tree)
        other._total = self._total
        return other

    def _update(self, slot: int) -> None:
        # Rebuild each node on the path from current weights rather than adding
        # deltas, so no rounding error outlives the weights that caused it.
        # Node i covers slots (i - lowbit(i), i]; its children are i - 1, i - 2, i - 4, ...
        i = slot + 1
        while i < len(self._tree):
            low = i & -i
            parts = [self._weights[i - 1]]
            step = 1
            while step < low:
                parts.append(self._tree[i - step])
                step <<= 1
            self._tree[i] = math.fsum(parts)
            i += low
        self._total = self._prefix(len(self._weights))

    def _prefix(self, count: int) -> float:
        """Sum of the first ``count`` slot weights."""
        parts = []
        i = count
        while i > 0:
            parts.append(self._tree[i])
            i -= i & -i
        return math.fsum(parts)

    def _check_slot(self, slot: int) -> None:
        if not 0 <= slot < len(self._weights):
            raise IndexError(f"Slot {slot} out of range for index of size {len(self._weights)}")
