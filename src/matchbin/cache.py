"""Cache states — resumable results of one selection call.

A selector does the expensive work once and hands back a cache state; the
caller then asks it for as many results as it needs. Ranked caches can only
answer up to the count they were built for, roulette caches can draw any
number of results.
"""

from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod
from collections.abc import Sequence

from matchbin.index import WeightedIndex


class CacheMissError(LookupError):
    """A ranked cache was asked for more results than it was built to answer.

    Recoverable: run the selector again with a larger request size.
    """

    def __init__(self, requested: int, request_size: int):
        self.requested = requested
        self.request_size = request_size
        super().__init__(
            f"Cache built for {request_size} result(s) cannot answer a request for {requested}; "
            "re-run the selection with a larger n"
        )


class CacheState(ABC):
    """Abstract base for cache states."""

    default_n: int

    @abstractmethod
    def fetch(self, n: int = 0) -> list[int]:
        """Return up to ``n`` uids; ``n == 0`` means ``default_n``."""
        ...

    def __call__(self, n: int = 0) -> list[int]:
        return self.fetch(n)

    def _resolve(self, n: int) -> int:
        if n < 0:
            raise ValueError(f"Result count must be non-negative, got {n}")
        return self.default_n if n == 0 else n


class RankedCacheState(CacheState):
    """Best matches in ascending score order, bounded by the original request size."""

    def __init__(self, uids: Sequence[int], request_size: int, default_n: int):
        self.uids = list(uids)
        self.request_size = request_size
        self.default_n = default_n

    def __repr__(self) -> str:
        return (
            f"RankedCacheState(uids={self.uids!r}, request_size={self.request_size}, "
            f"default_n={self.default_n})"
        )

    def fetch(self, n: int = 0) -> list[int]:
        n = self._resolve(n)
        if n > self.request_size:
            raise CacheMissError(n, self.request_size)
        return self.uids[:n]


class RouletteCacheState(CacheState):
    """Weighted draws with replacement over the uids that passed the threshold.

    Owns its index, its uid list and its random source; every draw advances
    the random source, so a single instance must not be shared across threads.
    """

    def __init__(
        self,
        index: WeightedIndex,
        uids: Sequence[int],
        rng: random.Random,
        default_n: int,
    ):
        if len(uids) < len(index):
            raise ValueError(
                f"Index has {len(index)} slot(s) but only {len(uids)} uid(s) were supplied"
            )
        self.index = index.copy()
        self.uids = list(uids)
        self.rng = rng
        self.default_n = default_n

    def __repr__(self) -> str:
        return (
            f"RouletteCacheState(index={self.index!r}, candidates={len(self.index)}, "
            f"default_n={self.default_n})"
        )

    def fetch(self, n: int = 0) -> list[int]:
        n = self._resolve(n)
        size = len(self.index)

        if size == 0:
            return []
        # Only one candidate: no draw needed.
        if size == 1:
            return [self.uids[0]] * n

        return [self.uids[self.index.find_slot(self._position())] for _ in range(n)]

    def _position(self) -> float:
        total = self.index.total_weight
        position = self.rng.random() * total
        # random() < 1, but the product can still round up to total.
        return position if position < total else math.nextafter(total, 0.0)
