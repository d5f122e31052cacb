"""Selection orchestration — build selectors and answer repeated match requests."""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping, Sequence
from typing import Any

from matchbin.cache import CacheMissError, CacheState
from matchbin.selectors import BaseSelector, get_selector, make_config

logger = logging.getLogger(__name__)


def build_selector(
    name: str,
    rng: random.Random | None = None,
    seed: int | None = None,
    **config: Any,
) -> BaseSelector:
    """Instantiate a registered selector with config overrides.

    Pass either a shared ``rng`` or a ``seed`` for a private one.
    """
    if rng is not None and seed is not None:
        raise ValueError("Pass either rng or seed, not both")
    if rng is None and seed is not None:
        rng = random.Random(seed)
    return get_selector(name, config=make_config(name, **config), rng=rng)


class MatchQuery:
    """One query against one selector, fetchable any number of times.

    Answers from the current cache state and transparently re-runs the
    selection when a ranked cache was built for fewer results than asked.
    """

    def __init__(
        self,
        uids: Sequence[int],
        scores: Mapping[int, float],
        selector: BaseSelector,
        n: int = 0,
    ):
        self.uids = list(uids)
        self.scores = dict(scores)
        self.selector = selector
        self.state: CacheState = selector.select(self.uids, self.scores, n)
        self.recomputes = 0

    def fetch(self, n: int = 0) -> list[int]:
        try:
            return self.state.fetch(n)
        except CacheMissError as exc:
            logger.debug("Cache miss (%s); recomputing with n=%d", exc, exc.requested)
            self.state = self.selector.select(self.uids, self.scores, exc.requested)
            self.recomputes += 1
            return self.state.fetch(exc.requested)

    def __call__(self, n: int = 0) -> list[int]:
        return self.fetch(n)


def select_matches(
    uids: Sequence[int],
    scores: Mapping[int, float],
    selector: BaseSelector,
    n: int = 0,
) -> list[int]:
    """Run ``selector`` once and fetch ``n`` matches."""
    return selector.select(uids, scores, n).fetch(n)
