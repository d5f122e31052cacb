"""Roulette selection — weighted random draws with replacement.

Scores are normalized against a baseline, ``min(min_score, max_baseline)``,
so the best match present (or the configured ceiling, whichever is smaller)
sits at 0. Each candidate within the threshold then gets a weight from its
normalized score and the cache state draws from a weighted index.
"""

from __future__ import annotations

import logging
import random
from abc import abstractmethod
from collections.abc import Mapping, Sequence

from matchbin.cache import RouletteCacheState
from matchbin.index import WeightedIndex
from matchbin.models import RouletteConfig
from matchbin.partition import partition_scores
from matchbin.selectors.base import BaseSelector, register_selector

logger = logging.getLogger(__name__)


class WeightedSelector(BaseSelector):
    """Shared machinery for the roulette family; subclasses supply ``weight``."""

    @abstractmethod
    def weight(self, normalized_score: float) -> float:
        """Sampling weight for a score already shifted by the baseline."""
        ...

    def select(
        self,
        uids: Sequence[int],
        scores: Mapping[int, float],
        n: int = 0,
    ) -> RouletteCacheState:
        # The request size does not bound a roulette cache; only validate it.
        self._resolve(n)

        part = partition_scores(uids, scores, self.config.threshold)
        max_baseline = self.config.max_baseline_value
        baseline = min(part.min_score, max_baseline)
        assert 0 <= baseline <= max_baseline, f"baseline {baseline} outside [0, {max_baseline}]"

        retained = part.retained
        index = WeightedIndex(len(retained))
        for slot, uid in enumerate(retained):
            normalized = scores[uid] - baseline
            assert normalized >= 0, f"uid {uid} scores below baseline {baseline}"
            index.set_weight(slot, self.weight(normalized))

        logger.debug(
            "%s: %d candidate(s), %d within threshold, baseline %.6g, total weight %.6g",
            self.describe(), len(uids), len(retained), baseline, index.total_weight,
        )
        return RouletteCacheState(index, retained, self._spawn_rng(), self.config.default_n)

    def _spawn_rng(self) -> random.Random:
        """A private random source for one cache state, seeded from ours."""
        return random.Random(self.rng.getrandbits(64))


@register_selector
class RouletteSelector(WeightedSelector):
    name = "roulette"
    label = "Roulette Selector"
    description = "Draw matches with replacement, p ~ 1 / (skew + score - baseline)"
    config_type = RouletteConfig

    def weight(self, normalized_score: float) -> float:
        return 1.0 / (self.config.skew + normalized_score)
