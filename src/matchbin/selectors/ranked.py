"""Ranked selection — best matches within the threshold, in score order."""

from __future__ import annotations

import heapq
import logging
from collections.abc import Mapping, Sequence

from matchbin.cache import RankedCacheState
from matchbin.models import RankedConfig
from matchbin.partition import score_of
from matchbin.selectors.base import BaseSelector, register_selector

logger = logging.getLogger(__name__)


@register_selector
class RankedSelector(BaseSelector):
    name = "ranked"
    label = "Ranked Selector"
    description = "Return the lowest-scoring matches within the threshold, best first"
    config_type = RankedConfig

    def select(
        self,
        uids: Sequence[int],
        scores: Mapping[int, float],
        n: int = 0,
    ) -> RankedCacheState:
        n = self._resolve(n)
        if not uids:
            raise ValueError("Cannot select from an empty candidate list")
        thresh = self.config.threshold_value

        # Partial sort: only the n best are ordered. Ties break on uid, then input position.
        keyed = [(score_of(scores, uid), uid, pos) for pos, uid in enumerate(uids)]
        best = heapq.nsmallest(min(n, len(keyed)), keyed)

        back = 0
        while back < len(best) and back < n and best[back][0] <= thresh:
            back += 1

        logger.debug(
            "%s: %d candidate(s), request size %d, %d within threshold",
            self.describe(), len(uids), n, back,
        )
        return RankedCacheState(
            [uid for _score, uid, _pos in best[:back]],
            request_size=n,
            default_n=self.config.default_n,
        )
