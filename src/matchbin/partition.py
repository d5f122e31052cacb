"""Split candidates into those within a score threshold and those excluded."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Partition:
    """Candidates reordered so the first ``boundary`` uids are within threshold."""

    uids: list[int]
    boundary: int
    min_score: float

    @property
    def retained(self) -> list[int]:
        return self.uids[: self.boundary]

    @property
    def excluded(self) -> list[int]:
        return self.uids[self.boundary :]


def score_of(scores: Mapping[int, float], uid: int) -> float:
    """Look up a score, failing loudly when the uid has none."""
    try:
        return scores[uid]
    except KeyError:
        raise KeyError(f"No score supplied for uid {uid!r}") from None


def partition_scores(
    uids: Sequence[int],
    scores: Mapping[int, float],
    threshold: float | None = None,
) -> Partition:
    """Partition ``uids`` by ``score <= threshold`` and find the minimum score.

    The minimum is taken over every supplied uid, not only the retained ones.
    ``threshold=None`` means unbounded. The caller's sequence is not modified.
    """
    if not uids:
        raise ValueError("Cannot partition an empty candidate list")
    thresh = math.inf if threshold is None else threshold

    retained: list[int] = []
    excluded: list[int] = []
    min_score = math.inf
    for uid in uids:
        score = score_of(scores, uid)
        min_score = min(min_score, score)
        (retained if score <= thresh else excluded).append(uid)

    return Partition(uids=retained + excluded, boundary=len(retained), min_score=min_score)
