"""Pydantic configuration models for the selectors."""

from __future__ import annotations

import math
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

# Optional bounds: None means unbounded.
Bound = Annotated[float, Field(ge=0)] | None


def _bound(value: float | None) -> float:
    """Resolve the ``None`` sentinel to +infinity."""
    return math.inf if value is None else value


def _fmt(value: float | None) -> str:
    return "inf" if value is None else repr(float(value))


class SelectorConfig(BaseModel):
    """Settings shared by every selector.

    ``threshold`` is the largest score still considered a match; ``None``
    means there is no threshold at all (which is not the same as ``0.0``).
    ``default_n`` is the result count used when a caller asks for 0 results.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    threshold: Bound = None
    default_n: int = Field(default=1, ge=1)

    @property
    def threshold_value(self) -> float:
        return _bound(self.threshold)

    def summary(self) -> str:
        return f"threshold: {_fmt(self.threshold)}, default_n: {self.default_n}"


class RankedConfig(SelectorConfig):
    """Configuration for rank-based selection."""


class RouletteConfig(SelectorConfig):
    """Configuration for roulette selection: p_match ~ 1 / (skew + score - baseline).

    A skew close to zero weights the best matches very heavily; a large skew
    gives mostly even weighting. ``max_baseline`` caps the normalization
    floor, ``None`` meaning uncapped.
    """

    skew: float = Field(default=0.1, gt=0)
    max_baseline: Bound = 1.0

    @property
    def max_baseline_value(self) -> float:
        return _bound(self.max_baseline)

    def summary(self) -> str:
        return (
            f"threshold: {_fmt(self.threshold)}, skew: {self.skew!r}, "
            f"max_baseline: {_fmt(self.max_baseline)}, default_n: {self.default_n}"
        )


class ExpRouletteConfig(SelectorConfig):
    """Configuration for exponential roulette: p_match ~ b ^ ((c * (score - baseline)) ^ z)."""

    threshold: Bound = 1.3
    b: float = Field(default=0.01, gt=0, lt=1)
    c: float = Field(default=4.0, gt=0)
    z: float = Field(default=4.0, gt=0)
    max_baseline: Bound = 1.25

    @property
    def max_baseline_value(self) -> float:
        return _bound(self.max_baseline)

    def summary(self) -> str:
        return (
            f"threshold: {_fmt(self.threshold)}, b: {self.b!r}, c: {self.c!r}, "
            f"z: {self.z!r}, max_baseline: {_fmt(self.max_baseline)}, "
            f"default_n: {self.default_n}"
        )
