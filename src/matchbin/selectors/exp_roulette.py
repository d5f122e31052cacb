"""Exponential roulette selection — sharply favors the best matches."""

from __future__ import annotations

from matchbin.models import ExpRouletteConfig
from matchbin.selectors.base import register_selector
from matchbin.selectors.roulette import WeightedSelector


@register_selector
class ExpRouletteSelector(WeightedSelector):
    name = "exp-roulette"
    label = "Exponential Roulette Selector"
    description = "Draw matches with replacement, p ~ b ^ ((c * (score - baseline)) ^ z)"
    config_type = ExpRouletteConfig

    def weight(self, normalized_score: float) -> float:
        cfg = self.config
        try:
            exponent = (cfg.c * normalized_score) ** cfg.z
        except OverflowError:
            # b < 1, so the weight vanishes as the exponent grows
            return 0.0
        return cfg.b ** exponent
