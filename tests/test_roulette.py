"""
Tests for the roulette and exponential roulette selectors.
"""

import random

import pytest

from matchbin.cache import RouletteCacheState
from matchbin.models import ExpRouletteConfig, RouletteConfig
from matchbin.selectors.exp_roulette import ExpRouletteSelector
from matchbin.selectors.roulette import RouletteSelector


def slot_weights(state):
    return {uid: state.index.weight(slot) for slot, uid in enumerate(state.uids)}


class TestRouletteSelector:
    """Test linear-weighted sampling with replacement."""

    def test_worked_example_weights(self, example_uids, example_scores, rng):
        selector = RouletteSelector(RouletteConfig(threshold=None, skew=0.1, max_baseline=1.0), rng)
        state = selector.select(example_uids, example_scores, 1)
        assert isinstance(state, RouletteCacheState)
        weights = slot_weights(state)
        assert weights[1] == pytest.approx(10.0)
        assert weights[2] == pytest.approx(2.5)
        assert weights[3] == pytest.approx(1.25)
        assert state.index.total_weight == pytest.approx(13.75)

    def test_worked_example_frequencies(self, example_uids, example_scores, rng):
        selector = RouletteSelector(RouletteConfig(skew=0.1, max_baseline=1.0), rng)
        draws = selector.select(example_uids, example_scores).fetch(20000)
        assert len(draws) == 20000
        assert draws.count(1) / len(draws) == pytest.approx(10 / 13.75, abs=0.02)
        assert draws.count(3) / len(draws) == pytest.approx(1.25 / 13.75, abs=0.02)

    def test_only_within_threshold(self, example_uids, example_scores, rng):
        selector = RouletteSelector(RouletteConfig(threshold=0.6), rng)
        draws = selector.select(example_uids, example_scores).fetch(2000)
        assert set(draws) == {1, 2}

    def test_max_baseline_caps_normalization(self, rng):
        scores = {1: 2.0, 2: 3.0}
        selector = RouletteSelector(RouletteConfig(skew=0.1, max_baseline=1.0), rng)
        weights = slot_weights(selector.select([1, 2], scores))
        assert weights[1] == pytest.approx(1 / 1.1)
        assert weights[2] == pytest.approx(1 / 2.1)

    def test_unbounded_baseline_uses_min_score(self, rng):
        scores = {1: 2.0, 2: 3.0}
        selector = RouletteSelector(RouletteConfig(skew=0.5, max_baseline=None), rng)
        weights = slot_weights(selector.select([1, 2], scores))
        assert weights[1] == pytest.approx(2.0)
        assert weights[2] == pytest.approx(1 / 1.5)

    def test_single_retained_candidate(self, example_uids, example_scores, rng):
        selector = RouletteSelector(RouletteConfig(threshold=0.3), rng)
        state = selector.select(example_uids, example_scores)
        before = state.rng.getstate()
        assert state.fetch(5) == [1, 1, 1, 1, 1]
        assert state.rng.getstate() == before

    def test_nothing_retained(self, example_uids, example_scores, rng):
        selector = RouletteSelector(RouletteConfig(threshold=0.1), rng)
        state = selector.select(example_uids, example_scores)
        assert state.fetch(3) == []
        assert state.fetch(0) == []

    def test_zero_uses_default(self, example_uids, example_scores):
        config = RouletteConfig(default_n=4)
        a = RouletteSelector(config, random.Random(21)).select(example_uids, example_scores)
        b = RouletteSelector(config, random.Random(21)).select(example_uids, example_scores)
        drawn = a.fetch(0)
        assert len(drawn) == 4
        assert drawn == b.fetch(4)

    def test_same_seed_same_draws(self, example_uids, example_scores):
        a = RouletteSelector(rng=random.Random(99)).select(example_uids, example_scores).fetch(50)
        b = RouletteSelector(rng=random.Random(99)).select(example_uids, example_scores).fetch(50)
        assert a == b

    def test_each_cache_owns_its_rng(self, example_uids, example_scores, rng):
        selector = RouletteSelector(rng=rng)
        a = selector.select(example_uids, example_scores)
        b = selector.select(example_uids, example_scores)
        assert a.rng is not b.rng
        assert a.rng is not selector.rng

    def test_inputs_untouched(self, example_scores, rng):
        uids = [3, 2, 1]
        RouletteSelector(RouletteConfig(threshold=0.6), rng).select(uids, example_scores)
        assert uids == [3, 2, 1]

    def test_empty_rejected(self, example_scores, rng):
        with pytest.raises(ValueError):
            RouletteSelector(rng=rng).select([], example_scores)

    def test_missing_score_rejected(self, example_scores, rng):
        with pytest.raises(KeyError):
            RouletteSelector(rng=rng).select([1, 8], example_scores)

    def test_negative_scores_are_a_logic_error(self, rng):
        selector = RouletteSelector(RouletteConfig(max_baseline=None), rng)
        with pytest.raises(AssertionError):
            selector.select([1, 2], {1: -0.5, 2: 0.3})

    def test_describe(self):
        assert RouletteSelector().describe() == (
            "Roulette Selector (threshold: inf, skew: 0.1, max_baseline: 1.0, default_n: 1)"
        )


class TestExpRouletteSelector:
    """Test exponentially weighted sampling with replacement."""

    def test_weights(self, example_uids, example_scores, rng):
        config = ExpRouletteConfig(threshold=None, b=0.5, c=1.0, z=1.0, max_baseline=None)
        weights = slot_weights(ExpRouletteSelector(config, rng).select(example_uids, example_scores))
        assert weights[1] == pytest.approx(1.0)
        assert weights[2] == pytest.approx(0.5 ** 0.3)
        assert weights[3] == pytest.approx(0.5 ** 0.7)

    def test_defaults_strongly_favor_best(self, example_uids, example_scores, rng):
        draws = ExpRouletteSelector(rng=rng).select(example_uids, example_scores).fetch(1000)
        assert draws.count(1) >= 990

    def test_default_threshold_applies(self, rng):
        scores = {1: 1.0, 2: 1.4}
        draws = ExpRouletteSelector(rng=rng).select([1, 2], scores).fetch(100)
        assert draws == [1] * 100

    def test_only_within_threshold(self, example_uids, example_scores, rng):
        config = ExpRouletteConfig(threshold=0.6, b=0.5, c=1.0, z=1.0)
        draws = ExpRouletteSelector(config, rng).select(example_uids, example_scores).fetch(2000)
        assert set(draws) == {1, 2}

    def test_nothing_retained(self, example_uids, example_scores, rng):
        config = ExpRouletteConfig(threshold=0.1)
        assert ExpRouletteSelector(config, rng).select(example_uids, example_scores).fetch(5) == []

    def test_single_retained_candidate(self, example_scores, rng):
        state = ExpRouletteSelector(rng=rng).select([2, 2, 2], example_scores)
        before = state.rng.getstate()
        # three slots of equal weight still need draws
        assert state.fetch(3) == [2, 2, 2]
        assert state.rng.getstate() != before

    def test_same_seed_same_draws(self, example_uids, example_scores):
        config = ExpRouletteConfig(b=0.5, c=1.0, z=1.0)
        a = ExpRouletteSelector(config, random.Random(4)).select(example_uids, example_scores).fetch(50)
        b = ExpRouletteSelector(config, random.Random(4)).select(example_uids, example_scores).fetch(50)
        assert a == b

    def test_underflowed_weights_fail_loudly(self, rng):
        # baseline capped at 0 pushes every weight below the float range
        config = ExpRouletteConfig(threshold=None, max_baseline=0.0)
        state = ExpRouletteSelector(config, rng).select([1, 2], {1: 1.5, 2: 1.6})
        assert state.index.total_weight == 0
        with pytest.raises(ValueError):
            state.fetch(1)

    def test_describe(self):
        assert ExpRouletteSelector().describe() == (
            "Exponential Roulette Selector (threshold: 1.3, b: 0.01, c: 4.0, z: 4.0, "
            "max_baseline: 1.25, default_n: 1)"
        )
