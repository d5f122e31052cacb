"""Shared fixtures for matchbin tests."""

import logging
import random

import pytest


@pytest.fixture
def example_uids():
    return [1, 2, 3]


@pytest.fixture
def example_scores():
    return {1: 0.2, 2: 0.5, 3: 0.9}


@pytest.fixture
def rng():
    return random.Random(12345)


@pytest.fixture(autouse=True)
def restore_matchbin_logger():
    """The CLI configures the package logger; undo that after each test."""
    logger = logging.getLogger("matchbin")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]
