"""Base selector ABC and registry."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar

from matchbin.cache import CacheState
from matchbin.models import SelectorConfig

_REGISTRY: dict[str, type[BaseSelector]] = {}


class BaseSelector(ABC):
    """Abstract base for selection policies.

    A selector is configured once and then run against any number of
    queries; each run returns a fresh cache state.
    """

    name: ClassVar[str] = "base"
    label: ClassVar[str] = "Base Selector"
    description: ClassVar[str] = ""
    config_type: ClassVar[type[SelectorConfig]] = SelectorConfig

    def __init__(self, config: SelectorConfig | None = None, rng: random.Random | None = None):
        self.config = config if config is not None else self.config_type()
        if not isinstance(self.config, self.config_type):
            raise TypeError(
                f"{type(self).__name__} expects {self.config_type.__name__}, "
                f"got {type(self.config).__name__}"
            )
        self.rng = rng if rng is not None else random.Random()

    @abstractmethod
    def select(
        self,
        uids: Sequence[int],
        scores: Mapping[int, float],
        n: int = 0,
    ) -> CacheState:
        """Run the policy over scored candidates; ``n == 0`` means ``default_n``."""
        ...

    def __call__(self, uids: Sequence[int], scores: Mapping[int, float], n: int = 0) -> CacheState:
        return self.select(uids, scores, n)

    def describe(self) -> str:
        """Human-readable name encoding the policy and its configuration."""
        return f"{self.label} ({self.config.summary()})"

    def __repr__(self) -> str:
        return self.describe()

    def _resolve(self, n: int) -> int:
        if n < 0:
            raise ValueError(f"Result count must be non-negative, got {n}")
        return self.config.default_n if n == 0 else n


def register_selector(cls: type[BaseSelector]) -> type[BaseSelector]:
    """Class decorator to register a selector."""
    _REGISTRY[cls.name] = cls
    return cls


def get_selector(name: str, config: SelectorConfig | None = None, rng: random.Random | None = None) -> BaseSelector:
    """Instantiate a registered selector by name."""
    if name not in _REGISTRY:
        raise KeyError(f"Unknown selector: {name!r}. Available: {list(_REGISTRY)}")
    return _REGISTRY[name](config=config, rng=rng)


def list_selectors() -> dict[str, type[BaseSelector]]:
    """Return all registered selectors."""
    return dict(_REGISTRY)


def make_config(name: str, **overrides: Any) -> SelectorConfig:
    """Build the config model of a registered selector from keyword overrides."""
    if name not in _REGISTRY:
        raise KeyError(f"Unknown selector: {name!r}. Available: {list(_REGISTRY)}")
    return _REGISTRY[name].config_type(**overrides)
