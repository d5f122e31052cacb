"""Selector presets — named selector configurations for quick reuse."""

from __future__ import annotations

import random
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from matchbin.selectors import BaseSelector, get_selector, make_config


class SelectorPreset(BaseModel):
    """A selector name plus the config overrides to build it with."""

    name: str
    selector: str
    config: dict[str, Any] = Field(default_factory=dict)

    def build(self, rng: random.Random | None = None) -> BaseSelector:
        return get_selector(self.selector, config=make_config(self.selector, **self.config), rng=rng)


# ── Built-in presets ─────────────────────────────────────

BUILTIN_PRESETS: dict[str, SelectorPreset] = {
    "ranked": SelectorPreset(name="ranked", selector="ranked"),
    "roulette": SelectorPreset(name="roulette", selector="roulette"),
    "exp-roulette": SelectorPreset(name="exp-roulette", selector="exp-roulette"),
    "ranked-strict": SelectorPreset(
        name="ranked-strict",
        selector="ranked",
        config={"threshold": 0.5},
    ),
    "roulette-sharp": SelectorPreset(
        name="roulette-sharp",
        selector="roulette",
        config={"skew": 0.01, "max_baseline": None},
    ),
    "roulette-flat": SelectorPreset(
        name="roulette-flat",
        selector="roulette",
        config={"skew": 10.0},
    ),
}


# ── Loading & lookup ─────────────────────────────────────

def load_presets(config_dir: Path | None = None) -> dict[str, SelectorPreset]:
    """Merge built-in presets with user-defined ones from .matchbin/presets.toml.

    A user preset looks like::

        [presets.picky]
        selector = "exp-roulette"
        threshold = 0.8
        b = 0.05
    """
    presets = dict(BUILTIN_PRESETS)

    toml_path = (config_dir or Path.cwd()) / ".matchbin" / "presets.toml"
    if toml_path.is_file():
        with open(toml_path, "rb") as f:
            data = tomllib.load(f)
        for name, cfg in data.get("presets", {}).items():
            cfg = dict(cfg)
            selector = cfg.pop("selector", None)
            if selector is None:
                raise ValueError(f"Preset {name!r} in {toml_path} has no 'selector' key")
            # Validate eagerly so a bad file fails on load, not on first use.
            make_config(selector, **cfg)
            presets[name] = SelectorPreset(name=name, selector=selector, config=cfg)

    return presets


def get_preset(name: str, config_dir: Path | None = None) -> SelectorPreset:
    """Look up a preset by name (builtins + user config)."""
    presets = load_presets(config_dir)
    if name not in presets:
        available = ", ".join(sorted(presets))
        raise KeyError(f"Unknown preset {name!r}. Available: {available}")
    return presets[name]
