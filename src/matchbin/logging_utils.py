"""Logging setup for command-line use; the library itself never adds handlers."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "matchbin"


def configure_logging(level: str = "WARNING", console: Console | None = None) -> logging.Logger:
    """Route ``matchbin`` log records through a rich handler at ``level``."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level!r}")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric)
    logger.handlers.clear()
    handler = RichHandler(console=console or Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
