"""Logging utilities shared by the builder, the session and the CLI."""

from __future__ import annotations

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging with the project formatter.

    The builder re-runs the placer once per word, so per-attempt messages are
    emitted at DEBUG and only adoptions, stops and failures reach INFO or
    WARNING. Callers may reconfigure before building a puzzle.
    """

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "glossword")


def level_from_name(name: str, default: int = logging.INFO) -> int:
    """Map ``"debug"``/``"WARNING"``-style names to logging levels."""

    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default
