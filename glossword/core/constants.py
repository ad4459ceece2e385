"""Shared constants and enumerations for the puzzle builder and player."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


DEFAULT_MAX_DIM = 15
DEFAULT_DEBOUNCE_SECONDS = 0.5
MIN_SEED_WORDS = 2


class Direction(str, Enum):
    """Word directions supported by the grid."""

    ACROSS = "ACROSS"
    DOWN = "DOWN"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Direction.ACROSS else (1, 0)

    @property
    def label(self) -> str:
        return "Across" if self is Direction.ACROSS else "Down"


class BackspacePolicy(str, Enum):
    """What Backspace does on an empty cell inside a word."""

    MOVE = "move"
    CLEAR_PREVIOUS = "clear_previous"


class Key(str, Enum):
    """Keys the grid reacts to; values match DOM ``KeyboardEvent.key``."""

    BACKSPACE = "Backspace"
    ARROW_UP = "ArrowUp"
    ARROW_DOWN = "ArrowDown"
    ARROW_LEFT = "ArrowLeft"
    ARROW_RIGHT = "ArrowRight"


ARROW_STEPS: Dict[Key, Tuple[int, int]] = {
    Key.ARROW_UP: (-1, 0),
    Key.ARROW_DOWN: (1, 0),
    Key.ARROW_LEFT: (0, -1),
    Key.ARROW_RIGHT: (0, 1),
}


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
