"""Data models shared by the builder, the index and the session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .constants import Bounds, Direction

Cell = Tuple[int, int]


@dataclass(frozen=True)
class Entry:
    """A term and its definition, as read from a word source."""

    term: str
    definition: str


@dataclass(frozen=True)
class PlacedWord:
    """A word laid out on the grid, anchored at its first cell."""

    text: str
    row: int
    col: int
    direction: Direction

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def start(self) -> Cell:
        return (self.row, self.col)

    @property
    def cells(self) -> List[Cell]:
        return [self.cell_at(i) for i in range(self.length)]

    def cell_at(self, index: int) -> Cell:
        dr, dc = self.direction.step
        return (self.row + dr * index, self.col + dc * index)

    def index_of(self, cell: Cell) -> Optional[int]:
        """Position of ``cell`` inside the word, or None if not covered."""
        row, col = cell
        if self.direction == Direction.ACROSS:
            offset = col - self.col
            on_line = row == self.row
        else:
            offset = row - self.row
            on_line = col == self.col
        if on_line and 0 <= offset < self.length:
            return offset
        return None


@dataclass(frozen=True)
class PlacementResult:
    """A finished layout: tight bounding box plus the placed words."""

    width: int
    height: int
    placed_words: Tuple[PlacedWord, ...]
    _letters: Dict[Cell, str] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "placed_words", tuple(self.placed_words))
        letters: Dict[Cell, str] = {}
        for word in self.placed_words:
            for index, cell in enumerate(word.cells):
                letters[cell] = word.text[index]
        object.__setattr__(self, "_letters", letters)

    @property
    def bounds(self) -> Bounds:
        return Bounds(rows=self.height, cols=self.width)

    @property
    def words(self) -> List[str]:
        return [word.text for word in self.placed_words]

    def contains(self, cell: Cell) -> bool:
        return self.bounds.contains(*cell)

    def letter_at(self, cell: Cell) -> Optional[str]:
        """Solution letter at ``cell``; None for blocked or out-of-range cells."""
        return self._letters.get(cell)

    def is_blocked(self, cell: Cell) -> bool:
        return cell not in self._letters

    def letter_count(self) -> int:
        return len(self._letters)

    def solution_grid(self) -> List[List[str]]:
        """Row-major grid of letters, ``""`` for blocked cells."""
        return [
            [self._letters.get((r, c), "") for c in range(self.width)]
            for r in range(self.height)
        ]

    def to_jsonable(self) -> Dict[str, object]:
        return {
            "width": self.width,
            "height": self.height,
            "words": [
                {
                    "text": word.text,
                    "start": [word.row, word.col],
                    "direction": word.direction.value,
                }
                for word in self.placed_words
            ],
            "grid": ["".join(ch or "." for ch in row) for row in self.solution_grid()],
        }


@dataclass
class FocusState:
    """Cursor state of a session; ``cell`` is None while idle."""

    cell: Optional[Cell] = None
    direction: Optional[Direction] = None
    sticky: Optional[Direction] = None

    @property
    def is_idle(self) -> bool:
        return self.cell is None

    def reset(self) -> None:
        self.cell = None
        self.direction = None
        self.sticky = None


@dataclass(frozen=True)
class CellView:
    """Everything a renderer needs to draw one cell."""

    row: int
    col: int
    letter: Optional[str]
    user_value: str = ""
    is_start: bool = False
    clue_number: Optional[int] = None
    is_correct: bool = False
    is_active: bool = False

    @property
    def is_blocked(self) -> bool:
        return self.letter is None
