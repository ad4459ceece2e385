"""Default word placer: lays out words so that crossing words share letters.

The builder treats the placer as an opaque callable ``place(words)`` that
either returns a :class:`PlacementResult` or raises :class:`PlacementError`.
This implementation places the first word across at the origin and then
fits every following word onto the board by crossing an existing letter,
trying the best-scoring positions first and backtracking when a later word
cannot be fitted. The board is unbounded while placing and is cropped to a
tight bounding box at the end. Repeated words are laid out like any other
word, so a copy always crosses its twin or lands elsewhere.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from ..core.constants import MIN_SEED_WORDS, Direction
from ..core.exceptions import PlacementError
from ..core.models import Cell, PlacedWord, PlacementResult
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

Placer = Callable[[Sequence[str]], PlacementResult]

_DIRECTION_ORDER = {Direction.ACROSS: 0, Direction.DOWN: 1}


@dataclass
class PlacerConfig:
    """Search limits for :class:`WordPlacer`."""

    max_candidates: int = 12
    max_steps: int = 4000


class _Board:
    """Mutable letter board with undoable placements."""

    def __init__(self) -> None:
        self.letters: Dict[Cell, str] = {}
        self.owners: Dict[Cell, Set[Direction]] = {}
        self.words: List[PlacedWord] = []

    def extent(self) -> Tuple[int, int, int, int]:
        rows = [r for r, _ in self.letters]
        cols = [c for _, c in self.letters]
        return min(rows), min(cols), max(rows), max(cols)

    def fits(self, text: str, row: int, col: int, direction: Direction) -> Optional[int]:
        """Return the number of crossings if the word fits here, else None."""

        dr, dc = direction.step
        length = len(text)
        if (row - dr, col - dc) in self.letters:
            return None
        if (row + dr * length, col + dc * length) in self.letters:
            return None

        crossings = 0
        for index, letter in enumerate(text):
            cell = (row + dr * index, col + dc * index)
            existing = self.letters.get(cell)
            if existing is not None:
                if existing != letter or direction in self.owners[cell]:
                    return None
                crossings += 1
                continue
            r, c = cell
            if (r + dc, c + dr) in self.letters or (r - dc, c - dr) in self.letters:
                return None
        return crossings

    def candidates(self, text: str) -> List[PlacedWord]:
        """Every legal crossing position for ``text``, best first."""

        top, left, bottom, right = self.extent()
        scored = []
        seen: Set[Tuple[int, int, Direction]] = set()
        for (row, col), letter in sorted(self.letters.items()):
            for index, candidate_letter in enumerate(text):
                if candidate_letter != letter:
                    continue
                for direction in (Direction.ACROSS, Direction.DOWN):
                    dr, dc = direction.step
                    start = (row - dr * index, col - dc * index, direction)
                    if start in seen:
                        continue
                    seen.add(start)
                    crossings = self.fits(text, *start)
                    if not crossings:
                        continue
                    s_row, s_col = start[0], start[1]
                    e_row = s_row + dr * (len(text) - 1)
                    e_col = s_col + dc * (len(text) - 1)
                    area = (max(bottom, e_row) - min(top, s_row) + 1) * (
                        max(right, e_col) - min(left, s_col) + 1
                    )
                    key = (-crossings, area, s_row, s_col, _DIRECTION_ORDER[direction])
                    scored.append((key, PlacedWord(text, s_row, s_col, direction)))
        scored.sort(key=lambda item: item[0])
        return [word for _, word in scored]

    def place_undoable(self, word: PlacedWord) -> Callable[[], None]:
        """Place a word and return an undo callable for backtracking."""

        added: List[Cell] = []
        for index, cell in enumerate(word.cells):
            if cell not in self.letters:
                self.letters[cell] = word.text[index]
                self.owners[cell] = set()
                added.append(cell)
            self.owners[cell].add(word.direction)
        self.words.append(word)

        def undo() -> None:
            self.words.pop()
            for cell in word.cells:
                self.owners[cell].discard(word.direction)
            for cell in added:
                del self.letters[cell]
                del self.owners[cell]

        return undo

    def to_result(self) -> PlacementResult:
        top, left, bottom, right = self.extent()
        placed = tuple(
            PlacedWord(word.text, word.row - top, word.col - left, word.direction)
            for word in self.words
        )
        return PlacementResult(
            width=right - left + 1,
            height=bottom - top + 1,
            placed_words=placed,
        )


class WordPlacer:
    """Backtracking crossword layout for an ordered word list."""

    def __init__(self, config: Optional[PlacerConfig] = None) -> None:
        self.config = config or PlacerConfig()
        self._steps = 0

    def __call__(self, words: Sequence[str]) -> PlacementResult:
        return self.place(words)

    def place(self, words: Sequence[str]) -> PlacementResult:
        cleaned = [word.strip().upper() for word in words]
        if len(cleaned) < MIN_SEED_WORDS:
            raise PlacementError(f"Need at least {MIN_SEED_WORDS} words, got {len(cleaned)}")
        if any(not word for word in cleaned):
            raise PlacementError("Cannot place an empty word")

        board = _Board()
        board.place_undoable(PlacedWord(cleaned[0], 0, 0, Direction.ACROSS))
        self._steps = 0
        if not self._search(board, cleaned, 1):
            raise PlacementError(f"Cannot place word list: {', '.join(cleaned)}")
        result = board.to_result()
        LOGGER.debug(
            "Placed %d words in %dx%d after %d steps",
            len(cleaned),
            result.width,
            result.height,
            self._steps,
        )
        return result

    def _search(self, board: _Board, words: List[str], index: int) -> bool:
        if index == len(words):
            return True
        for candidate in board.candidates(words[index])[: self.config.max_candidates]:
            self._steps += 1
            if self._steps > self.config.max_steps:
                raise PlacementError(
                    f"Search budget exhausted after {self.config.max_steps} steps"
                )
            undo = board.place_undoable(candidate)
            if self._search(board, words, index + 1):
                return True
            undo()
        return False


def place(words: Sequence[str]) -> PlacementResult:
    """Lay out ``words`` with the default placer settings."""

    return WordPlacer().place(words)
