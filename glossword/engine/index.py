"""Read-only lookup structure derived from a finished placement.

Maps every letter cell to the word(s) covering it and assigns crossword clue
numbers to start cells: start cells are walked in row-major order and each
distinct cell receives the next number, so an across and a down word that
begin on the same cell share one number.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..core.constants import Direction
from ..core.models import Cell, PlacedWord, PlacementResult

_DIRECTION_ORDER = {Direction.ACROSS: 0, Direction.DOWN: 1}


@dataclass(frozen=True)
class PlacementIndex:
    cell_owners: Dict[Cell, Tuple[PlacedWord, ...]]
    clue_numbers: Dict[Cell, int]

    @classmethod
    def build(cls, result: PlacementResult) -> "PlacementIndex":
        owners: Dict[Cell, List[PlacedWord]] = {}
        for word in result.placed_words:
            for cell in word.cells:
                owners.setdefault(cell, []).append(word)

        numbers: Dict[Cell, int] = {}
        ordered = sorted(
            result.placed_words,
            key=lambda w: (w.row, w.col, _DIRECTION_ORDER[w.direction]),
        )
        for word in ordered:
            if word.start not in numbers:
                numbers[word.start] = len(numbers) + 1

        return cls(
            cell_owners={cell: tuple(words) for cell, words in owners.items()},
            clue_numbers=numbers,
        )

    def owners(self, cell: Cell) -> Tuple[PlacedWord, ...]:
        return self.cell_owners.get(cell, ())

    def word_in(self, cell: Cell, direction: Direction) -> Optional[PlacedWord]:
        for word in self.owners(cell):
            if word.direction == direction:
                return word
        return None

    def is_start(self, cell: Cell) -> bool:
        return cell in self.clue_numbers

    def number_at(self, cell: Cell) -> Optional[int]:
        return self.clue_numbers.get(cell)

    def number_of(self, word: PlacedWord) -> int:
        return self.clue_numbers[word.start]

    def words_by_direction(self, direction: Direction) -> List[PlacedWord]:
        """Words of one orientation ordered by clue number."""

        words = {
            word
            for owners in self.cell_owners.values()
            for word in owners
            if word.direction == direction
        }
        return sorted(words, key=lambda w: (self.number_of(w), w.text))
