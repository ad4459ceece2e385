"""Clue lists derived from a placement index and a definition lookup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterable, List, Mapping

from ..core.constants import Direction
from ..core.models import Entry, PlacedWord

if TYPE_CHECKING:
    from ..engine.index import PlacementIndex


@dataclass(frozen=True)
class ClueLine:
    number: int
    direction: Direction
    word: str
    text: str

    @property
    def label(self) -> str:
        return f"{self.number}. {self.direction.label}"

    def to_jsonable(self) -> Dict[str, object]:
        return {
            "number": self.number,
            "direction": self.direction.value,
            "length": len(self.word),
            "clue": self.text,
        }


def definition_map(entries: Iterable[Entry]) -> Dict[str, str]:
    """Map uppercase terms to definitions; the first definition of a term wins."""

    mapping: Dict[str, str] = {}
    for entry in entries:
        mapping.setdefault(entry.term.strip().upper(), entry.definition)
    return mapping


def current_clue_line(
    index: "PlacementIndex", word: PlacedWord, definitions: Mapping[str, str]
) -> ClueLine:
    # Fall back to the answer itself when the source had no definition.
    return ClueLine(
        number=index.number_of(word),
        direction=word.direction,
        word=word.text,
        text=definitions.get(word.text) or word.text,
    )


def build_clue_lists(
    index: "PlacementIndex", definitions: Mapping[str, str]
) -> Dict[Direction, List[ClueLine]]:
    """Across and down clue lists, each ordered by clue number."""

    return {
        direction: [
            current_clue_line(index, word, definitions)
            for word in index.words_by_direction(direction)
        ]
        for direction in (Direction.ACROSS, Direction.DOWN)
    }
