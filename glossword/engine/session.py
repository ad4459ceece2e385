"""Interactive grid state machine.

A :class:`PuzzleSession` owns one placement together with everything derived
from it: the placement index, the player's answer grid and the cursor. It
is either idle (no focused cell) or editing a cell in a direction.

Direction handling goes through :func:`resolve_word` only. The *sticky*
direction is the last direction the player confirmed, by focusing a word or
by moving the cursor; it decides which word a crossing cell belongs to.

Focus moves triggered by typing, Backspace and the arrow keys are deferred
onto the session scheduler so that the typed letter is committed before the
cursor leaves the cell. With ``auto_settle`` every entry point runs those
deferred steps before returning.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Optional

from ..core.constants import ARROW_STEPS, BackspacePolicy, Direction, Key
from ..core.exceptions import SessionClosedError
from ..core.models import Cell, CellView, FocusState, PlacedWord, PlacementResult
from ..io.clues import ClueLine, current_clue_line
from ..utils.logger import get_logger
from .index import PlacementIndex
from .scheduler import Scheduler


LOGGER = get_logger(__name__)


@dataclass
class SessionConfig:
    backspace_policy: BackspacePolicy = BackspacePolicy.MOVE
    auto_settle: bool = True


def resolve_word(
    index: PlacementIndex, cell: Cell, sticky: Optional[Direction]
) -> Optional[PlacedWord]:
    """Pick the word a cell belongs to.

    The sticky direction wins when a word of that orientation covers the
    cell; otherwise the across word is preferred over the down word. Blocked
    and out-of-range cells resolve to None.
    """

    if sticky is not None:
        word = index.word_in(cell, sticky)
        if word is not None:
            return word
    return index.word_in(cell, Direction.ACROSS) or index.word_in(cell, Direction.DOWN)


def direction_of_move(origin: Cell, target: Cell) -> Optional[Direction]:
    """Sticky direction implied by moving the cursor from ``origin`` to ``target``."""

    if origin[1] != target[1]:
        return Direction.ACROSS
    if origin[0] == target[0]:
        return None
    return Direction.DOWN


class PuzzleSession:
    def __init__(
        self,
        result: PlacementResult,
        definitions: Optional[Mapping[str, str]] = None,
        config: Optional[SessionConfig] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        self.result = result
        self.index = PlacementIndex.build(result)
        self.definitions: Dict[str, str] = {
            term.upper(): text for term, text in (definitions or {}).items()
        }
        self.config = config or SessionConfig()
        self.scheduler = scheduler or Scheduler()
        self.answers: List[List[str]] = [
            ["" for _ in range(result.width)] for _ in range(result.height)
        ]
        self.focus = FocusState()
        self.current_word: Optional[PlacedWord] = None
        self.closed = False

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def resolve(self, cell: Cell) -> Optional[PlacedWord]:
        return resolve_word(self.index, cell, self.focus.sticky)

    def is_focusable(self, cell: Cell) -> bool:
        return self.result.contains(cell) and not self.result.is_blocked(cell)

    def answer_at(self, cell: Cell) -> str:
        if not self.result.contains(cell):
            return ""
        row, col = cell
        return self.answers[row][col]

    def is_correct(self, cell: Cell) -> bool:
        letter = self.result.letter_at(cell)
        return letter is not None and self.answer_at(cell) == letter

    def is_solved(self) -> bool:
        return all(self.is_correct(cell) for cell in self.index.cell_owners)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def on_focus(self, cell: Cell) -> Optional[PlacedWord]:
        self._ensure_open()
        word = self.resolve(cell)
        if word is None:
            return None
        self.focus.cell = cell
        self.focus.direction = word.direction
        if self.focus.sticky is None:
            self.focus.sticky = word.direction
        self.current_word = word
        return word

    def on_click(self, cell: Cell) -> Optional[PlacedWord]:
        """A pointer click forgets the sticky direction before focusing."""

        self._ensure_open()
        if not self.is_focusable(cell):
            return None
        self.focus.sticky = None
        return self.on_focus(cell)

    def on_type(self, cell: Cell, text: str) -> None:
        self._ensure_open()
        if not self.is_focusable(cell):
            return
        char = text[-1:].upper() if text else ""
        row, col = cell
        self.answers[row][col] = char

        word = self.on_focus(cell)
        if word is None:
            return
        position = word.index_of(cell)
        if char and position is not None and position < word.length - 1:
            self._defer_move(cell, word.cell_at(position + 1))
        self._maybe_settle()

    def on_key(self, cell: Cell, key: str) -> bool:
        """Handle a navigation key; return True when the key was consumed."""

        self._ensure_open()
        try:
            parsed = Key(key)
        except ValueError:
            return False
        word = self.resolve(cell)
        if word is None:
            return False

        if parsed is Key.BACKSPACE:
            position = word.index_of(cell)
            if self.answer_at(cell) or not position:
                return False
            previous = word.cell_at(position - 1)
            if self.config.backspace_policy is BackspacePolicy.CLEAR_PREVIOUS:
                self.answers[previous[0]][previous[1]] = ""
            self._defer_move(cell, previous, update_sticky=False)
        else:
            dr, dc = ARROW_STEPS[parsed]
            target = (cell[0] + dr, cell[1] + dc)
            if not self.is_focusable(target):
                LOGGER.debug("Ignoring %s from %s: no cell at %s", key, cell, target)
                return True
            self._defer_move(cell, target)
        self._maybe_settle()
        return True

    def settle(self) -> int:
        """Run deferred focus moves; returns how many ran."""

        return self.scheduler.run_ready()

    # ------------------------------------------------------------------
    # Helpers for renderers and the CLI
    # ------------------------------------------------------------------
    def cell_views(self) -> Iterator[List[CellView]]:
        active = set(self.current_word.cells) if self.current_word else set()
        for row in range(self.result.height):
            line = []
            for col in range(self.result.width):
                cell = (row, col)
                line.append(
                    CellView(
                        row=row,
                        col=col,
                        letter=self.result.letter_at(cell),
                        user_value=self.answers[row][col],
                        is_start=self.index.is_start(cell),
                        clue_number=self.index.number_at(cell),
                        is_correct=self.is_correct(cell),
                        is_active=cell in active,
                    )
                )
            yield line

    def current_clue(self) -> Optional[ClueLine]:
        if self.current_word is None:
            return None
        return current_clue_line(self.index, self.current_word, self.definitions)

    def reveal_word(self) -> None:
        if self.current_word is None:
            return
        for position, (row, col) in enumerate(self.current_word.cells):
            self.answers[row][col] = self.current_word.text[position]

    def clear(self) -> None:
        for line in self.answers:
            for col in range(len(line)):
                line[col] = ""
        self.focus.reset()
        self.current_word = None

    def close(self) -> None:
        self.closed = True
        self.focus.reset()
        self.current_word = None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _defer_move(self, origin: Cell, target: Cell, update_sticky: bool = True) -> None:
        def move() -> None:
            if self.closed or not self.is_focusable(target):
                return
            if update_sticky:
                self.focus.sticky = direction_of_move(origin, target)
            self.on_focus(target)

        self.scheduler.call_soon(move)

    def _maybe_settle(self) -> None:
        if self.config.auto_settle:
            self.settle()

    def _ensure_open(self) -> None:
        if self.closed:
            raise SessionClosedError("Session has been discarded")


def new_session(
    result: PlacementResult,
    definitions: Optional[Mapping[str, str]] = None,
    config: Optional[SessionConfig] = None,
    scheduler: Optional[Scheduler] = None,
) -> PuzzleSession:
    session = PuzzleSession(result, definitions, config, scheduler)
    LOGGER.debug(
        "New session for %dx%d puzzle with %d clue numbers",
        result.width,
        result.height,
        len(session.index.clue_numbers),
    )
    return session


def discard_session(session: PuzzleSession) -> None:
    session.close()
