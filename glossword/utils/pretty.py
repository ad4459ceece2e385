"""Pretty-print helpers for puzzles and sessions."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Dict, List, Mapping

from ..core.constants import Direction

if TYPE_CHECKING:
    from ..core.models import CellView, PlacementResult
    from ..engine.session import PuzzleSession
    from ..io.clues import ClueLine


BLOCKED = "#"
EMPTY = "."


def _frame(rows: List[List[str]], width: int) -> str:
    header_cells = [f"{c:>3}" for c in range(width)]
    lines = ["    " + "".join(header_cells)]
    lines.append("    " + "-" * (3 * width))
    for r, row_cells in enumerate(rows):
        lines.append(f"{r:>2} |" + "".join(f"{symbol:>3}" for symbol in row_cells))
    return "\n".join(lines)


def format_solution(result: PlacementResult) -> str:
    rows = [[letter or BLOCKED for letter in row] for row in result.solution_grid()]
    return _frame(rows, result.width)


def view_symbol(view: CellView) -> str:
    if view.is_blocked:
        return BLOCKED
    if not view.user_value:
        return EMPTY
    # Lowercase marks a wrong letter.
    return view.user_value if view.is_correct else view.user_value.lower()


def format_session(session: PuzzleSession) -> str:
    rows = []
    focused = session.focus.cell
    for line in session.cell_views():
        symbols = []
        for view in line:
            symbol = view_symbol(view)
            if (view.row, view.col) == focused:
                symbol = f"[{symbol}]"
            elif view.is_start:
                symbol = f"{view.clue_number}{symbol}" if symbol == EMPTY else symbol
            symbols.append(symbol)
        rows.append(symbols)
    return _frame(rows, session.result.width)


def format_clues(clues: Mapping[Direction, List[ClueLine]]) -> str:
    lines: List[str] = []
    for direction in (Direction.ACROSS, Direction.DOWN):
        lines.append(f"--- {direction.label} ---")
        for clue in clues.get(direction, []):
            lines.append(f"  {clue.number:>2}. {clue.text} ({len(clue.word)})")
    return "\n".join(lines)


def print_puzzle(
    result: PlacementResult,
    clues: Dict[Direction, List[ClueLine]],
    *,
    show_solution: bool = False,
    stream=None,
) -> None:
    """Print the grid, a short summary and both clue lists."""

    stream = stream or sys.stdout
    if show_solution:
        print(format_solution(result), file=stream)
        print(file=stream)
    total = result.width * result.height
    letters = result.letter_count()
    print(f"Size:    {result.height} x {result.width} ({total} cells)", file=stream)
    print(f"Letters: {letters} ({letters / total * 100:.0f}%)", file=stream)
    print(f"Words:   {len(result.placed_words)}", file=stream)
    print(file=stream)
    print(format_clues(clues), file=stream)
