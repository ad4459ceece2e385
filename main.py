"""CLI entrypoint: build a crossword from a term list and optionally play it."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from glossword.core.constants import DEFAULT_MAX_DIM, BackspacePolicy
from glossword.core.exceptions import CrosswordError, NoWordsError
from glossword.core.models import Entry
from glossword.data.word_source import WordSourceClient, load_entries
from glossword.engine.builder import BuilderConfig, PuzzleBuilder
from glossword.engine.session import PuzzleSession, SessionConfig, discard_session, new_session
from glossword.io.clues import build_clue_lists, definition_map
from glossword.utils.logger import configure_logging, level_from_name
from glossword.utils.pretty import format_session, print_puzzle

PLAY_HELP = (
    "Commands: f ROW COL (click a cell), t TEXT (type into the focused cell),\n"
    "k KEY (Backspace, ArrowUp, ArrowDown, ArrowLeft, ArrowRight),\n"
    "r (reveal current word), c (clear grid), q (quit)"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build a crossword from term;definition pairs",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="CSV file with one 'term;definition' entry per line",
    )
    source.add_argument(
        "--base-url",
        type=str,
        help="Base URL of a catalog serving bases.json and csv/<category>/<sheet>.csv",
    )
    parser.add_argument("--category", type=str, help="Catalog category (with --base-url)")
    parser.add_argument("--sheet", type=str, help="Catalog sheet (with --base-url)")
    parser.add_argument(
        "--list",
        action="store_true",
        help="List catalog categories and sheets, then exit (with --base-url)",
    )
    parser.add_argument(
        "--max-dim",
        type=int,
        default=DEFAULT_MAX_DIM,
        help="Maximum grid dimension and word length (default %(default)s)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--keep-duplicates",
        action="store_true",
        help="Do not drop case-insensitive duplicate terms",
    )
    parser.add_argument(
        "--backspace",
        type=str,
        choices=[p.value for p in BackspacePolicy],
        default=BackspacePolicy.MOVE.value,
        help="Backspace on an empty cell: move back, or move back and clear",
    )
    parser.add_argument("--solution", action="store_true", help="Print the solution grid")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument("--play", action="store_true", help="Solve the puzzle interactively")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def collect_entries(args: argparse.Namespace, parser: argparse.ArgumentParser) -> List[Entry]:
    if args.words_file:
        return load_entries(args.words_file)

    client = WordSourceClient(args.base_url)
    if args.list:
        for category in client.categories():
            print(f"{category.category}: {', '.join(category.subcategories)}")
        raise SystemExit(0)
    if not args.category or not args.sheet:
        parser.error("--base-url requires --category and --sheet (or --list)")
    return client.entries(args.category, args.sheet)


def run_play(session: PuzzleSession, stdin: TextIO, stdout: TextIO) -> None:
    """Drive a session from line commands until EOF or ``q``."""

    print(PLAY_HELP, file=stdout)
    print(format_session(session), file=stdout)
    for raw in stdin:
        parts = raw.split()
        if not parts:
            continue
        command, rest = parts[0].lower(), parts[1:]
        cell = session.focus.cell
        if command == "q":
            break
        if command == "f" and len(rest) == 2 and all(p.lstrip("-").isdigit() for p in rest):
            session.on_click((int(rest[0]), int(rest[1])))
        elif command == "t" and cell is not None:
            for char in "".join(rest):
                session.on_type(session.focus.cell or cell, char)
        elif command == "k" and cell is not None and rest:
            if not session.on_key(cell, rest[0]):
                print(f"Key {rest[0]} ignored", file=stdout)
        elif command == "r":
            session.reveal_word()
        elif command == "c":
            session.clear()
        else:
            print(PLAY_HELP, file=stdout)
            continue
        print(format_session(session), file=stdout)
        clue = session.current_clue()
        if clue is not None:
            print(f"{clue.label}: {clue.text}", file=stdout)
        if session.is_solved():
            print("Solved!", file=stdout)
            break


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level_from_name(args.log_level))

    try:
        entries = collect_entries(args, parser)
        config = BuilderConfig(
            max_dim=args.max_dim,
            seed=args.seed,
            dedupe=not args.keep_duplicates,
        )
        result = PuzzleBuilder(config).build([entry.term for entry in entries])
    except NoWordsError:
        print("No terms found in the word source.", file=sys.stderr)
        return 1
    except CrosswordError as exc:
        print(f"Could not build a crossword: {exc}", file=sys.stderr)
        return 1

    definitions = definition_map(entries)
    session = new_session(
        result,
        definitions,
        SessionConfig(backspace_policy=BackspacePolicy(args.backspace)),
    )
    clues = build_clue_lists(session.index, session.definitions)

    payload: Dict[str, Any] = {
        "seed": args.seed,
        "puzzle": result.to_jsonable(),
        "clue_numbers": [
            {"start": [row, col], "number": number}
            for (row, col), number in sorted(session.index.clue_numbers.items())
        ],
        "clues": {
            direction.value: [clue.to_jsonable() for clue in lines]
            for direction, lines in clues.items()
        },
    }
    if args.output:
        args.output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")

    print_puzzle(result, clues, show_solution=args.solution)
    if args.play:
        run_play(session, sys.stdin, sys.stdout)
    discard_session(session)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
