import io
import json
import logging
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

import main
from glossword.core.constants import Direction
from glossword.core.models import PlacedWord, PlacementResult
from glossword.engine.session import new_session
from glossword.io.clues import build_clue_lists
from glossword.utils.logger import level_from_name
from glossword.utils.pretty import format_clues, format_session, format_solution


def sample_result() -> PlacementResult:
    return PlacementResult(
        width=3,
        height=3,
        placed_words=[
            PlacedWord("CAT", 0, 0, Direction.ACROSS),
            PlacedWord("CAR", 0, 0, Direction.DOWN),
            PlacedWord("TOE", 0, 2, Direction.DOWN),
        ],
    )


class PrettyTests(unittest.TestCase):
    def test_solution_marks_blocked_cells(self) -> None:
        rendered = format_solution(sample_result())
        self.assertIn("C  A  T", rendered)
        self.assertIn("#", rendered)

    def test_clue_lists_render_both_directions(self) -> None:
        session = new_session(sample_result(), {"CAT": "Feline"})
        clues = build_clue_lists(session.index, session.definitions)
        self.assertEqual([c.number for c in clues[Direction.DOWN]], [1, 2])
        rendered = format_clues(clues)
        self.assertIn("1. Feline (3)", rendered)
        self.assertIn("--- Down ---", rendered)

    def test_session_render_shows_wrong_letters_lowercase(self) -> None:
        session = new_session(sample_result())
        session.on_type((0, 0), "X")
        rendered = format_session(session)
        self.assertIn("x", rendered)
        self.assertIn("[.]", rendered)


class LogLevelTests(unittest.TestCase):
    def test_level_names(self) -> None:
        self.assertEqual(level_from_name("debug"), logging.DEBUG)
        self.assertEqual(level_from_name(" ERROR "), logging.ERROR)
        self.assertEqual(level_from_name("chatty"), logging.INFO)


class MainTests(unittest.TestCase):
    def run_main(self, argv) -> tuple:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main.main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_builds_puzzle_and_writes_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            words = Path(tmpdir) / "words.csv"
            words.write_text("cat;Feline\ncar;Vehicle\nart;Painting and sculpture\n", encoding="utf-8")
            output = Path(tmpdir) / "out.json"
            code, stdout, _ = self.run_main(
                ["--words-file", str(words), "--seed", "7", "--output", str(output), "--log-level", "ERROR"]
            )
            payload = json.loads(output.read_text(encoding="utf-8"))
        self.assertEqual(code, 0)
        self.assertEqual(sorted(w["text"] for w in payload["puzzle"]["words"]), ["ART", "CAR", "CAT"])
        clue_texts = [c["clue"] for lines in payload["clues"].values() for c in lines]
        self.assertIn("Feline", clue_texts)
        self.assertIn("--- Across ---", stdout)

    def test_empty_source_reports_no_terms(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            words = Path(tmpdir) / "words.csv"
            words.write_text("\n", encoding="utf-8")
            code, _, stderr = self.run_main(["--words-file", str(words), "--log-level", "ERROR"])
        self.assertEqual(code, 1)
        self.assertIn("No terms", stderr)

    def test_play_loop_solves_puzzle(self) -> None:
        session = new_session(sample_result())
        commands = io.StringIO("f 0 0\nt cat\nf 1 0\nt ar\nf 1 2\nt oe\n")
        out = io.StringIO()
        main.run_play(session, commands, out)
        self.assertTrue(session.is_solved())
        self.assertIn("Solved!", out.getvalue())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
