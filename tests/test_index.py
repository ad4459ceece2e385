import unittest

from glossword.core.constants import Direction
from glossword.core.models import PlacedWord, PlacementResult
from glossword.engine.index import PlacementIndex
from glossword.engine.placer import place


def sample_result() -> PlacementResult:
    #    0 1 2
    # 0  C A T
    # 1  A . O
    # 2  R . E
    return PlacementResult(
        width=3,
        height=3,
        placed_words=[
            PlacedWord("CAT", 0, 0, Direction.ACROSS),
            PlacedWord("CAR", 0, 0, Direction.DOWN),
            PlacedWord("TOE", 0, 2, Direction.DOWN),
        ],
    )


class OwnershipTests(unittest.TestCase):
    def test_crossing_cells_have_two_owners(self) -> None:
        index = PlacementIndex.build(sample_result())
        self.assertEqual({w.text for w in index.owners((0, 0))}, {"CAT", "CAR"})
        self.assertEqual({w.text for w in index.owners((0, 2))}, {"CAT", "TOE"})
        self.assertEqual([w.text for w in index.owners((2, 2))], ["TOE"])

    def test_blocked_cells_have_no_owner(self) -> None:
        index = PlacementIndex.build(sample_result())
        self.assertEqual(index.owners((1, 1)), ())
        self.assertEqual(index.owners((9, 9)), ())
        self.assertIsNone(index.word_in((1, 1), Direction.ACROSS))

    def test_word_in_filters_by_direction(self) -> None:
        index = PlacementIndex.build(sample_result())
        self.assertEqual(index.word_in((0, 0), Direction.DOWN).text, "CAR")
        self.assertEqual(index.word_in((0, 0), Direction.ACROSS).text, "CAT")
        self.assertIsNone(index.word_in((2, 0), Direction.ACROSS))


class NumberingTests(unittest.TestCase):
    def test_shared_start_cell_shares_number(self) -> None:
        index = PlacementIndex.build(sample_result())
        self.assertEqual(index.clue_numbers, {(0, 0): 1, (0, 2): 2})
        cat = index.word_in((0, 0), Direction.ACROSS)
        car = index.word_in((0, 0), Direction.DOWN)
        self.assertEqual(index.number_of(cat), index.number_of(car))

    def test_numbers_follow_row_major_order(self) -> None:
        result = PlacementResult(
            width=5,
            height=5,
            placed_words=[
                PlacedWord("ROSE", 3, 1, Direction.ACROSS),
                PlacedWord("TIGER", 0, 0, Direction.ACROSS),
                PlacedWord("GOOSE", 0, 2, Direction.DOWN),
                PlacedWord("IRIS", 0, 1, Direction.DOWN),
            ],
        )
        index = PlacementIndex.build(result)
        self.assertEqual(index.number_at((0, 0)), 1)
        self.assertEqual(index.number_at((0, 1)), 2)
        self.assertEqual(index.number_at((0, 2)), 3)
        self.assertEqual(index.number_at((3, 1)), 4)
        self.assertIsNone(index.number_at((1, 1)))

    def test_numbers_are_gap_free_and_unique(self) -> None:
        result = place(["CAT", "CAR", "ART"])
        index = PlacementIndex.build(result)
        numbers = sorted(index.clue_numbers.values())
        self.assertEqual(numbers, list(range(1, len(numbers) + 1)))
        starts = {word.start for word in result.placed_words}
        self.assertEqual(set(index.clue_numbers), starts)

    def test_build_is_idempotent(self) -> None:
        result = sample_result()
        self.assertEqual(PlacementIndex.build(result), PlacementIndex.build(result))

    def test_words_by_direction_sorted_by_number(self) -> None:
        index = PlacementIndex.build(sample_result())
        self.assertEqual([w.text for w in index.words_by_direction(Direction.DOWN)], ["CAR", "TOE"])
        self.assertEqual([w.text for w in index.words_by_direction(Direction.ACROSS)], ["CAT"])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
