import random
import unittest

from game import (
    Board,
    Direction,
    Model,
    Tile,
    tilt,
    is_game_over,
)


def make_board(rows):
    # Rows are listed top first, 0 for empty.
    return Board.from_rows(rows)


def column(board, col):
    """Values of board column COL listed top first."""
    return [row[col] for row in board.rows()]


class TestTiltRules(unittest.TestCase):
    def test_given_three_equal_in_lane_when_tilting_toward_gap_then_leading_pair_merges(self):
        board = make_board([
            [0, 0, 0, 0],
            [2, 0, 0, 0],
            [2, 0, 0, 0],
            [2, 0, 0, 0],
        ])
        res = tilt(board, Direction.UP)
        self.assertTrue(res.changed)
        self.assertEqual(res.score_delta, 4)
        self.assertEqual(column(board, 0), [4, 2, 0, 0])

    def test_given_four_equal_in_lane_when_tilting_then_two_independent_merges(self):
        board = make_board([
            [2, 0, 0, 0],
            [2, 0, 0, 0],
            [2, 0, 0, 0],
            [2, 0, 0, 0],
        ])
        res = tilt(board, Direction.UP)
        self.assertEqual(res.score_delta, 8)
        self.assertEqual(column(board, 0), [4, 4, 0, 0])

    def test_given_merge_result_equal_to_neighbor_when_tilting_then_no_second_merge(self):
        board = make_board([
            [4, 0, 0, 0],
            [2, 0, 0, 0],
            [2, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        res = tilt(board, Direction.UP)
        self.assertEqual(res.score_delta, 4)
        self.assertEqual(column(board, 0), [4, 4, 0, 0])

        # The next tilt may merge them.
        res2 = tilt(board, Direction.UP)
        self.assertEqual(res2.score_delta, 8)
        self.assertEqual(column(board, 0), [8, 0, 0, 0])

    def test_given_merge_at_far_end_when_tilting_then_result_does_not_cascade(self):
        board = make_board([
            [2, 0, 0, 0],
            [2, 0, 0, 0],
            [4, 0, 0, 0],
            [8, 0, 0, 0],
        ])
        res = tilt(board, Direction.UP)
        self.assertEqual(res.score_delta, 4)
        self.assertEqual(column(board, 0), [4, 4, 8, 0])

    def test_given_row_when_tilting_left_and_right_then_mirror_results(self):
        left = make_board([
            [2, 0, 2, 4],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        res = tilt(left, Direction.LEFT)
        self.assertEqual(res.score_delta, 4)
        self.assertEqual(left.rows()[0], [4, 4, 0, 0])

        right = make_board([
            [2, 0, 2, 4],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        res = tilt(right, Direction.RIGHT)
        self.assertEqual(res.score_delta, 4)
        self.assertEqual(right.rows()[0], [0, 0, 4, 4])

    def test_given_triple_when_tilting_down_then_bottom_pair_merges(self):
        board = make_board([
            [2, 0, 0, 0],
            [2, 0, 0, 0],
            [2, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        res = tilt(board, Direction.DOWN)
        self.assertEqual(res.score_delta, 4)
        self.assertEqual(column(board, 0), [0, 0, 2, 4])

    def test_given_lanes_with_zero_or_one_tile_packed_when_tilting_then_unchanged(self):
        board = make_board([
            [2, 0, 4, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        res = tilt(board, Direction.UP)
        self.assertFalse(res.changed)
        self.assertEqual(res.score_delta, 0)

    def test_given_lone_tile_away_from_edge_when_tilting_then_it_slides(self):
        board = make_board([
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 16, 0, 0],
            [0, 0, 0, 0],
        ])
        res = tilt(board, Direction.RIGHT)
        self.assertTrue(res.changed)
        self.assertEqual(res.score_delta, 0)
        self.assertEqual(board.tile(3, 1), Tile(16, 3, 1))

    def test_given_any_direction_when_tilting_then_perspective_restored(self):
        for d in Direction:
            board = make_board([
                [2, 4, 0, 0],
                [0, 4, 0, 2],
                [8, 0, 2, 2],
                [8, 0, 0, 0],
            ])
            tilt(board, d)
            self.assertIs(board.perspective, Direction.UP, d)
            # Every stored tile knows its own board position.
            for t in board.tiles():
                self.assertIs(board.tile(t.col, t.row), t)


class TestTiltProperties(unittest.TestCase):
    def _random_board(self, rng, size):
        rows = [[rng.choice([0, 0, 2, 2, 4, 8]) for _ in range(size)] for _ in range(size)]
        return make_board(rows)

    def test_given_random_boards_when_tilting_then_values_conserved_and_count_never_grows(self):
        rng = random.Random(2048)
        for _ in range(200):
            size = rng.choice([2, 3, 4, 5])
            board = self._random_board(rng, size)
            before = list(board.tiles())
            d = rng.choice(list(Direction))
            res = tilt(board, d)
            after = list(board.tiles())
            self.assertEqual(sum(t.value for t in after), sum(t.value for t in before) + res.score_delta)
            self.assertLessEqual(len(after), len(before))
            # Each merge removes exactly one tile.
            merges = len(before) - len(after)
            self.assertEqual(res.score_delta == 0, merges == 0)

    def test_given_random_boards_when_tilting_then_changed_matches_board_difference(self):
        rng = random.Random(7)
        for _ in range(200):
            board = self._random_board(rng, 4)
            before = board.rows()
            res = tilt(board, rng.choice(list(Direction)))
            self.assertEqual(res.changed, board.rows() != before)


class TestGameOver(unittest.TestCase):
    STALEMATE = [
        [2, 4, 2, 4],
        [4, 2, 4, 2],
        [2, 4, 2, 4],
        [4, 2, 4, 2],
    ]

    def test_given_max_tile_when_checking_then_over_even_with_space(self):
        board = make_board([
            [0, 0, 0, 0],
            [0, 2048, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        self.assertTrue(is_game_over(board))

    def test_given_full_board_without_pairs_when_checking_then_over(self):
        self.assertTrue(is_game_over(make_board(self.STALEMATE)))

    def test_given_stalemate_with_one_cell_emptied_when_checking_then_not_over(self):
        rows = [r[:] for r in self.STALEMATE]
        rows[1][2] = 0
        self.assertFalse(is_game_over(make_board(rows)))

    def test_given_only_pair_on_non_corner_edge_when_checking_then_not_over(self):
        top = [
            [2, 8, 8, 16],
            [4, 2, 4, 2],
            [2, 4, 2, 4],
            [4, 2, 4, 2],
        ]
        left = [
            [2, 4, 2, 4],
            [8, 2, 4, 2],
            [8, 4, 2, 4],
            [4, 2, 4, 2],
        ]
        right = [
            [2, 4, 2, 4],
            [4, 2, 4, 8],
            [2, 4, 2, 8],
            [4, 2, 4, 2],
        ]
        bottom = [
            [2, 4, 2, 4],
            [4, 2, 4, 2],
            [2, 4, 2, 4],
            [4, 16, 16, 2],
        ]
        for rows in (top, left, right, bottom):
            self.assertFalse(is_game_over(make_board(rows)), rows)


class TestModelFlow(unittest.TestCase):
    def test_given_tiles_added_when_tilting_then_score_accumulates(self):
        m = Model(4)
        m.add_tile(Tile.create(2, 0, 0))
        m.add_tile(Tile.create(2, 0, 2))
        m.add_tile(Tile.create(4, 3, 1))
        res = m.tilt(Direction.UP)
        self.assertTrue(res.changed)
        self.assertEqual(m.score(), 4)
        self.assertEqual(m.tile(0, 3).value, 4)
        self.assertEqual(m.tile(3, 3).value, 4)
        self.assertFalse(m.game_over())

    def test_given_winning_merge_when_tilting_then_game_over_and_max_recorded(self):
        m = Model.from_values([
            [1024, 0],
            [1024, 0],
        ], score=100)
        self.assertFalse(m.game_over())
        m.tilt('up')
        self.assertTrue(m.game_over())
        self.assertEqual(m.score(), 2148)
        self.assertEqual(m.max_score(), 2148)


if __name__ == '__main__':
    unittest.main(verbosity=2)
