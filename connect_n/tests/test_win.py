import unittest
from connect_n.core.grid import Grid, Owner
from connect_n.core.win import WinDetector

P1, P2 = Owner.PLAYER_ONE, Owner.PLAYER_TWO

def empty_rows(rows=6, cols=7):
    return [[0] * cols for _ in range(rows)]

def drawn_rows(rows=6, cols=7):
    """Full board where no line is longer than two."""
    return [[1 if ((r // 2) + c) % 2 == 0 else 2 for c in range(cols)] for r in range(rows)]


class TestWinDetector(unittest.TestCase):
    def setUp(self):
        self.detector = WinDetector(4)

    def test_horizontal(self):
        matrix = empty_rows()
        for c in range(2, 6):
            matrix[5][c] = 1
        grid = Grid.from_rows(matrix)

        self.assertTrue(self.detector.has_win(grid, P1))
        self.assertFalse(self.detector.has_win(grid, P2))
        self.assertEqual(self.detector.winner(grid), P1)
        self.assertEqual(self.detector.winning_line(grid, P1), ((2, 5), (3, 5), (4, 5), (5, 5)))

    def test_vertical(self):
        matrix = empty_rows()
        for r in range(1, 5):
            matrix[r][6] = 2
        matrix[5][6] = 1
        grid = Grid.from_rows(matrix)

        self.assertTrue(self.detector.has_win(grid, P2))
        self.assertFalse(self.detector.has_win(grid, P1))

    def test_diagonal_up_right(self):
        """
        Scenario: '/' diagonal from (0,5) to (3,2), i.e. climbing to the right.
        """
        matrix = empty_rows()
        matrix[5][0] = 1
        matrix[5][1] = 2; matrix[4][1] = 1
        matrix[5][2] = 2; matrix[4][2] = 2; matrix[3][2] = 1
        matrix[5][3] = 2; matrix[4][3] = 2; matrix[3][3] = 2; matrix[2][3] = 1
        grid = Grid.from_rows(matrix)

        self.assertTrue(self.detector.has_win(grid, P1))
        self.assertFalse(self.detector.has_win(grid, P2))

    def test_diagonal_down_right(self):
        matrix = empty_rows()
        matrix[2][0] = 2
        matrix[3][0] = 1; matrix[3][1] = 2
        matrix[4][0] = 1; matrix[4][1] = 1; matrix[4][2] = 2
        matrix[5][0] = 1; matrix[5][1] = 2; matrix[5][2] = 1; matrix[5][3] = 2
        grid = Grid.from_rows(matrix)

        self.assertTrue(self.detector.has_win(grid, P2))
        # P1 has three down column 0 and three diagonally, but never four
        self.assertFalse(self.detector.has_win(grid, P1))

    def test_gap_is_not_a_win(self):
        matrix = empty_rows()
        matrix[5][0] = 1; matrix[5][1] = 1; matrix[5][3] = 1
        grid = Grid.from_rows(matrix)

        self.assertFalse(self.detector.has_win(grid, P1))
        self.assertIsNone(self.detector.winner(grid))
        self.assertIsNone(self.detector.winning_line(grid, P1))

    def test_longer_line_still_wins(self):
        matrix = empty_rows()
        for c in range(5):
            matrix[5][c] = 1
        grid = Grid.from_rows(matrix)
        self.assertTrue(self.detector.has_win(grid, P1))

    def test_configured_win_length(self):
        matrix = empty_rows()
        matrix[5][0] = 1; matrix[5][1] = 1; matrix[5][2] = 1
        grid = Grid.from_rows(matrix)

        self.assertTrue(WinDetector(3).has_win(grid, P1))
        self.assertFalse(WinDetector(4).has_win(grid, P1))

    def test_diagonal_toggle(self):
        matrix = empty_rows()
        matrix[5][0] = 1
        matrix[5][1] = 2; matrix[4][1] = 1
        matrix[5][2] = 2; matrix[4][2] = 2; matrix[3][2] = 1
        matrix[5][3] = 2; matrix[4][3] = 2; matrix[3][3] = 2; matrix[2][3] = 1
        grid = Grid.from_rows(matrix)

        self.assertFalse(WinDetector(4, allow_diagonal=False).has_win(grid, P1))

    def test_win_length_is_clamped(self):
        with self.assertLogs("connect_n.core.win", level="WARNING"):
            detector = WinDetector(0)
        self.assertEqual(detector.win_length, 2)

        matrix = empty_rows()
        matrix[5][0] = 1; matrix[5][1] = 1
        self.assertTrue(detector.has_win(Grid.from_rows(matrix), P1))

    def test_win_length_capped_by_board(self):
        """Connect-6 on a 3x3 board is played as connect-3."""
        grid = Grid.from_rows([
            [0, 0, 0],
            [2, 2, 0],
            [1, 1, 1],
        ])
        detector = WinDetector(6)
        self.assertTrue(detector.has_win(grid, P1))
        self.assertEqual(detector.winning_line(grid, P1), ((0, 2), (1, 2), (2, 2)))

    def test_draw(self):
        """Scenario: full board, no winner."""
        grid = Grid.from_rows(drawn_rows())

        self.assertIsNone(self.detector.winner(grid))
        self.assertTrue(self.detector.is_draw(grid))
        self.assertTrue(self.detector.is_terminal(grid))
        self.assertEqual(grid.possible_moves(), [])

    def test_full_board_with_winner_is_not_draw(self):
        matrix = drawn_rows()
        # Swap the top of column 0 so P2 stacks four: rows 0..3 become 2
        for r in range(4):
            matrix[r][0] = 2
        grid = Grid.from_rows(matrix)

        self.assertTrue(self.detector.has_win(grid, P2))
        self.assertFalse(self.detector.is_draw(grid))

    def test_open_board_is_not_draw(self):
        grid = Grid(6, 7)
        self.assertFalse(self.detector.is_draw(grid))
        self.assertFalse(self.detector.is_terminal(grid))


if __name__ == '__main__':
    unittest.main()
