# connect_n/core/win.py
import logging
from typing import Optional

from .constants import PIECES_TO_WIN, MIN_PIECES_TO_WIN, MAX_SIZE, ALL_DIRECTIONS, STRAIGHT_DIRECTIONS
from .grid import Grid, Owner, Line, board_lines, clamp

logger = logging.getLogger(__name__)


class WinDetector:
    """
    Exact terminal detection for the configured win length.
    Unlike PatternCounter it stops at the first completed line.
    """

    def __init__(self, win_length: int = PIECES_TO_WIN, allow_diagonal: bool = True):
        clamped = clamp(win_length, MIN_PIECES_TO_WIN, MAX_SIZE)
        if clamped != win_length:
            logger.warning("win_length=%s is out of range [%s, %s], using %s",
                           win_length, MIN_PIECES_TO_WIN, MAX_SIZE, clamped)
        self.win_length = clamped
        self.allow_diagonal = allow_diagonal
        self.directions = ALL_DIRECTIONS if allow_diagonal else STRAIGHT_DIRECTIONS

    def length_for(self, grid: Grid) -> int:
        """Win length on this grid: never longer than its larger dimension."""
        return min(self.win_length, max(grid.rows, grid.columns))

    def winning_line(self, grid: Grid, owner: Owner) -> Optional[Line]:
        """Cells of the first winning run of `owner`, or None."""
        length = self.length_for(grid)
        cells = grid.cells
        for line in board_lines(grid.columns, grid.rows, self.directions):
            if len(line) < length:
                continue
            run = 0
            for i, (c, r) in enumerate(line):
                if cells[c][r] == owner:
                    run += 1
                    if run == length:
                        return line[i - run + 1:i + 1]
                else:
                    run = 0
        return None

    def has_win(self, grid: Grid, owner: Owner) -> bool:
        return self.winning_line(grid, owner) is not None

    def winner(self, grid: Grid) -> Optional[Owner]:
        for owner in (Owner.PLAYER_ONE, Owner.PLAYER_TWO):
            if self.has_win(grid, owner):
                return owner
        return None

    def is_terminal(self, grid: Grid) -> bool:
        return self.winner(grid) is not None or not grid.has_empty_cell()

    def is_draw(self, grid: Grid) -> bool:
        """Board is full and nobody connected."""
        return not grid.has_empty_cell() and self.winner(grid) is None
