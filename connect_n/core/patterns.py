# connect_n/core/patterns.py
from typing import Dict

from .constants import ALL_DIRECTIONS, STRAIGHT_DIRECTIONS
from .grid import Grid, Owner, board_lines


class PatternCounter:
    """
    Counts fixed-length runs of one owner's pieces along the board lines.

    A window of k cells counts once if all k cells belong to the owner, and
    overlapping windows are counted independently: three in a row yields one
    3-run and two 2-runs in that direction. Boards with several overlapping
    threats therefore weigh more.

    Each line is walked once while tracking the length of the current run;
    a window of length k ends on a cell exactly when the run reaching that
    cell is at least k long. The cost is one pass over the board per
    direction, whatever k is.
    """

    def __init__(self, allow_diagonal: bool = True):
        self.allow_diagonal = allow_diagonal
        self.directions = ALL_DIRECTIONS if allow_diagonal else STRAIGHT_DIRECTIONS

    def count(self, grid: Grid, owner: Owner, length: int) -> int:
        if length < 1:
            raise ValueError(f"Run length must be positive, got {length}")
        if length == 1:
            return self._count_singles(grid, owner)

        count = 0
        cells = grid.cells
        for line in board_lines(grid.columns, grid.rows, self.directions):
            if len(line) < length:
                continue
            run = 0
            for c, r in line:
                if cells[c][r] == owner:
                    run += 1
                    if run >= length:
                        count += 1
                else:
                    run = 0
        return count

    def counts(self, grid: Grid, owner: Owner, max_length: int) -> Dict[int, int]:
        """Run counts for every length 1..max_length, from the same directional passes."""
        totals = {k: 0 for k in range(1, max_length + 1)}
        if max_length < 1:
            return totals
        totals[1] = self._count_singles(grid, owner)

        cells = grid.cells
        for line in board_lines(grid.columns, grid.rows, self.directions):
            run = 0
            for c, r in line:
                if cells[c][r] == owner:
                    run += 1
                    # The run ending here closes one window of each length 2..run
                    for k in range(2, min(run, max_length) + 1):
                        totals[k] += 1
                else:
                    run = 0
        return totals

    def _count_singles(self, grid: Grid, owner: Owner) -> int:
        # Single pieces have no direction, count each one once
        return sum(column.count(owner) for column in grid.cells)
