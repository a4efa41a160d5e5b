# connect_n/core/grid.py
import logging
from enum import IntEnum
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

from .constants import ROWS, COLS, MIN_SIZE, MAX_SIZE, ALL_DIRECTIONS
from .errors import OutOfBounds, ColumnFull

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]
Line = Tuple[Cell, ...]


class Owner(IntEnum):
    EMPTY = 0
    PLAYER_ONE = 1
    PLAYER_TWO = 2

    @property
    def opponent(self) -> "Owner":
        if self is Owner.EMPTY:
            raise ValueError("An empty cell has no opponent")
        return Owner.PLAYER_TWO if self is Owner.PLAYER_ONE else Owner.PLAYER_ONE


SYMBOLS = {Owner.EMPTY: ".", Owner.PLAYER_ONE: "X", Owner.PLAYER_TWO: "O"}


@lru_cache(maxsize=None)
def board_lines(columns: int, rows: int, directions: Tuple[Tuple[int, int], ...] = ALL_DIRECTIONS) -> Tuple[Line, ...]:
    """
    Every maximal straight line across a columns x rows board, for the given
    (column step, row step) directions. A line starts on a cell whose
    predecessor in that direction falls off the board and runs until it
    leaves the board again.

    The result only depends on the board shape, so it is cached.
    """
    lines = []
    for dc, dr in directions:
        for c in range(columns):
            for r in range(rows):
                pc, pr = c - dc, r - dr
                if 0 <= pc < columns and 0 <= pr < rows:
                    continue  # not the start of a line
                line = []
                cc, rr = c, r
                while 0 <= cc < columns and 0 <= rr < rows:
                    line.append((cc, rr))
                    cc += dc
                    rr += dr
                lines.append(tuple(line))
    return tuple(lines)


class Grid:
    def __init__(self, rows: int = ROWS, columns: int = COLS):
        """
        Board uses (column, row) indexing.
        Row 0 is the TOP of the board, row `rows - 1` is the BOTTOM.
        Pieces fall towards the bottom, so a column is full once row 0 is taken.
        """
        if rows < 1 or columns < 1:
            raise ValueError(f"Grid needs at least one row and one column, got {rows}x{columns}")
        self.rows = rows
        self.columns = columns
        self.cells: List[List[Owner]] = [[Owner.EMPTY] * rows for _ in range(columns)]

    @classmethod
    def from_rows(cls, matrix: Sequence[Sequence[int]]) -> "Grid":
        """
        Builds a grid from a row-major matrix (row 0 = top, values 0/1/2).
        Handy for setting up scenarios; floating pieces are rejected.
        """
        rows = len(matrix)
        columns = len(matrix[0]) if rows else 0
        grid = cls(rows, columns)
        for r, row in enumerate(matrix):
            if len(row) != columns:
                raise ValueError(f"Row {r} has {len(row)} cells, expected {columns}")
            for c, value in enumerate(row):
                grid.cells[c][r] = Owner(value)
        if not grid.is_settled():
            raise ValueError("Matrix has floating pieces (empty cell below an occupied one)")
        return grid

    def copy(self) -> "Grid":
        clone = Grid.__new__(Grid)
        clone.rows = self.rows
        clone.columns = self.columns
        clone.cells = [column[:] for column in self.cells]
        return clone

    # --- Bounds ---

    def _check_column(self, column: int):
        if not 0 <= column < self.columns:
            raise OutOfBounds(column)

    def _check_cell(self, column: int, row: int):
        if not (0 <= column < self.columns and 0 <= row < self.rows):
            raise OutOfBounds(column, row)

    # --- Queries ---

    def has_empty_cell(self, column: Optional[int] = None) -> bool:
        """
        Without a column: True if any cell on the board is empty.
        With a column: True if that column still accepts a piece.
        """
        if column is None:
            return any(Owner.EMPTY in cells for cells in self.cells)
        self._check_column(column)
        return self.cells[column][0] == Owner.EMPTY

    def is_full(self) -> bool:
        return not self.has_empty_cell()

    def lowest_empty_row(self, column: int) -> int:
        """Row where a piece dropped into `column` settles, or -1 if the column is full."""
        if not self.has_empty_cell(column):
            return -1
        cells = self.cells[column]
        for r in range(self.rows):
            if cells[r] != Owner.EMPTY:
                return r - 1
        return self.rows - 1

    def possible_moves(self) -> List[int]:
        """Columns that are not full, in ascending order."""
        return [c for c in range(self.columns) if self.cells[c][0] == Owner.EMPTY]

    def get(self, column: int, row: int) -> Owner:
        self._check_cell(column, row)
        return self.cells[column][row]

    def count(self, owner: Owner, length: int, allow_diagonal: bool = True) -> int:
        """Number of length-`length` runs of `owner` (see PatternCounter)."""
        # Late import: patterns depends on this module
        from .patterns import PatternCounter
        return PatternCounter(allow_diagonal).count(self, owner, length)

    def is_settled(self) -> bool:
        """True if every column's pieces sit in one block on the bottom row."""
        for cells in self.cells:
            seen_piece = False
            for value in cells:
                if value != Owner.EMPTY:
                    seen_piece = True
                elif seen_piece:
                    return False
        return True

    # --- Mutation ---

    def set(self, column: int, row: int, owner: Owner):
        self._check_cell(column, row)
        self.cells[column][row] = owner

    def drop(self, column: int, owner: Owner) -> int:
        """Drops a piece into `column` and returns the row it settled on."""
        self._check_column(column)
        row = self.lowest_empty_row(column)
        if row < 0:
            raise ColumnFull(column)
        self.cells[column][row] = owner
        return row

    # --- Formatting ---

    def __str__(self) -> str:
        header = " " + " ".join(str(c) for c in range(self.columns))
        lines = []
        for r in range(self.rows):
            row_cells = [SYMBOLS[self.cells[c][r]] for c in range(self.columns)]
            lines.append("|" + "|".join(row_cells) + "|")
        return header + "\n" + "\n".join(lines)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.cells == other.cells

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, columns={self.columns})"


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def new_grid(rows: int = ROWS, columns: int = COLS) -> Grid:
    """Empty grid with dimensions clamped to the supported board range."""
    clamped_rows = clamp(rows, MIN_SIZE, MAX_SIZE)
    clamped_columns = clamp(columns, MIN_SIZE, MAX_SIZE)
    if (clamped_rows, clamped_columns) != (rows, columns):
        logger.warning(
            "Board %sx%s clamped to %sx%s", rows, columns, clamped_rows, clamped_columns
        )
    return Grid(clamped_rows, clamped_columns)
