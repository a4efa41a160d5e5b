# connect_n/core/errors.py


class GridError(Exception):
    """Base class for rejected grid operations. All of them are recoverable."""


class OutOfBounds(GridError, IndexError):
    def __init__(self, column: int, row=None):
        self.column = column
        self.row = row
        if row is None:
            super().__init__(f"Column {column} is outside the board")
        else:
            super().__init__(f"Cell ({column}, {row}) is outside the board")


class ColumnFull(GridError, ValueError):
    def __init__(self, column: int):
        self.column = column
        super().__init__(f"Column {column} is full")


class NoLegalMoves(GridError, ValueError):
    def __init__(self):
        super().__init__("No legal moves: the board is full")
