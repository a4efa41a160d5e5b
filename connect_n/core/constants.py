# connect_n/core/constants.py

# --- Board Dimensions ---
ROWS = 6
COLS = 7
# Smallest and largest board the settings layer accepts
MIN_SIZE = 3
MAX_SIZE = 8

# --- Rules ---
PIECES_TO_WIN = 4
MIN_PIECES_TO_WIN = 2

# --- Scoring System ---
# Each additional connected piece is worth an order of magnitude more:
# 1 -> 1, 2 -> 10, 3 -> 100, 4 -> 1000
WEIGHT_BASE = 10
TOP_RUN_LENGTH = 4

# --- Search ---
DEFAULT_DEPTH = 5
MIN_DEPTH = 1
MAX_DEPTH = 10

# Line directions as (column step, row step). Row 0 is the TOP of the board.
HORIZONTAL = (1, 0)
VERTICAL = (0, 1)
DIAGONAL_RIGHT = (1, 1)
DIAGONAL_LEFT = (-1, 1)
STRAIGHT_DIRECTIONS = (HORIZONTAL, VERTICAL)
ALL_DIRECTIONS = (HORIZONTAL, VERTICAL, DIAGONAL_RIGHT, DIAGONAL_LEFT)
