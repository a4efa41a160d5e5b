# connect_n/core/evaluator.py
import logging
from typing import Dict, Optional

from .constants import WEIGHT_BASE, TOP_RUN_LENGTH, MIN_PIECES_TO_WIN, MAX_SIZE
from .grid import Grid, Owner, clamp
from .patterns import PatternCounter

logger = logging.getLogger(__name__)


def run_weights(top_length: int = TOP_RUN_LENGTH) -> Dict[int, float]:
    """{1: 1, 2: 10, 3: 100, ...} up to `top_length`."""
    return {k: float(WEIGHT_BASE ** (k - 1)) for k in range(1, top_length + 1)}


class Evaluator:
    def __init__(self, counter: Optional[PatternCounter] = None, top_length: int = TOP_RUN_LENGTH):
        self.counter = counter or PatternCounter()
        clamped = clamp(top_length, MIN_PIECES_TO_WIN, MAX_SIZE)
        if clamped != top_length:
            logger.warning("top_length=%s is out of range [%s, %s], using %s",
                           top_length, MIN_PIECES_TO_WIN, MAX_SIZE, clamped)
        self.top_length = clamped
        self.weights = run_weights(clamped)
        # Fewer than 10**3 windows of one length fit on a MAX_SIZE board,
        # so no heuristic score reaches this value
        self.win_score = float(WEIGHT_BASE ** (clamped + 3))

    def evaluate(self, grid: Grid, for_player: Owner) -> float:
        """
        Signed heuristic score. Positive favours `for_player`.
        evaluate(g, P1) == -evaluate(g, P2) for every grid.
        """
        mine = self.counter.counts(grid, for_player, self.top_length)
        theirs = self.counter.counts(grid, for_player.opponent, self.top_length)
        return sum(weight * (mine[k] - theirs[k]) for k, weight in self.weights.items())
