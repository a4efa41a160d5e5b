# connect_n/core/search.py
import logging
import math
import time
from typing import Optional

from pydantic import BaseModel

from .constants import MIN_DEPTH, MAX_DEPTH
from .errors import NoLegalMoves
from .evaluator import Evaluator
from .grid import Grid, Owner, clamp
from .win import WinDetector

logger = logging.getLogger(__name__)


class SearchResult(BaseModel):
    best_column: int
    score: float
    depth: int
    nodes_explored: int = 0
    timed_out: bool = False


class Search:
    def __init__(
        self,
        evaluator: Optional[Evaluator] = None,
        win_detector: Optional[WinDetector] = None,
        use_pruning: bool = True,
        time_limit: Optional[float] = None,
    ):
        self.evaluator = evaluator or Evaluator()
        self.win_detector = win_detector or WinDetector()
        self.use_pruning = use_pruning
        # Seconds; once exceeded every remaining node is scored by the heuristic
        self.time_limit = time_limit
        self.nodes = 0
        self._deadline: Optional[float] = None
        self._timed_out = False

    def decide(self, grid: Grid, player: Owner, max_depth: int) -> SearchResult:
        """
        Root Entry Point.
        Alpha-beta minimax with `player` as the maximizer at depth 0.
        The live grid is never touched: the search works on its own copy.
        """
        moves = grid.possible_moves()
        if not moves:
            raise NoLegalMoves()

        clamped = clamp(max_depth, MIN_DEPTH, MAX_DEPTH)
        if clamped != max_depth:
            logger.warning("max_depth=%s is out of range [%s, %s], using %s",
                           max_depth, MIN_DEPTH, MAX_DEPTH, clamped)
            max_depth = clamped
        self.nodes = 0
        self._timed_out = False
        self._deadline = time.monotonic() + self.time_limit if self.time_limit is not None else None

        scratch = grid.copy()
        alpha, beta = -math.inf, math.inf

        # Ties keep the first column found; later columns must be strictly better
        best_score = -math.inf
        best_column = moves[0]

        for column in moves:
            row = scratch.lowest_empty_row(column)
            scratch.set(column, row, player)
            try:
                score = self._minimax(scratch, player, 1, max_depth, alpha, beta, maximizing=False)
            finally:
                scratch.set(column, row, Owner.EMPTY)

            if score > best_score:
                best_score = score
                best_column = column
            if best_score > alpha:
                alpha = best_score

        logger.debug(
            "Player %s picks column %s (score %s, depth %s, %s nodes)",
            player.name, best_column, best_score, max_depth, self.nodes
        )
        return SearchResult(
            best_column=best_column,
            score=best_score,
            depth=max_depth,
            nodes_explored=self.nodes,
            timed_out=self._timed_out,
        )

    def _minimax(
        self,
        grid: Grid,
        player: Owner,
        depth: int,
        max_depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
    ) -> float:
        self.nodes += 1

        # 1. Leaf: game over, depth budget spent, or out of time
        won = self.win_detector.has_win(grid, player)
        lost = self.win_detector.has_win(grid, player.opponent)
        if won or lost or not grid.has_empty_cell() or depth >= max_depth or self._out_of_time():
            return self._leaf_score(grid, player, won, lost, max_depth - depth + 1)

        side = player if maximizing else player.opponent
        best = -math.inf if maximizing else math.inf

        # 2. Recursive Search (ascending columns)
        for column in grid.possible_moves():
            row = grid.lowest_empty_row(column)
            grid.set(column, row, side)
            try:
                score = self._minimax(grid, player, depth + 1, max_depth, alpha, beta, not maximizing)
            finally:
                grid.set(column, row, Owner.EMPTY)

            if maximizing:
                if score > best:
                    best = score
                if best > alpha:
                    alpha = best
            else:
                if score < best:
                    best = score
                if best < beta:
                    beta = best

            if self.use_pruning and beta <= alpha:
                break  # Cutoff

        return best

    def _leaf_score(self, grid: Grid, player: Owner, won: bool, lost: bool, plies_left: int) -> float:
        """
        Heuristic score, pushed past any heuristic value when exactly one side
        has connected. Wins found closer to the root weigh more.
        """
        score = self.evaluator.evaluate(grid, player)
        if won != lost:
            bonus = self.evaluator.win_score * plies_left
            score += bonus if won else -bonus
        return score

    def _out_of_time(self) -> bool:
        if self._deadline is None:
            return False
        if time.monotonic() >= self._deadline:
            self._timed_out = True
            return True
        return False
