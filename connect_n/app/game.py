import logging
import random
import time
from typing import List, Optional

from connect_n.app.config import GameSettings
from connect_n.app.enums import FirstPlayer, GameStatus, PlayerType
from connect_n.app.schemas import MoveRecord
from connect_n.core.evaluator import Evaluator
from connect_n.core.grid import Grid, Owner, new_grid
from connect_n.core.patterns import PatternCounter
from connect_n.core.search import Search
from connect_n.core.win import WinDetector

# Logger setup
logger = logging.getLogger(__name__)

HUMAN = Owner.PLAYER_ONE
COMPUTER = Owner.PLAYER_TWO


class ConnectN:
    def __init__(self, settings: Optional[GameSettings] = None, rng: Optional[random.Random] = None):
        """
        One game between a human (Player 1) and the computer (Player 2).
        Owns the live grid; the search only ever sees copies of it.
        """
        self.settings = settings or GameSettings()
        self.rng = rng or random.Random()

        counter = PatternCounter(self.settings.allow_diagonal)
        self.counter = counter
        self.win_detector = WinDetector(self.settings.win_length, self.settings.allow_diagonal)
        self.search = Search(
            evaluator=Evaluator(counter, top_length=self.settings.win_length),
            win_detector=self.win_detector,
        )
        self.restart()

    def restart(self):
        """Fresh board, new opening side."""
        self.board: Grid = new_grid(self.settings.rows, self.settings.columns)
        self.winner: Optional[Owner] = None
        self.history: List[MoveRecord] = []
        self.current_turn = self._opening_side()

    def _opening_side(self) -> Owner:
        first = self.settings.first_player
        if first == FirstPlayer.HUMAN:
            return HUMAN
        if first == FirstPlayer.COMPUTER:
            return COMPUTER
        return self.rng.choice([HUMAN, COMPUTER])

    @property
    def current_player_type(self) -> PlayerType:
        return PlayerType.HUMAN if self.current_turn == HUMAN else PlayerType.COMPUTER

    @property
    def status(self) -> GameStatus:
        if self.winner is not None:
            return GameStatus.COMPLETED
        if self.is_draw():
            return GameStatus.DRAW
        return GameStatus.IN_PROGRESS

    def is_over(self) -> bool:
        return self.status != GameStatus.IN_PROGRESS

    def get_valid_moves(self) -> List[int]:
        return self.board.possible_moves()

    def is_valid_move(self, col: int) -> bool:
        if col < 0 or col >= self.board.columns:
            return False
        return self.board.has_empty_cell(col)

    def drop_piece(self, col: int) -> bool:
        """
        Drops the current player's piece into the specified column.
        Returns True if successful, False if invalid or game over.
        """
        if self.is_over() or not self.is_valid_move(col):
            return False
        self._apply(col)
        return True

    def computer_move(self) -> MoveRecord:
        """Runs the search for the side to move and plays its column."""
        if self.is_over():
            raise ValueError(f"Game is over ({self.status})")

        player = self.current_turn
        if logger.isEnabledFor(logging.DEBUG):
            for owner in (Owner.PLAYER_ONE, Owner.PLAYER_TWO):
                counts = self.counter.counts(self.board, owner, self.settings.win_length)
                logger.debug("Runs for %s: %s", owner.name, counts)

        start = time.perf_counter()
        result = self.search.decide(self.board, player, self.settings.search_depth)
        duration = time.perf_counter() - start

        record = self._apply(result.best_column)
        record.score = result.score
        record.nodes_explored = result.nodes_explored
        record.duration = duration
        logger.info(
            "Computer plays column %s (score %.1f, %s nodes, %.2fs)",
            result.best_column, result.score, result.nodes_explored, duration
        )
        return record

    def _apply(self, col: int) -> MoveRecord:
        player = self.current_turn
        row = self.board.drop(col, player)
        record = MoveRecord(player=int(player), column=col, row=row)
        self.history.append(record)

        if self.win_detector.has_win(self.board, player):
            self.winner = player
        else:
            self.switch_turn()
        return record

    def switch_turn(self):
        self.current_turn = self.current_turn.opponent

    def is_draw(self) -> bool:
        """Returns True if board is full and no winner."""
        return self.winner is None and not self.board.has_empty_cell()

    # --- Formatting ---

    def get_visual_board(self) -> str:
        """Generates an ASCII grid representation."""
        return str(self.board)
