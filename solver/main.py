from typing import Optional, Tuple

from solver.core.board import Board
from solver.core.evaluator import Evaluator
from solver.core.search import SearchEngine
from solver.core.types import Direction, Outcome
from solver.core.utils import render_board


class Engine:
    """One live game plus the solver that advises on it."""

    def __init__(self, depth: Optional[int] = None, size: Optional[int] = None,
                 target: Optional[int] = None, seed: Optional[int] = None):
        self.board = Board(size=size, target=target, seed=seed)
        self.search = SearchEngine(Evaluator(), depth=depth)
        self.history = []

    def get_best_move(self) -> Tuple[Optional[Direction], int]:
        """Hint for the live board, within the configured depth and time budget."""
        direction, value = self.search.search_best_move(self.board)
        return direction, value

    def make_move(self, direction: Direction) -> Outcome:
        outcome = self.board.apply_turn(direction)
        self.history.append((direction, outcome))
        return outcome

    def autoplay(self, max_turns: Optional[int] = None) -> Outcome:
        """Follow the solver's hint until the game ends (or ``max_turns`` pass)."""
        outcome = Outcome.CONTINUE
        turns = 0
        while not outcome.is_over:
            if max_turns is not None and turns >= max_turns:
                break
            hint, _ = self.get_best_move()
            if hint is None:
                return Outcome.WIN if self.board.has_reached_target() else Outcome.NO_MORE_MOVES
            outcome = self.make_move(hint)
            turns += 1
        return outcome

    def print_board(self, hint: Optional[Direction] = None):
        print(render_board(self.board.get_grid(), self.board.score, hint))
