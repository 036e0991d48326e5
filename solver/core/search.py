import logging
import sys
import time
from typing import Optional

from solver.config import CONFIG, SPAWN_VALUES
from solver.core.board import Board
from solver.core.evaluator import Evaluator
from solver.core.types import Direction, Role, SearchResult
from solver.core.utils import format_info

logger = logging.getLogger(__name__)

INF = sys.maxsize
WIN_SCORE = INF


class SearchAborted(Exception):
    """Raised at a ply boundary once the time budget is spent."""


class SearchEngine:
    def __init__(self, evaluator: Optional[Evaluator] = None, depth: Optional[int] = None):
        self.evaluator = evaluator or Evaluator()
        self.max_depth = CONFIG.search.depth if depth is None else depth
        self.time_limit_ms = CONFIG.search.time_limit_ms
        self.iterative_deepening = CONFIG.search.iterative_deepening

        self._deadline: Optional[float] = None
        self.nodes = 0

    def find_best_move(self, board: Board, depth: Optional[int] = None) -> Optional[Direction]:
        """Recommended direction for ``board``; None if the board is already terminal."""
        return self.search(board, depth).direction

    def search(self, board: Board, depth: Optional[int] = None, prune: bool = True) -> SearchResult:
        """Fixed-depth search from a player ply.

        With ``prune=False`` every node is searched with the full window and
        no cutoffs, which gives the plain minimax value for cross-checking.
        """
        depth = self.max_depth if depth is None else depth
        return self._root_search(board, depth, prune)

    def _root_search(self, board: Board, depth: int, prune: bool = True) -> SearchResult:
        if depth < 0:
            raise ValueError(f"Search depth must be non-negative, got {depth}")
        self.nodes = 0
        return self._search(board.clone(), depth, -INF, INF, Role.PLAYER, prune)

    def search_best_move(self, board: Board) -> SearchResult:
        """Search honouring the configured time limit and iterative deepening.

        An iteration cut short by the time limit is discarded, the result of
        the deepest completed one is returned. If not even the first iteration
        completes, a depth-1 search is run without the budget so a live board
        always gets a direction.
        """
        self._deadline = None
        if self.time_limit_ms is not None:
            self._deadline = time.time() + self.time_limit_ms / 1000.0

        depths = range(1, self.max_depth + 1) if self.iterative_deepening else [self.max_depth]
        result = None
        start_time = time.time()
        try:
            for d in depths:
                try:
                    result = self._root_search(board, d)
                except SearchAborted:
                    logger.debug("search interrupted at depth %d", d)
                    break
                elapsed = time.time() - start_time
                logger.info(format_info(d, result.value, self.nodes, elapsed, result.direction, WIN_SCORE))
        finally:
            self._deadline = None

        if result is None:
            fallback = min(1, self.max_depth)
            logger.debug("no iteration completed, falling back to depth %d", fallback)
            result = self._root_search(board, fallback)
        return result

    def _search(self, board: Board, depth: int, alpha: int, beta: int, role: Role, prune: bool) -> SearchResult:
        self.nodes += 1
        if self._deadline is not None and time.time() >= self._deadline:
            raise SearchAborted()

        if board.is_terminal():
            if board.has_reached_target():
                return SearchResult(None, WIN_SCORE)
            return SearchResult(None, min(board.score, 1))

        if depth == 0:
            return SearchResult(None, self.evaluator.evaluate(board))

        # Every ply, player or environment, costs one unit of depth.
        next_depth = depth - 1
        next_role = role.opponent

        if role is Role.PLAYER:
            best_direction = None
            for direction in Direction:
                child = board.clone()
                points = child.move(direction)
                if points == 0 and child.same_grid(board):
                    continue

                if prune:
                    value = self._search(child, next_depth, alpha, beta, next_role, prune).value
                else:
                    value = self._search(child, next_depth, -INF, INF, next_role, prune).value

                if value > alpha:
                    alpha = value
                    best_direction = direction

                if prune and beta <= alpha:
                    break
            return SearchResult(best_direction, alpha)

        cells = board.empty_cell_positions()
        if not cells:
            return SearchResult(None, 0)

        for cell in cells:
            row, col = divmod(cell, board.size)
            for tile in SPAWN_VALUES:
                child = board.clone()
                child.set_cell(row, col, tile)

                if prune:
                    value = self._search(child, next_depth, alpha, beta, next_role, prune).value
                else:
                    value = self._search(child, next_depth, -INF, INF, next_role, prune).value

                if value < beta:
                    beta = value

                if prune and beta <= alpha:
                    return SearchResult(None, beta)
        return SearchResult(None, beta)


def find_best_move(board: Board, depth: int) -> Optional[Direction]:
    """Best direction for ``board`` searched ``depth`` plies deep."""
    return SearchEngine(depth=depth).find_best_move(board)
