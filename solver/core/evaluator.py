"""Static board evaluator used at the search horizon."""

import math

import numpy as np

from solver.core.board import Board

NEIGHBOR_OFFSETS = [(dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)]


def clustering_penalty(grid) -> int:
    """Sum over occupied cells of the mean |difference| to occupied neighbors.

    Neighbors are the 8 surrounding cells; each cell's mean is floored, and a
    cell with no occupied neighbor contributes nothing.
    """
    grid = np.asarray(grid, dtype=np.int64)
    rows, cols = grid.shape
    padded = np.zeros((rows + 2, cols + 2), dtype=np.int64)
    padded[1:-1, 1:-1] = grid

    total = np.zeros_like(grid)
    count = np.zeros_like(grid)
    for dr, dc in NEIGHBOR_OFFSETS:
        neighbor = padded[1 + dr:1 + dr + rows, 1 + dc:1 + dc + cols]
        occupied = neighbor > 0
        total += np.where(occupied, np.abs(grid - neighbor), 0)
        count += occupied

    mask = (grid > 0) & (count > 0)
    return int(np.sum(total[mask] // count[mask]))


def heuristic_score(actual_score: int, empty_cells: int, clustering: int) -> int:
    """Combine score, free space and clustering into one value.

    Never below ``min(actual_score, 1)``, the value of simply stopping.
    """
    bonus = actual_score * math.log(actual_score) * empty_cells if actual_score > 0 else 0.0
    score = math.floor(actual_score + bonus - clustering)
    return max(score, min(actual_score, 1))


class Evaluator:
    def evaluate(self, board: Board) -> int:
        return heuristic_score(board.score, board.empty_cell_count(),
                               clustering_penalty(board.get_grid()))
