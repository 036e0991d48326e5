"""Numpy-backed N×N tile board: moves, merges, spawns and terminal detection."""

import math
import random
from typing import List, Optional, Tuple

import numpy as np

from solver.config import CONFIG, SPAWN_FOUR_PROBABILITY
from solver.core.types import Direction, Outcome

# Counter-clockwise quarter turns that bring each direction onto "toward column 0"
LEFT_TURNS = {
    Direction.UP: 1,
    Direction.RIGHT: 2,
    Direction.DOWN: 3,
    Direction.LEFT: 0,
}


def is_tile_value(value: int) -> bool:
    """True for powers of two >= 2."""
    return value >= 2 and (value & (value - 1)) == 0


def slide_row(row: List[int]) -> Tuple[List[int], int]:
    """Compact and merge one row toward index 0.

    Returns (new_row, points). Cells left of ``last_merge`` are settled, so a
    tile produced by a merge is never merged again during the same slide.
    """
    cells = list(row)
    points = 0
    last_merge = 0
    for j in range(1, len(cells)):
        if cells[j] == 0:
            continue

        prev = j - 1
        while prev > last_merge and cells[prev] == 0:
            prev -= 1

        if cells[prev] == 0:
            cells[prev] = cells[j]
            cells[j] = 0
        elif cells[prev] == cells[j]:
            cells[prev] *= 2
            cells[j] = 0
            points += cells[prev]
            last_merge = prev + 1
        elif prev + 1 != j:
            cells[prev + 1] = cells[j]
            cells[j] = 0
    return cells, points


class Board:
    def __init__(self, size: Optional[int] = None, target: Optional[int] = None,
                 seed: Optional[int] = None, rng: Optional[random.Random] = None,
                 initial_tiles: Optional[int] = None):
        """Fresh board with ``initial_tiles`` random tiles (two by default)."""
        size = CONFIG.game.size if size is None else size
        target = CONFIG.game.target if target is None else target
        initial_tiles = CONFIG.game.initial_tiles if initial_tiles is None else initial_tiles
        if size <= 0:
            raise ValueError(f"Board size must be positive, got {size}")
        if not is_tile_value(target):
            raise ValueError(f"Target must be a power of two >= 2, got {target}")

        self.size = size
        self.target = target
        self.score = 0
        self.rng = rng or random.Random(seed)
        self._grid = np.zeros((size, size), dtype=np.int64)
        self._empty_count: Optional[int] = None

        for _ in range(initial_tiles):
            self.spawn_random_tile()

    @classmethod
    def from_grid(cls, rows, score: int = 0, target: Optional[int] = None,
                  seed: Optional[int] = None) -> "Board":
        """Build a board from explicit rows; no random tiles are added."""
        raw = np.array(rows)
        if raw.size and raw.dtype.kind not in "iu":
            raise ValueError(f"Grid values must be integers, got dtype {raw.dtype}")
        grid = raw.astype(np.int64)
        if grid.ndim != 2 or grid.shape[0] != grid.shape[1]:
            raise ValueError(f"Grid must be square, got shape {grid.shape}")
        for value in grid.flat:
            if value != 0 and not is_tile_value(int(value)):
                raise ValueError(f"Invalid tile value {value}")
        if score < 0:
            raise ValueError(f"Score must be non-negative, got {score}")

        board = cls(size=grid.shape[0], target=target, seed=seed, initial_tiles=0)
        board._grid = grid
        board.score = score
        return board

    def clone(self) -> "Board":
        """Copy with a private grid; the random generator is shared."""
        copy = Board.__new__(Board)
        copy.size = self.size
        copy.target = self.target
        copy.score = self.score
        copy.rng = self.rng
        copy._grid = self._grid.copy()
        copy._empty_count = self._empty_count
        return copy

    def get_grid(self) -> np.ndarray:
        """Return a copy of the grid."""
        return self._grid.copy()

    def same_grid(self, other: "Board") -> bool:
        return np.array_equal(self._grid, other._grid)

    def max_tile(self) -> int:
        return int(self._grid.max())

    @property
    def minimum_win_score(self) -> int:
        """Lowest score any game can have when the target tile first appears.

        Building 2**k purely from spawned 4s scores (k - 2) * 2**k.
        """
        return max(0, (int(math.log2(self.target)) - 2) * self.target)

    # ── moves ──────────────────────────────────────────────────────────────

    def rotate_left(self):
        """Quarter turn counter-clockwise."""
        self._grid = np.rot90(self._grid, 1).copy()

    def rotate_right(self):
        """Quarter turn clockwise."""
        self._grid = np.rot90(self._grid, -1).copy()

    def move(self, direction: Direction) -> int:
        """Slide all tiles toward ``direction``. Returns the points scored."""
        turns = LEFT_TURNS[direction]
        rotated = np.rot90(self._grid, turns)

        points = 0
        rows = []
        for row in rotated.tolist():
            new_row, row_points = slide_row(row)
            rows.append(new_row)
            points += row_points

        moved = np.rot90(np.array(rows, dtype=np.int64), -turns).copy()
        if not np.array_equal(moved, self._grid):
            self._grid = moved
            self._empty_count = None
        self.score += points
        return points

    def apply_turn(self, direction: Direction) -> Outcome:
        """Move, spawn a tile if anything changed, and report the outcome."""
        before = self._grid.copy()
        points = self.move(direction)
        changed = not np.array_equal(before, self._grid)
        spawned = self.spawn_random_tile() if changed else False

        if points >= self.target:
            return Outcome.WIN
        if self.is_terminal():
            return Outcome.NO_MORE_MOVES
        if not changed and not spawned:
            return Outcome.INVALID_MOVE
        return Outcome.CONTINUE

    # ── cells ──────────────────────────────────────────────────────────────

    def set_cell(self, row: int, col: int, value: int):
        """Place a tile into an empty cell."""
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise ValueError(f"Cell ({row}, {col}) is outside a {self.size}x{self.size} board")
        if not is_tile_value(value):
            raise ValueError(f"Invalid tile value {value}")
        if self._grid[row, col] != 0:
            raise ValueError(f"Cell ({row}, {col}) is already occupied")
        self._grid[row, col] = value
        self._empty_count = None

    def empty_cell_positions(self) -> List[int]:
        """Row-major ids (row * size + col) of empty cells."""
        return [int(i) for i in np.flatnonzero(self._grid == 0)]

    def empty_cell_count(self) -> int:
        if self._empty_count is None:
            self._empty_count = len(self.empty_cell_positions())
        return self._empty_count

    def spawn_random_tile(self) -> bool:
        """Put a 2 (90%) or a 4 (10%) on a random empty cell. False if full."""
        empty = self.empty_cell_positions()
        if not empty:
            return False
        cell = self.rng.choice(empty)
        value = 2 if self.rng.random() >= SPAWN_FOUR_PROBABILITY else 4
        self.set_cell(cell // self.size, cell % self.size, value)
        return True

    # ── game state ─────────────────────────────────────────────────────────

    def has_reached_target(self) -> bool:
        if self.score < self.minimum_win_score:
            return False
        return bool((self._grid >= self.target).any())

    def is_terminal(self) -> bool:
        """Target reached, or a full grid where no direction changes anything."""
        if self.has_reached_target():
            return True
        if self.empty_cell_count() > 0:
            return False
        for direction in Direction:
            probe = self.clone()
            if probe.move(direction) != 0 or not probe.same_grid(self):
                return False
        return True

    def __repr__(self):
        return f"Board(size={self.size}, score={self.score}, grid={self._grid.tolist()})"
