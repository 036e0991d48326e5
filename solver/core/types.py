"""Closed enumerations and the search result record shared by the core."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Direction(Enum):
    UP = (0, "Up")
    RIGHT = (1, "Right")
    DOWN = (2, "Down")
    LEFT = (3, "Left")

    def __init__(self, code: int, description: str):
        self.code = code
        self.description = description

    def __str__(self):
        return self.description


class Outcome(Enum):
    """Result of one full turn (move plus spawn)."""

    CONTINUE = (0, "Successful move, the game continues.")
    WIN = (1, "You won, the game ended!")
    NO_MORE_MOVES = (2, "No more moves, the game ended!")
    INVALID_MOVE = (3, "Invalid move!")

    def __init__(self, code: int, description: str):
        self.code = code
        self.description = description

    @property
    def is_over(self) -> bool:
        return self in (Outcome.WIN, Outcome.NO_MORE_MOVES)


class Role(Enum):
    PLAYER = "player"
    ENVIRONMENT = "environment"

    @property
    def opponent(self) -> "Role":
        return Role.ENVIRONMENT if self is Role.PLAYER else Role.PLAYER


@dataclass
class SearchResult:
    direction: Optional[Direction]
    value: int

    def __iter__(self):
        return iter((self.direction, self.value))
