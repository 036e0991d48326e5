"""Core solver components: board, evaluator, search, and shared types."""

from .board import Board
from .evaluator import Evaluator
from .search import SearchEngine, find_best_move
from .types import Direction, Outcome, Role, SearchResult
