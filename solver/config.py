# solver/config.py
from dataclasses import dataclass, field
from typing import Optional
import logging
import os
import tomllib  # python >=3.11

logger = logging.getLogger(__name__)

# Probability of a spawned tile being a 4 instead of a 2
SPAWN_FOUR_PROBABILITY = 0.1
# Tile values the environment may place, in search order
SPAWN_VALUES = (2, 4)

@dataclass
class GameConfig:
    size: int = 4
    target: int = 2048
    initial_tiles: int = 2

@dataclass
class SearchConfig:
    depth: int = 5
    iterative_deepening: bool = False
    time_limit_ms: Optional[int] = None  # None means depth-only

@dataclass
class UIConfig:
    name: str = "tilesolver"
    accuracy_games: int = 10
    show_hint: bool = True

@dataclass
class Config:
    game: GameConfig = field(default_factory=GameConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("game", "search", "ui"):
            target = getattr(cfg, section)
            for k, v in raw.get(section, {}).items():
                if hasattr(target, k):
                    setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = raw["log_level"]
        return cfg

# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("TILESOLVER_CONFIG_TOML", "config.toml"))
# allow env override of depth for quick debugging
override_depth = os.environ.get("TILESOLVER_SEARCH_DEPTH")
if override_depth:
    try:
        CONFIG.search.depth = int(override_depth)
    except ValueError:
        logger.warning("ignoring non-integer TILESOLVER_SEARCH_DEPTH=%r", override_depth)
