"""Game configuration: frozen, hashable, serializable dataclasses."""

from src.config.game import GameConfig, HazardConfig, PuzzleConfig
from src.config.defaults import (
    DEFAULT_CONFIG,
    DIFFICULTY_PRESETS,
    HAZARD_LEVELS,
    preset,
)
from src.config.hashing import (
    config_hash,
    full_config_hash,
    layout_config_hash,
    puzzle_id,
)
from src.config.serialization import (
    config_from_dict,
    config_from_json,
    config_to_dict,
    config_to_json,
)

__all__ = [
    "GameConfig",
    "HazardConfig",
    "PuzzleConfig",
    "DEFAULT_CONFIG",
    "DIFFICULTY_PRESETS",
    "HAZARD_LEVELS",
    "preset",
    "config_hash",
    "full_config_hash",
    "layout_config_hash",
    "puzzle_id",
    "config_from_dict",
    "config_from_json",
    "config_to_dict",
    "config_to_json",
]
