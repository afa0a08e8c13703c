"""JSON serialization and deserialization for game configs."""

import json
from dataclasses import asdict
from typing import Any

from dacite import from_dict, Config as DaciteConfig

from src.config.game import GameConfig

_DACITE_CONFIG = DaciteConfig(cast=[tuple], check_types=True, strict=True)


def config_to_json(config: GameConfig) -> str:
    """Serialize a GameConfig to a JSON string.

    Uses sorted keys and 2-space indent for human readability and diffability.
    """
    return json.dumps(asdict(config), indent=2, sort_keys=True)


def config_from_json(json_str: str) -> GameConfig:
    """Deserialize a JSON string to a GameConfig.

    Uses dacite with strict=True to reject unknown keys (catches schema drift)
    and cast=[tuple] to turn the hazard_levels array back into a tuple.
    Validation in __post_init__ runs as part of construction.
    """
    return config_from_dict(json.loads(json_str))


def config_to_dict(config: GameConfig) -> dict[str, Any]:
    """Convert a GameConfig to a plain dictionary."""
    return asdict(config)


def config_from_dict(d: dict[str, Any]) -> GameConfig:
    """Reconstruct a GameConfig from a plain dictionary."""
    return from_dict(data_class=GameConfig, data=d, config=_DACITE_CONFIG)
