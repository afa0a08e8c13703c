"""Stable identities for configs and the puzzles generated from them.

A puzzle is fully determined by its layout parameters and its seed, so
``puzzle_id`` names it by both. Fields that only affect play (reveal timing,
lives) are left out of the layout hash: two hazard sets that differ only in
those fields produce the same grids.
"""

import hashlib
import json
from dataclasses import asdict
from typing import Any

from src.config.game import GameConfig, HazardConfig, PuzzleConfig

# HazardConfig fields with no influence on the generated grid.
PLAY_ONLY_FIELDS: tuple[str, ...] = (
    "hazard_reveal_duration_ms",
    "lives_total",
)


def _digest(data: dict[str, Any]) -> str:
    serialized = json.dumps(data, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()[:16]


def config_hash(config: Any, exclude_fields: tuple[str, ...] = ()) -> str:
    """First 16 hex characters of SHA-256 over a config's sorted JSON.

    Args:
        config: Any config dataclass.
        exclude_fields: Top-level field names left out of the hash.
    """
    data = asdict(config)
    for name in exclude_fields:
        data.pop(name, None)
    return _digest(data)


def layout_config_hash(config: PuzzleConfig | HazardConfig) -> str:
    """Hash of the parameters that shape a generated grid."""
    if isinstance(config, HazardConfig):
        return config_hash(config, PLAY_ONLY_FIELDS)
    return config_hash(config)


def puzzle_id(config: PuzzleConfig | HazardConfig, seed: int) -> str:
    """Shareable puzzle name, e.g. ``"3f9a1c0d-20261018"``.

    Equal ids always regenerate the same layout.
    """
    return f"{layout_config_hash(config)[:8]}-{seed}"


def full_config_hash(config: GameConfig) -> str:
    """Hash of the whole game config, seed and description included."""
    return config_hash(config)
