"""Preset configurations, the single source of difficulty parameters."""

from src.config.game import GameConfig, HazardConfig, PuzzleConfig

# Threadline difficulty tiers: 6x6 grid, 5 numbers, walls scale with tier.
DIFFICULTY_PRESETS: dict[str, PuzzleConfig] = {
    "easy": PuzzleConfig(grid_size=6, waypoint_count=5, obstacle_count=2),
    "medium": PuzzleConfig(grid_size=6, waypoint_count=5, obstacle_count=4),
    "hard": PuzzleConfig(grid_size=6, waypoint_count=5, obstacle_count=6),
    "expert": PuzzleConfig(grid_size=6, waypoint_count=5, obstacle_count=8),
}

# Five sets per bee level; the final set grows the grid to 6x6.
HAZARD_LEVELS: tuple[HazardConfig, ...] = (
    HazardConfig(grid_size=5, hazard_count=2),
    HazardConfig(grid_size=5, hazard_count=3),
    HazardConfig(grid_size=5, hazard_count=4),
    HazardConfig(grid_size=5, hazard_count=5),
    HazardConfig(grid_size=6, hazard_count=6),
)

DEFAULT_CONFIG = GameConfig(
    puzzle=DIFFICULTY_PRESETS["medium"], hazard_levels=HAZARD_LEVELS
)


def preset(name: str) -> PuzzleConfig:
    """Look up a difficulty preset by name (case-insensitive)."""
    try:
        return DIFFICULTY_PRESETS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown difficulty {name!r}; expected one of "
            f"{sorted(DIFFICULTY_PRESETS)}"
        ) from None
