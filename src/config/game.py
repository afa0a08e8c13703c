"""Game configuration dataclasses, all frozen and slotted."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class PuzzleConfig:
    """Numbered full-coverage (Threadline) puzzle parameters."""

    grid_size: int = 6  # cells per side
    waypoint_count: int = 5  # numbered waypoints, 1..K
    obstacle_count: int = 4  # requested walls (placed off the solution path)

    def __post_init__(self) -> None:
        """Reject layouts that cannot be generated."""
        if self.grid_size < 2:
            raise ValueError(f"grid_size must be >= 2, got {self.grid_size}")
        n_cells = self.grid_size * self.grid_size
        if self.waypoint_count < 2:
            raise ValueError(
                f"waypoint_count must be >= 2 (start and end), "
                f"got {self.waypoint_count}"
            )
        if self.waypoint_count > n_cells:
            raise ValueError(
                f"waypoint_count ({self.waypoint_count}) exceeds grid "
                f"capacity ({n_cells} cells)"
            )
        if self.obstacle_count < 0:
            raise ValueError(
                f"obstacle_count must be >= 0, got {self.obstacle_count}"
            )
        if self.obstacle_count + self.waypoint_count > n_cells:
            raise ValueError(
                f"obstacle_count ({self.obstacle_count}) + waypoint_count "
                f"({self.waypoint_count}) exceeds grid capacity "
                f"({n_cells} cells)"
            )


@dataclass(frozen=True, slots=True)
class HazardConfig:
    """Reach-goal hazard maze (Don't Bug the Bee) set parameters."""

    grid_size: int = 5
    hazard_count: int = 2
    hazard_reveal_duration_ms: int = 1000  # memorization phase length
    lives_total: int = 3

    def __post_init__(self) -> None:
        if self.grid_size < 2:
            raise ValueError(f"grid_size must be >= 2, got {self.grid_size}")
        max_hazards = self.grid_size * self.grid_size - 2
        if not 0 <= self.hazard_count <= max_hazards:
            raise ValueError(
                f"hazard_count must be in [0, {max_hazards}] for a "
                f"{self.grid_size}x{self.grid_size} grid, "
                f"got {self.hazard_count}"
            )
        if self.hazard_reveal_duration_ms <= 0:
            raise ValueError(
                f"hazard_reveal_duration_ms must be > 0, "
                f"got {self.hazard_reveal_duration_ms}"
            )
        if self.lives_total < 1:
            raise ValueError(
                f"lives_total must be >= 1, got {self.lives_total}"
            )


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Top-level configuration composing both games.

    All fields are frozen and typed. Cross-parameter validation runs
    in __post_init__ to reject invalid configurations early.
    """

    puzzle: PuzzleConfig = field(default_factory=PuzzleConfig)
    # A single default set; the shipped progression is defaults.HAZARD_LEVELS
    hazard_levels: tuple[HazardConfig, ...] = (HazardConfig(),)
    seed: int = 42
    description: str = ""

    def __post_init__(self) -> None:
        if not self.hazard_levels:
            raise ValueError("hazard_levels must contain at least one set")
        lives = {level.lives_total for level in self.hazard_levels}
        if len(lives) != 1:
            raise ValueError(
                f"all hazard sets must share one lives_total, got "
                f"{sorted(lives)}"
            )
