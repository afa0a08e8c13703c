"""Seeded grid generation: Hamiltonian paths, placement, and validation."""

from src.grid.generator import (
    PuzzleGenerationError,
    build_route,
    generate_hazard_puzzle,
    generate_puzzle,
    hazard_endpoints,
)
from src.grid.hamiltonian import (
    HamiltonianResult,
    build_hamiltonian_path,
    is_hamiltonian_path,
    snake_path,
)
from src.grid.placement import (
    place_obstacles,
    place_waypoints,
    waypoint_indices,
)
from src.grid.types import (
    Cell,
    CellKind,
    GeneratedPuzzle,
    GridSnapshot,
    PuzzleLayout,
    Waypoint,
    is_adjacent,
    neighbors,
)
from src.grid.validation import (
    count_open_components,
    is_reachable,
    validate_puzzle,
)

__all__ = [
    "Cell",
    "CellKind",
    "GeneratedPuzzle",
    "GridSnapshot",
    "HamiltonianResult",
    "PuzzleGenerationError",
    "PuzzleLayout",
    "Waypoint",
    "build_hamiltonian_path",
    "build_route",
    "count_open_components",
    "generate_hazard_puzzle",
    "generate_puzzle",
    "hazard_endpoints",
    "is_adjacent",
    "is_hamiltonian_path",
    "is_reachable",
    "neighbors",
    "place_obstacles",
    "place_waypoints",
    "snake_path",
    "validate_puzzle",
    "waypoint_indices",
]
