"""Seeded puzzle generation for both games.

Numbered full-coverage puzzles (Threadline) are built around a Hamiltonian
path; reach-goal hazard mazes (Don't Bug the Bee) are built around a seeded
start-to-goal route. In both cases obstacles are drawn only from cells off
the generating path, so every layout is solvable by construction.
"""

import logging
import math

from src.config.game import HazardConfig, PuzzleConfig
from src.grid.hamiltonian import build_hamiltonian_path, search_path
from src.grid.placement import place_obstacles, place_waypoints
from src.grid.types import Cell, GeneratedPuzzle, PuzzleLayout, Waypoint
from src.grid.validation import validate_puzzle
from src.reproducibility.prng import next_int

log = logging.getLogger(__name__)

ROUTE_MAX_ATTEMPTS = 10


class PuzzleGenerationError(Exception):
    """Raised in strict mode when a generated puzzle fails validation."""


def _report(
    puzzle: GeneratedPuzzle, full_coverage: bool, strict: bool
) -> None:
    errors = validate_puzzle(puzzle, full_coverage=full_coverage)
    if not errors:
        return
    message = "; ".join(errors)
    if strict:
        raise PuzzleGenerationError(
            f"Generated puzzle failed validation (seed={puzzle.layout.seed}): "
            f"{message}"
        )
    log.error("Generated puzzle failed validation: %s", message)


def generate_puzzle(
    config: PuzzleConfig, seed: int, strict: bool = False
) -> GeneratedPuzzle:
    """Generate a numbered full-coverage puzzle.

    Pipeline:
    1. Hamiltonian path over the whole grid (snake fallback on failure)
    2. Waypoints 1..K spread along the path
    3. Obstacles on cells off the path
    4. Validation of the assembled layout

    Args:
        config: Layout parameters (validated at construction).
        seed: Generation seed. Same config + seed gives an identical grid.
        strict: Raise instead of logging when validation fails.

    Returns:
        GeneratedPuzzle with the immutable layout and its solution path.

    Raises:
        PuzzleGenerationError: If strict and the layout is invalid.
    """
    size = config.grid_size
    result = build_hamiltonian_path(size, seed)
    waypoints = place_waypoints(result.path, config.waypoint_count, seed)
    obstacles = place_obstacles(
        size, result.path, waypoints, config.obstacle_count, seed
    )

    layout = PuzzleLayout.build(
        size, waypoints, obstacles, seed=seed, attempt=result.attempt
    )
    puzzle = GeneratedPuzzle(
        layout=layout,
        solution_path=result.path,
        used_fallback=result.used_fallback,
    )
    _report(puzzle, full_coverage=True, strict=strict)

    log.info(
        "Puzzle generated (size=%d, waypoints=%d, obstacles=%d/%d, seed=%d, "
        "fallback=%s)",
        size,
        len(waypoints),
        len(obstacles),
        config.obstacle_count,
        seed,
        result.used_fallback,
    )
    return puzzle


def staircase_route(start: Cell, goal: Cell) -> list[Cell]:
    """Monotone route: walk the rows first, then the columns."""
    route = [start]
    row, col = start
    step = 1 if goal[0] >= row else -1
    while row != goal[0]:
        row += step
        route.append((row, col))
    step = 1 if goal[1] >= col else -1
    while col != goal[1]:
        col += step
        route.append((row, col))
    return route


def hazard_endpoints(size: int, seed: int) -> tuple[Cell, Cell]:
    """Start in the top-left quadrant, goal in the bottom-right quadrant."""
    half = size // 2
    far = math.ceil(size / 2)
    start = (next_int(0, half, seed), next_int(0, half, seed + 1))
    goal = (
        next_int(far, size - 1, seed + 2),
        next_int(far, size - 1, seed + 3),
    )
    if goal == start:
        # Only possible on tiny grids where the quadrants overlap
        corner = (size - 1, size - 1)
        goal = corner if start != corner else (0, 0)
    return start, goal


def build_route(size: int, start: Cell, goal: Cell, seed: int) -> list[Cell]:
    """Seeded simple route from ``start`` to ``goal``.

    Uses the same depth-first machinery as the Hamiltonian builder, stopping
    at the goal. Routes are capped at the Manhattan distance plus one detour
    of ``size // 2`` cells each way, leaving room for hazards. Falls back
    to a staircase route if the budget runs out.
    """
    budget = 8 * size * size
    distance = abs(goal[0] - start[0]) + abs(goal[1] - start[1])
    max_length = distance + 1 + 2 * (size // 2)
    for attempt in range(ROUTE_MAX_ATTEMPTS):
        route = search_path(
            size,
            start,
            seed + attempt,
            budget,
            goal=goal,
            max_length=max_length,
        )
        if route is not None:
            return route
    log.warning("Route search failed (seed=%d), using staircase route", seed)
    return staircase_route(start, goal)


def generate_hazard_puzzle(
    config: HazardConfig, seed: int, strict: bool = False
) -> GeneratedPuzzle:
    """Generate a reach-goal hazard maze.

    The start is waypoint 1 and the goal waypoint 2. Hazards are placed off
    a seeded start-to-goal route, which is never shown to the player but
    guarantees the maze can be won.

    Args:
        config: Set parameters (validated at construction).
        seed: Generation seed.
        strict: Raise instead of logging when validation fails.

    Returns:
        GeneratedPuzzle whose layout marks hazards as obstacles.
    """
    size = config.grid_size
    start, goal = hazard_endpoints(size, seed)
    route = build_route(size, start, goal, seed)
    waypoints = (Waypoint(1, start), Waypoint(2, goal))
    hazards = place_obstacles(
        size, route, waypoints, config.hazard_count, seed
    )

    layout = PuzzleLayout.build(size, waypoints, hazards, seed=seed, attempt=0)
    puzzle = GeneratedPuzzle(layout=layout, solution_path=tuple(route))
    _report(puzzle, full_coverage=False, strict=strict)

    log.info(
        "Hazard maze generated (size=%d, start=%s, goal=%s, hazards=%d/%d, "
        "seed=%d)",
        size,
        start,
        goal,
        len(hazards),
        config.hazard_count,
        seed,
    )
    return puzzle
