"""Waypoint and obstacle placement along a generated solution path.

Waypoints are spread roughly evenly along the path with a small seeded
jitter; obstacles are drawn only from cells the path never touches, so the
path that produced a layout always remains a valid solution of it.
"""

import logging

from src.grid.types import Cell, Waypoint
from src.reproducibility.prng import next_int, shuffle

log = logging.getLogger(__name__)

# Seed offset for the obstacle shuffle, keeping it uncorrelated with the
# small per-waypoint jitter offsets.
OBSTACLE_SEED_OFFSET = 1000


def waypoint_indices(path_length: int, count: int, seed: int) -> list[int]:
    """Choose ``count`` strictly increasing indices into a path.

    The first index is always 0 and the last always ``path_length - 1``.
    Intermediate waypoint ``i`` sits at ``i * path_length // count`` shifted
    by ``next_int(-1, 1, seed + i)`` and clamped to ``[1, path_length - 2]``.
    Collisions after clamping move to the next free increasing index; a
    backward pass then pulls indices off the final slot if the forward pass
    ran out of room.

    Args:
        path_length: Number of cells in the solution path.
        count: Number of waypoints (K >= 2).
        seed: Base seed for the jitter draws.

    Returns:
        List of K indices, strictly increasing.

    Raises:
        ValueError: If count < 2 or count > path_length.
    """
    if count < 2:
        raise ValueError(f"count must be >= 2 (start and end), got {count}")
    if count > path_length:
        raise ValueError(
            f"count ({count}) exceeds path length ({path_length})"
        )

    last = path_length - 1
    indices = [0]
    for i in range(1, count - 1):
        base = i * path_length // count
        jitter = next_int(-1, 1, seed + i)
        pos = max(1, min(last - 1, base + jitter))
        # Clamp to the next free increasing index on collision
        pos = max(pos, indices[-1] + 1)
        indices.append(pos)
    indices.append(last)

    # Forward clamping can push intermediates onto or past the tail; walk
    # back from the end so each index sits strictly below its successor.
    for k in range(count - 2, 0, -1):
        if indices[k] >= indices[k + 1]:
            indices[k] = indices[k + 1] - 1

    return indices


def place_waypoints(
    path: tuple[Cell, ...] | list[Cell], count: int, seed: int
) -> tuple[Waypoint, ...]:
    """Assign waypoints 1..count to cells along ``path``.

    Args:
        path: Solution path the waypoints are spread along.
        count: Number of waypoints (K).
        seed: Base seed for the position jitter.

    Returns:
        Waypoints numbered 1..K whose path indices increase with number.
    """
    indices = waypoint_indices(len(path), count, seed)
    waypoints = tuple(
        Waypoint(number=i + 1, cell=path[idx]) for i, idx in enumerate(indices)
    )
    log.debug("Placed %d waypoints at path indices %s", count, indices)
    return waypoints


def place_obstacles(
    size: int,
    path: tuple[Cell, ...] | list[Cell],
    waypoints: tuple[Waypoint, ...],
    count: int,
    seed: int,
) -> frozenset[Cell]:
    """Mark up to ``count`` cells off the solution path as obstacles.

    Eligible cells are those neither on ``path`` nor holding a waypoint,
    taken in row-major order and shuffled with ``seed + 1000``. When fewer
    than ``count`` cells are eligible, all of them are used.

    Args:
        size: Grid side length.
        path: Solution path that must stay obstacle-free.
        waypoints: Already-placed waypoints.
        count: Requested number of obstacles.
        seed: Base seed.

    Returns:
        Frozen set of obstacle cells.
    """
    blocked = set(path) | {w.cell for w in waypoints}
    eligible = [
        (row, col)
        for row in range(size)
        for col in range(size)
        if (row, col) not in blocked
    ]
    actual = min(count, len(eligible))
    chosen = shuffle(eligible, seed + OBSTACLE_SEED_OFFSET)[:actual]

    if actual < count:
        log.info(
            "Placed %d obstacles out of %d requested (%d eligible cells)",
            actual,
            count,
            len(eligible),
        )
    return frozenset(chosen)
