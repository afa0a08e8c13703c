"""Structural validation of generated puzzles.

Each check returns human-readable error strings rather than raising, so the
generator can log every problem found in one pass. Connectivity checks run
on a sparse 4-neighbour adjacency matrix of the non-blocked cells.
"""

import logging

import numpy as np
import scipy.sparse
from scipy.sparse.csgraph import connected_components

from src.grid.hamiltonian import is_hamiltonian_path
from src.grid.types import Cell, CellKind, GeneratedPuzzle, is_adjacent

log = logging.getLogger(__name__)


def grid_adjacency(open_mask: np.ndarray) -> scipy.sparse.csr_matrix:
    """Undirected 4-neighbour adjacency over cells where ``open_mask`` is True.

    Vertex ``r * size + c`` is cell ``(r, c)``. Blocked cells keep their
    index but have no edges, so they form singleton components.

    Args:
        open_mask: Boolean array (size x size).

    Returns:
        Symmetric CSR matrix of shape (size**2, size**2).
    """
    size = open_mask.shape[0]
    ids = np.arange(size * size).reshape(size, size)

    # Horizontal and vertical edges between open cells
    h = open_mask[:, :-1] & open_mask[:, 1:]
    v = open_mask[:-1, :] & open_mask[1:, :]
    src = np.concatenate([ids[:, :-1][h], ids[:-1, :][v]])
    dst = np.concatenate([ids[:, 1:][h], ids[1:, :][v]])

    data = np.ones(len(src) * 2, dtype=np.int8)
    rows = np.concatenate([src, dst])
    cols = np.concatenate([dst, src])
    return scipy.sparse.csr_matrix(
        (data, (rows, cols)), shape=(size * size, size * size)
    )


def count_open_components(open_mask: np.ndarray) -> int:
    """Number of 4-connected components formed by the open cells."""
    if not open_mask.any():
        return 0
    _, labels = connected_components(grid_adjacency(open_mask), directed=False)
    return len(np.unique(labels[open_mask.ravel()]))


def is_reachable(open_mask: np.ndarray, start: Cell, goal: Cell) -> bool:
    """True if ``goal`` can be reached from ``start`` through open cells."""
    if not (open_mask[start] and open_mask[goal]):
        return False
    size = open_mask.shape[0]
    _, labels = connected_components(grid_adjacency(open_mask), directed=False)
    start_id = start[0] * size + start[1]
    goal_id = goal[0] * size + goal[1]
    return bool(labels[start_id] == labels[goal_id])


def _check_route(path: tuple[Cell, ...], size: int) -> list[str]:
    errors: list[str] = []
    if len(set(path)) != len(path):
        errors.append("Solution path revisits a cell")
    for a, b in zip(path, path[1:]):
        if not is_adjacent(a, b):
            errors.append(f"Solution path step {a}->{b} is not adjacent")
            break
    return errors


def validate_puzzle(
    puzzle: GeneratedPuzzle, full_coverage: bool = True
) -> list[str]:
    """Validate a generated puzzle against the layout invariants.

    Checks (cheapest first):
    1. Waypoints numbered exactly 1..K, one cell each
    2. Waypoint path indices strictly increasing with number
    3. No obstacle on the solution path
    4. Solution path shape (Hamiltonian for full coverage, simple route
       from first to last waypoint otherwise)
    5. Playable cells form one connected region (full coverage), or the
       goal is reachable from the start avoiding obstacles (reach-goal)

    Args:
        puzzle: Generated layout plus its solution path.
        full_coverage: Whether the layout is a numbered-coverage puzzle.

    Returns:
        List of error strings (empty = valid puzzle).
    """
    errors: list[str] = []
    layout = puzzle.layout
    path = puzzle.solution_path
    size = layout.size

    # 1. Numbering
    numbers = [w.number for w in layout.waypoints]
    if numbers != list(range(1, len(numbers) + 1)):
        errors.append(f"Waypoint numbers are not 1..K: {numbers}")
    if len({w.cell for w in layout.waypoints}) != len(layout.waypoints):
        errors.append("Two waypoints share a cell")

    # 2. Ordering along the path
    index_of = {cell: i for i, cell in enumerate(path)}
    positions = [index_of.get(w.cell, -1) for w in layout.waypoints]
    if -1 in positions:
        errors.append("Waypoint not on the solution path")
    elif any(a >= b for a, b in zip(positions, positions[1:])):
        errors.append(f"Waypoint path indices not increasing: {positions}")

    # 3. Obstacles off path
    on_path = layout.obstacles & set(path)
    if on_path:
        errors.append(f"Obstacles on solution path: {sorted(on_path)}")

    # 4. Path shape
    if full_coverage:
        if not is_hamiltonian_path(path, size):
            errors.append("Solution path is not a Hamiltonian path")
    else:
        errors.extend(_check_route(path, size))
        if path and (path[0] != layout.start or path[-1] != layout.goal):
            errors.append("Route does not run from start to goal")

    # 5. Connectivity
    open_mask = layout.kinds != CellKind.OBSTACLE
    if full_coverage:
        n_components = count_open_components(open_mask)
        if n_components != 1:
            errors.append(
                f"Playable cells not connected: {n_components} components"
            )
    elif not is_reachable(open_mask, layout.start, layout.goal):
        errors.append("Goal not reachable from start without hazards")

    return errors
