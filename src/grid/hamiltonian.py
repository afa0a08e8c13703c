"""Seeded Hamiltonian path construction on a square grid.

Randomized depth-first backtracking with an explicit frame stack, retried
with perturbed seeds, falling back to a boustrophedon (snake) path when every
attempt exhausts its work budget. Both outcomes are full covers of the grid,
so callers never need to tell them apart.

Full-cover searches keep a per-cell count of unvisited neighbours up to
date as the path grows and shrinks, so each step is checked in constant
time: a step is pruned when it leaves a cell with no way in, leaves two
cells that could only be the final cell, or cuts the unvisited cells into
separate regions. Candidate steps are tried fewest-exits first, with the
seeded shuffle breaking ties.
"""

import logging
from collections import deque
from dataclasses import dataclass, field

from src.grid.types import DIRECTIONS, Cell, in_bounds, is_adjacent, neighbors
from src.reproducibility.prng import next_int, shuffle

log = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10
EXPANSIONS_PER_CELL = 64

# The eight cells around a cell, clockwise from the top-left corner.
# Odd indices are the edge neighbours, even indices the corners between them.
_RING = ((-1, -1), (-1, 0), (-1, 1), (0, 1), (1, 1), (1, 0), (1, -1), (0, -1))


@dataclass(frozen=True, slots=True)
class HamiltonianResult:
    """Outcome of build_hamiltonian_path()."""

    path: tuple[Cell, ...]
    attempt: int  # 0-indexed attempt that succeeded, -1 for the fallback
    used_fallback: bool


@dataclass(slots=True)
class _Frame:
    """One DFS level: the cell placed here and the directions left to try."""

    cell: Cell
    remaining: list[tuple[int, int]]
    # Cells that became forced path ends when this cell was entered
    forced_ends: list[Cell] = field(default_factory=list)


def snake_path(size: int) -> list[Cell]:
    """Boustrophedon cover: row 0 left to right, row 1 right to left, ..."""
    path: list[Cell] = []
    for row in range(size):
        cols = range(size) if row % 2 == 0 else range(size - 1, -1, -1)
        path.extend((row, col) for col in cols)
    return path


def is_hamiltonian_path(
    path: list[Cell] | tuple[Cell, ...], size: int
) -> bool:
    """True if ``path`` visits every cell exactly once via adjacent steps."""
    if len(path) != size * size:
        return False
    if len(set(path)) != len(path):
        return False
    if not all(in_bounds(c, size) for c in path):
        return False
    return all(is_adjacent(a, b) for a, b in zip(path, path[1:]))


class _CoverState:
    """Incremental bookkeeping for full-cover pruning.

    ``free[r][c]`` is the number of unvisited neighbours of ``(r, c)``.
    A forced end is an unvisited cell with exactly one way in; a simple
    path covering the grid can finish on at most one of them.
    """

    def __init__(self, size: int, start: Cell, on_path: set[Cell]) -> None:
        self.size = size
        self.on_path = on_path
        self.free = [[0] * size for _ in range(size)]
        for row in range(size):
            for col in range(size):
                self.free[row][col] = sum(
                    1 for n in neighbors((row, col), size) if n not in on_path
                )
        self.forced_ends: set[Cell] = set()
        for row in range(size):
            for col in range(size):
                cell = (row, col)
                if cell in on_path:
                    continue
                ways_in = self.free[row][col] + int(is_adjacent(cell, start))
                if ways_in == 1:
                    self.forced_ends.add(cell)

    def exits(self, cell: Cell) -> int:
        return self.free[cell[0]][cell[1]]

    def enter(
        self, prev: Cell, cell: Cell, remaining: int
    ) -> list[Cell] | None:
        """Account for the path stepping from ``prev`` onto ``cell``.

        Only the unvisited neighbours of ``prev`` lose a way in: neighbours
        of ``cell`` trade a free neighbour for adjacency to the new tail.

        Returns:
            The cells that became forced ends, or None if the step strands
            part of the grid (the bookkeeping is rolled back).
        """
        for n in neighbors(cell, self.size):
            self.free[n[0]][n[1]] -= 1

        added: list[Cell] = []
        stranded = False
        for n in neighbors(prev, self.size):
            if n in self.on_path:
                continue
            ways_in = self.exits(n)
            if ways_in == 0:
                stranded = True
                break
            if ways_in == 1 and n not in self.forced_ends:
                self.forced_ends.add(n)
                added.append(n)

        if not stranded:
            open_ends = sum(
                1 for c in self.forced_ends if c not in self.on_path
            )
            stranded = open_ends > 1 or self._splits(cell, remaining)

        if stranded:
            self.leave(cell, added)
            return None
        return added

    def leave(self, cell: Cell, added: list[Cell]) -> None:
        """Undo enter() for ``cell`` once it is off the path again."""
        for n in neighbors(cell, self.size):
            self.free[n[0]][n[1]] += 1
        self.forced_ends.difference_update(added)

    def _splits(self, cell: Cell, remaining: int) -> bool:
        """True if the unvisited cells no longer form one region.

        A flood fill runs only when ``cell`` is a local cut point, i.e. its
        unvisited edge neighbours fall into two or more arcs around it.
        """
        if remaining <= 1:
            return False
        row, col = cell
        open_ring = [
            in_bounds((row + dr, col + dc), self.size)
            and (row + dr, col + dc) not in self.on_path
            for dr, dc in _RING
        ]
        edges = [open_ring[2 * k + 1] for k in range(4)]
        if sum(edges) == 0:
            return True
        joined = sum(
            1
            for k in range(4)
            if edges[k] and edges[(k + 1) % 4] and open_ring[(2 * k + 2) % 8]
        )
        if sum(edges) - joined <= 1:
            return False

        seed_cell = next(
            n for n in neighbors(cell, self.size) if n not in self.on_path
        )
        seen = {seed_cell}
        queue = deque([seed_cell])
        while queue:
            current = queue.popleft()
            for n in neighbors(current, self.size):
                if n not in self.on_path and n not in seen:
                    seen.add(n)
                    queue.append(n)
        return len(seen) != remaining


def _ordered_directions(
    cell: Cell, seed: int, cover: _CoverState | None, size: int
) -> list[tuple[int, int]]:
    """Seeded direction order, fewest onward exits first when covering."""
    directions = shuffle(DIRECTIONS, seed)
    if cover is None:
        return directions

    def onward_exits(direction: tuple[int, int]) -> int:
        target = (cell[0] + direction[0], cell[1] + direction[1])
        if not in_bounds(target, size) or target in cover.on_path:
            return len(DIRECTIONS) + 1
        return cover.exits(target)

    return sorted(directions, key=onward_exits)


def search_path(
    size: int,
    start: Cell,
    seed: int,
    max_expansions: int,
    target_length: int | None = None,
    goal: Cell | None = None,
    max_length: int | None = None,
) -> list[Cell] | None:
    """Seeded explicit-stack DFS for a simple path from ``start``.

    At each depth the four directions are shuffled with
    ``seed + len(path)``, so branching order varies by depth. The search
    succeeds when the path reaches ``target_length`` cells, or, when a
    ``goal`` is given, when the goal cell is entered. Full-cover searches
    prune steps that strand unvisited cells and try the most constrained
    neighbour first.

    Args:
        size: Grid side length.
        start: First cell of the path.
        seed: Attempt seed.
        max_expansions: Budget of cell pushes before giving up.
        target_length: Required path length (defaults to size**2).
        goal: Optional cell that ends the search when reached.
        max_length: Optional cap on path length; longer branches are
            pruned as dead ends.

    Returns:
        The path, or None if the search space or budget is exhausted.
    """
    if target_length is None:
        target_length = size * size

    path: list[Cell] = [start]
    on_path: set[Cell] = {start}
    if start == goal or len(path) == target_length:
        return path

    # Stranding checks only hold when every cell must be covered
    cover = None
    if goal is None and target_length == size * size:
        cover = _CoverState(size, start, on_path)

    stack = [_Frame(start, _ordered_directions(start, seed + 1, cover, size))]
    expansions = 1

    while stack:
        frame = stack[-1]
        if not frame.remaining:
            # Dead end: backtrack
            stack.pop()
            cell = path.pop()
            on_path.discard(cell)
            if cover is not None:
                cover.leave(cell, frame.forced_ends)
            continue

        dr, dc = frame.remaining.pop(0)
        nxt = (frame.cell[0] + dr, frame.cell[1] + dc)
        if not in_bounds(nxt, size) or nxt in on_path:
            continue
        # Leave room for the goal when the length is capped
        if (
            max_length is not None
            and nxt != goal
            and len(path) + 1 >= max_length
        ):
            continue

        path.append(nxt)
        on_path.add(nxt)
        expansions += 1

        if nxt == goal or (goal is None and len(path) == target_length):
            return path

        forced_ends: list[Cell] = []
        if cover is not None:
            entered = cover.enter(frame.cell, nxt, target_length - len(path))
            if entered is None:
                # Undo the step and try the next direction
                on_path.discard(path.pop())
                continue
            forced_ends = entered

        if expansions >= max_expansions:
            log.debug(
                "Search budget of %d expansions exhausted (seed=%d)",
                max_expansions,
                seed,
            )
            return None

        directions = _ordered_directions(nxt, seed + len(path), cover, size)
        stack.append(_Frame(nxt, directions, forced_ends))

    return None


def build_hamiltonian_path(
    size: int,
    seed: int,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    max_expansions: int | None = None,
) -> HamiltonianResult:
    """Build a path covering every cell of a ``size`` x ``size`` grid.

    Attempt ``a`` starts from a seed-selected cell using seed ``seed + a``.
    If all attempts exhaust their budget the snake path is returned instead;
    that is a degradation, not an error.

    Args:
        size: Grid side length (>= 1).
        seed: Base seed.
        max_attempts: Number of randomized attempts before falling back.
        max_expansions: Per-attempt push budget. Defaults to 64 * size**2.

    Returns:
        HamiltonianResult with the path and its provenance.

    Raises:
        ValueError: If size < 1.
    """
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")
    if max_expansions is None:
        max_expansions = EXPANSIONS_PER_CELL * size * size

    for attempt in range(max_attempts):
        attempt_seed = seed + attempt
        # Row and column share one seed, so starts fall on the main diagonal.
        start = (
            next_int(0, size - 1, attempt_seed),
            next_int(0, size - 1, attempt_seed),
        )
        path = search_path(size, start, attempt_seed, max_expansions)
        if path is not None:
            log.debug(
                "Hamiltonian path found on attempt %d (size=%d, start=%s)",
                attempt,
                size,
                start,
            )
            return HamiltonianResult(tuple(path), attempt, False)

    log.warning(
        "Hamiltonian search failed after %d attempts (size=%d, seed=%d), "
        "using snake path",
        max_attempts,
        size,
        seed,
    )
    return HamiltonianResult(tuple(snake_path(size)), -1, True)
