"""Grid data structures shared by the generator and the tracing engine."""

import hashlib
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

import numpy as np

Cell = tuple[int, int]  # (row, col)

# Fixed neighbour order: up, down, left, right.
DIRECTIONS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class CellKind(IntEnum):
    """Static role of a cell in a generated layout."""

    EMPTY = 0
    WAYPOINT = 1
    OBSTACLE = 2


def in_bounds(cell: Cell, size: int) -> bool:
    row, col = cell
    return 0 <= row < size and 0 <= col < size


def is_adjacent(a: Cell, b: Cell) -> bool:
    """True if ``a`` and ``b`` share an edge (4-connectivity)."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def neighbors(cell: Cell, size: int) -> list[Cell]:
    """In-bounds 4-neighbours of ``cell`` in DIRECTIONS order."""
    row, col = cell
    out = []
    for dr, dc in DIRECTIONS:
        candidate = (row + dr, col + dc)
        if in_bounds(candidate, size):
            out.append(candidate)
    return out


@dataclass(frozen=True, slots=True)
class Waypoint:
    """A numbered cell that must be visited in increasing order."""

    number: int
    cell: Cell


@dataclass(frozen=True)
class PuzzleLayout:
    """Immutable grid specification produced by the puzzle generator.

    The per-cell planes are numpy arrays marked read-only, so a layout can be
    shared between rounds and snapshots without defensive copies. Omits
    slots=True since numpy objects don't interact well with __slots__.
    Visited state lives in the tracing engine, never here.
    """

    size: int
    kinds: np.ndarray  # int8 (size x size), CellKind values
    numbers: np.ndarray  # int16 (size x size), waypoint number or 0
    waypoints: tuple[Waypoint, ...]  # sorted by number, 1..K
    seed: int  # seed the layout was generated from
    attempt: int  # Hamiltonian attempt that succeeded, -1 for the fallback

    @classmethod
    def build(
        cls,
        size: int,
        waypoints: tuple[Waypoint, ...],
        obstacles: frozenset[Cell],
        seed: int,
        attempt: int,
    ) -> "PuzzleLayout":
        """Assemble the cell planes from waypoint and obstacle placements."""
        kinds = np.full((size, size), CellKind.EMPTY, dtype=np.int8)
        numbers = np.zeros((size, size), dtype=np.int16)
        for wp in waypoints:
            kinds[wp.cell] = CellKind.WAYPOINT
            numbers[wp.cell] = wp.number
        for cell in obstacles:
            kinds[cell] = CellKind.OBSTACLE
        kinds.setflags(write=False)
        numbers.setflags(write=False)
        return cls(
            size=size,
            kinds=kinds,
            numbers=numbers,
            waypoints=tuple(sorted(waypoints, key=lambda w: w.number)),
            seed=seed,
            attempt=attempt,
        )

    def kind_at(self, cell: Cell) -> CellKind:
        return CellKind(int(self.kinds[cell]))

    def waypoint_number_at(self, cell: Cell) -> int | None:
        number = int(self.numbers[cell])
        return number or None

    def waypoint_cell(self, number: int) -> Cell:
        return self.waypoints[number - 1].cell

    @property
    def waypoint_count(self) -> int:
        return len(self.waypoints)

    @property
    def start(self) -> Cell:
        return self.waypoints[0].cell

    @property
    def goal(self) -> Cell:
        return self.waypoints[-1].cell

    @property
    def obstacles(self) -> frozenset[Cell]:
        rows, cols = np.nonzero(self.kinds == CellKind.OBSTACLE)
        return frozenset(zip(rows.tolist(), cols.tolist()))

    @property
    def playable_count(self) -> int:
        """Number of non-obstacle cells."""
        return int((self.kinds != CellKind.OBSTACLE).sum())

    def fingerprint(self) -> str:
        """SHA-256 over the grid bytes; equal iff the grids are identical."""
        digest = hashlib.sha256()
        digest.update(self.size.to_bytes(4, "little"))
        digest.update(self.kinds.tobytes())
        digest.update(self.numbers.tobytes())
        return digest.hexdigest()

    def to_dict(self) -> dict[str, Any]:
        """Plain-JSON view for UI collaborators and debugging."""
        return {
            "size": self.size,
            "seed": self.seed,
            "attempt": self.attempt,
            "waypoints": [
                {"number": w.number, "row": w.cell[0], "col": w.cell[1]}
                for w in self.waypoints
            ],
            "obstacles": [list(c) for c in sorted(self.obstacles)],
        }


@dataclass(frozen=True)
class GeneratedPuzzle:
    """A layout together with the path the generator built it around.

    The solution path is generation provenance only; the tracing engine
    checks correctness from the layout alone.
    """

    layout: PuzzleLayout
    solution_path: tuple[Cell, ...]
    used_fallback: bool = False


@dataclass(frozen=True)
class GridSnapshot:
    """Read-only view of a round handed to the UI layer."""

    layout: PuzzleLayout
    visited: np.ndarray  # bool (size x size), read-only copy
    state: str  # EngineState value
    path: tuple[Cell, ...]
    expected_waypoint: int
