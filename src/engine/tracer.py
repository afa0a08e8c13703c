"""Path-tracing state machine shared by both games.

The engine consumes discrete move intents from the UI layer and maintains
the traced path, per-cell visited flags and the next expected waypoint.
Illegal moves are rejected silently (they return MoveOutcome.REJECTED);
erratic pointer input is routine, not exceptional. The two games differ
only in their completion predicate and in how obstacle cells are treated:

* FULL_COVERAGE: obstacles are walls. Success requires every waypoint in
  order and every playable cell visited.
* REACH_GOAL: obstacles are hidden hazards. Entering one fails the round;
  reaching the goal (the last waypoint) succeeds immediately.
"""

import logging
import time
from collections.abc import Callable

import numpy as np

from src.engine.types import (
    EngineState,
    MoveOutcome,
    TraceListener,
    TraceStats,
    Variant,
)
from src.grid.types import Cell, CellKind, GridSnapshot, PuzzleLayout
from src.grid.types import in_bounds, is_adjacent

log = logging.getLogger(__name__)

MAX_HINTS = 3


class PathTracer:
    """Interactive tracer over one immutable PuzzleLayout.

    Owns all mutable round state: the path, the visited plane, the expected
    waypoint counter and the drag flag ``is_extending``. The UI layer maps
    pointer-down/enter events to attempt_move() and pointer-up to release().
    """

    def __init__(
        self,
        layout: PuzzleLayout,
        variant: Variant = Variant.FULL_COVERAGE,
        listener: TraceListener | None = None,
        clock: Callable[[], float] = time.monotonic,
        max_hints: int | None = MAX_HINTS,
    ) -> None:
        self.layout = layout
        self.variant = Variant(variant)
        self.listener = listener or TraceListener()
        self._clock = clock
        self.visited = np.zeros((layout.size, layout.size), dtype=bool)
        self.path: list[Cell] = []
        self.state = EngineState.AWAITING_START
        self.expected_waypoint = 1
        self.is_extending = False
        self.moves = 0
        self.started_at: float | None = None
        self.max_hints = max_hints
        # Per puzzle, so reset() leaves it alone
        self.hints_used = 0

    # ------------------------------------------------------------------
    # Queries

    @property
    def tail(self) -> Cell | None:
        return self.path[-1] if self.path else None

    @property
    def is_terminal(self) -> bool:
        return self.state in (EngineState.SUCCEEDED, EngineState.FAILED)

    @property
    def remaining_cells(self) -> int:
        """Playable cells not yet visited."""
        playable = self.layout.kinds != CellKind.OBSTACLE
        return int((playable & ~self.visited).sum())

    def hint(self) -> Cell | None:
        """Cell of the next waypoint to reach, spending one hint.

        Returns None, without spending, once the round is over, when no
        waypoint is left to reach, or when ``max_hints`` hints have been
        given. ``max_hints=None`` allows unlimited hints.
        """
        if self.is_terminal:
            return None
        if self.expected_waypoint > self.layout.waypoint_count:
            return None
        if self.max_hints is not None and self.hints_used >= self.max_hints:
            return None
        self.hints_used += 1
        cell = self.layout.waypoint_cell(self.expected_waypoint)
        log.debug(
            "Hint %d: waypoint %d at %s",
            self.hints_used,
            self.expected_waypoint,
            cell,
        )
        return cell

    def snapshot(self) -> GridSnapshot:
        visited = self.visited.copy()
        visited.setflags(write=False)
        return GridSnapshot(
            layout=self.layout,
            visited=visited,
            state=self.state.value,
            path=tuple(self.path),
            expected_waypoint=self.expected_waypoint,
        )

    # ------------------------------------------------------------------
    # Intents

    def attempt_move(self, cell: Cell) -> MoveOutcome:
        """Process one move intent onto ``cell``.

        Returns:
            What the move did. REJECTED moves leave every piece of state
            untouched.
        """
        cell = (int(cell[0]), int(cell[1]))
        if self.is_terminal or not in_bounds(cell, self.layout.size):
            return self._reject(cell, "terminal or out of bounds")

        if self.state is EngineState.AWAITING_START:
            return self._start(cell)

        if not self.is_extending:
            # Re-grab the thread at its tail after a release
            if cell == self.tail:
                self.is_extending = True
                return MoveOutcome.STARTED
            return self._reject(cell, "not extending")

        if cell == self.tail:
            return self._reject(cell, "already at tail")

        if len(self.path) >= 2 and cell == self.path[-2]:
            self.undo()
            return MoveOutcome.RETREATED

        reason = self._illegal_reason(cell)
        if reason is not None:
            return self._reject(cell, reason)

        return self._extend(cell)

    def undo(self) -> Cell | None:
        """Retreat one step: the exact inverse of the most recent extension.

        Disallowed while the path holds only its anchor cell.

        Returns:
            The removed cell, or None if nothing was undone.
        """
        if self.state is not EngineState.TRACING or len(self.path) <= 1:
            return None

        removed = self.path.pop()
        self.visited[removed] = False
        number = self.layout.waypoint_number_at(removed)
        if number is not None:
            self.expected_waypoint = number
        self.moves += 1

        log.debug(
            "Undone %s, expecting waypoint %d", removed, self.expected_waypoint
        )
        self.listener.on_undone(removed)
        return removed

    def release(self) -> None:
        """End the current drag; the next move must re-grab at the tail."""
        self.is_extending = False

    def reset(self) -> None:
        """Clear the traced path and visited flags, keeping the layout."""
        self.visited[:] = False
        self.path.clear()
        self.state = EngineState.AWAITING_START
        self.expected_waypoint = 1
        self.is_extending = False
        self.moves = 0
        self.started_at = None
        log.debug("Tracer reset")

    # ------------------------------------------------------------------
    # Internals

    def _reject(self, cell: Cell, reason: str) -> MoveOutcome:
        log.debug("Rejected move to %s: %s", cell, reason)
        return MoveOutcome.REJECTED

    def _start(self, cell: Cell) -> MoveOutcome:
        if cell != self.layout.waypoint_cell(1):
            return self._reject(cell, "first move must be waypoint 1")
        self.state = EngineState.TRACING
        self.started_at = self._clock()
        self.is_extending = True
        self.path.append(cell)
        self.visited[cell] = True
        self.expected_waypoint = 2
        self.listener.on_extended(cell)
        return MoveOutcome.STARTED

    def _illegal_reason(self, cell: Cell) -> str | None:
        """Why extending onto ``cell`` is illegal, or None if it is legal."""
        if not is_adjacent(self.path[-1], cell):
            return "not adjacent"
        if self.expected_waypoint > self.layout.waypoint_count:
            # The thread ends at the final waypoint; only retreats remain
            return "path already ends at the final waypoint"

        kind = self.layout.kind_at(cell)
        if kind is CellKind.OBSTACLE and self.variant is Variant.FULL_COVERAGE:
            return "obstacle"

        number = self.layout.waypoint_number_at(cell)
        if self.visited[cell] and number != self.expected_waypoint:
            return "already visited"
        if number is not None and number != self.expected_waypoint:
            return (
                f"waypoint {number} out of order "
                f"(expecting {self.expected_waypoint})"
            )
        return None

    def _extend(self, cell: Cell) -> MoveOutcome:
        self.path.append(cell)
        self.visited[cell] = True
        self.moves += 1
        number = self.layout.waypoint_number_at(cell)
        if number == self.expected_waypoint:
            self.expected_waypoint += 1
        self.listener.on_extended(cell)

        if self.variant is Variant.REACH_GOAL:
            if self.layout.kind_at(cell) is CellKind.OBSTACLE:
                return self._fail(cell)
            if cell == self.layout.goal:
                return self._succeed()
        elif self._is_covered():
            return self._succeed()
        return MoveOutcome.EXTENDED

    def _is_covered(self) -> bool:
        """All waypoints reached in order and every playable cell visited.

        Extensions past the final waypoint are rejected, so a covered grid
        always ends on the final waypoint.
        """
        if self.expected_waypoint <= self.layout.waypoint_count:
            return False
        return self.remaining_cells == 0

    def _succeed(self) -> MoveOutcome:
        self.state = EngineState.SUCCEEDED
        self.is_extending = False
        stats = TraceStats(
            moves=self.moves,
            elapsed_seconds=self._clock() - (self.started_at or 0.0),
            path_length=len(self.path),
        )
        log.info(
            "Round succeeded in %d moves (%.1fs)",
            stats.moves,
            stats.elapsed_seconds,
        )
        self.listener.on_succeeded(stats)
        return MoveOutcome.SUCCEEDED

    def _fail(self, cell: Cell) -> MoveOutcome:
        self.state = EngineState.FAILED
        self.is_extending = False
        log.info("Hazard hit at %s", cell)
        self.listener.on_failed(None)
        return MoveOutcome.FAILED
