"""Engine state, outcome and event types."""

from dataclasses import dataclass
from enum import Enum

from src.grid.types import Cell


class EngineState(str, Enum):
    AWAITING_START = "awaiting-start"
    TRACING = "tracing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class Variant(str, Enum):
    """Completion and failure rules the engine is configured with."""

    FULL_COVERAGE = "full-coverage"  # numbered waypoints, fill every cell
    REACH_GOAL = "reach-goal"  # start to goal, hazards end the round


class MoveOutcome(str, Enum):
    """Result of a single attempt_move() call."""

    REJECTED = "rejected"
    STARTED = "started"  # thread grabbed at waypoint 1 or at the tail
    EXTENDED = "extended"
    RETREATED = "retreated"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class TraceStats:
    """Completion statistics left to the caller to format or persist."""

    moves: int  # extensions plus retreats
    elapsed_seconds: float
    path_length: int


class TraceListener:
    """Event sink for UI collaborators.

    Subclass and override the hooks of interest; the defaults do nothing.
    """

    def on_extended(self, cell: Cell) -> None:
        pass

    def on_undone(self, cell: Cell) -> None:
        pass

    def on_succeeded(self, stats: TraceStats) -> None:
        pass

    def on_failed(self, lives_remaining: int | None) -> None:
        pass
