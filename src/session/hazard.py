"""Don't Bug the Bee: memorize-and-avoid set progression with lives.

A level is a fixed sequence of sets (HazardConfig). Each set shows its
hazards during a memorization phase, hides them, then lets the player trace
from the start to the goal. The session owns lives, score and per-set seeds;
timing of the memorization phase and of retries is left to the caller's
scheduler, so every transition here is synchronous.
"""

import logging
from enum import Enum

from src.config.game import HazardConfig
from src.config.hashing import puzzle_id
from src.engine.tracer import PathTracer
from src.engine.types import MoveOutcome, TraceListener, TraceStats, Variant
from src.grid.generator import generate_hazard_puzzle
from src.grid.types import Cell, GeneratedPuzzle

log = logging.getLogger(__name__)

POINTS_PER_SET = 100


class Phase(str, Enum):
    READY = "ready"
    REVEALING = "revealing"
    TRACING = "tracing"
    SET_COMPLETE = "set-complete"
    LEVEL_COMPLETE = "level-complete"
    GAME_OVER = "game-over"


class _SessionRelay(TraceListener):
    """Forwards tracer events, attaching the life count to failures."""

    def __init__(self, session: "HazardSession") -> None:
        self.session = session

    def on_extended(self, cell: Cell) -> None:
        self.session.listener.on_extended(cell)

    def on_undone(self, cell: Cell) -> None:
        self.session.listener.on_undone(cell)

    def on_succeeded(self, stats: TraceStats) -> None:
        self.session.listener.on_succeeded(stats)

    def on_failed(self, lives_remaining: int | None) -> None:
        # Reported by HazardSession once the life is deducted
        pass


class HazardSession:
    """Lives, sets and retries around a REACH_GOAL tracer.

    Args:
        levels: Set configurations played in order.
        seed: Base seed; round seeds derive from it, the set index and the
            retry count, so a whole session replays identically.
        listener: Receives tracer events plus on_failed(lives_remaining).
    """

    def __init__(
        self,
        levels: tuple[HazardConfig, ...],
        seed: int,
        listener: TraceListener | None = None,
    ) -> None:
        if not levels:
            raise ValueError("levels must contain at least one set")
        self.levels = tuple(levels)
        self.base_seed = seed
        self.listener = listener or TraceListener()
        self._relay = _SessionRelay(self)
        self.lives_total = self.levels[0].lives_total
        self.restart()

    # ------------------------------------------------------------------
    # Queries

    @property
    def config(self) -> HazardConfig:
        return self.levels[self.set_index]

    @property
    def set_number(self) -> int:
        return self.set_index + 1

    @property
    def round_seed(self) -> int:
        return self.base_seed + self.set_index * 100 + self.retries

    @property
    def round_id(self) -> str:
        return puzzle_id(self.config, self.round_seed)

    @property
    def hazards_visible(self) -> bool:
        return self.phase is Phase.REVEALING

    def visible_hazards(self) -> frozenset[Cell]:
        """Hazards the UI may draw: only during the memorization phase."""
        if self.hazards_visible:
            return self.puzzle.layout.obstacles
        return frozenset()

    # ------------------------------------------------------------------
    # Transitions

    def restart(self) -> None:
        """Start the level over: set 1, full lives, zero score."""
        self.set_index = 0
        self.retries = 0
        self.lives = self.lives_total
        self.score = 0
        self._new_round()

    def _new_round(self) -> None:
        self.puzzle: GeneratedPuzzle = generate_hazard_puzzle(
            self.config, self.round_seed
        )
        self.tracer = PathTracer(
            self.puzzle.layout, Variant.REACH_GOAL, listener=self._relay
        )
        self.phase = Phase.READY

    def start_set(self) -> int:
        """Reveal the hazards.

        Returns:
            How long (ms) the caller should wait before hide_hazards().

        Raises:
            RuntimeError: If the set is not ready to start.
        """
        if self.phase is not Phase.READY:
            raise RuntimeError(f"Cannot start set in phase {self.phase.value}")
        self.phase = Phase.REVEALING
        log.info(
            "Set %d/%d (%s) revealing %d hazards",
            self.set_number,
            len(self.levels),
            self.round_id,
            len(self.puzzle.layout.obstacles),
        )
        return self.config.hazard_reveal_duration_ms

    def hide_hazards(self) -> None:
        """End the memorization phase and accept moves."""
        if self.phase is Phase.REVEALING:
            self.phase = Phase.TRACING

    def attempt_move(self, cell: Cell) -> MoveOutcome:
        if self.phase is not Phase.TRACING:
            return MoveOutcome.REJECTED
        outcome = self.tracer.attempt_move(cell)
        if outcome is MoveOutcome.FAILED:
            self._on_hazard_hit()
        elif outcome is MoveOutcome.SUCCEEDED:
            self.score += POINTS_PER_SET * self.set_number
            self.phase = Phase.SET_COMPLETE
            log.info("Set %d complete, score %d", self.set_number, self.score)
        return outcome

    def undo(self) -> Cell | None:
        if self.phase is not Phase.TRACING:
            return None
        return self.tracer.undo()

    def release(self) -> None:
        self.tracer.release()

    def reset(self) -> None:
        """Clear the traced path without regenerating the grid."""
        if self.phase is Phase.TRACING:
            self.tracer.reset()

    def next_set(self) -> None:
        """Advance after a completed set; the last set completes the level."""
        if self.phase is not Phase.SET_COMPLETE:
            raise RuntimeError(
                f"Cannot advance from phase {self.phase.value}"
            )
        if self.set_index + 1 >= len(self.levels):
            self.phase = Phase.LEVEL_COMPLETE
            log.info("Level complete, final score %d", self.score)
            return
        self.set_index += 1
        self.retries = 0
        self._new_round()

    def _on_hazard_hit(self) -> None:
        self.lives -= 1
        log.info("Hazard hit, %d lives remaining", self.lives)
        self.listener.on_failed(self.lives)
        if self.lives <= 0:
            self.phase = Phase.GAME_OVER
            return
        # Retry the same set on a freshly generated grid
        self.retries += 1
        self._new_round()
