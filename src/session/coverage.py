"""Threadline rounds: daily and on-demand numbered-coverage puzzles."""

import logging
from datetime import date

from src.config.game import PuzzleConfig
from src.config.hashing import puzzle_id
from src.engine.tracer import PathTracer
from src.engine.types import TraceListener, Variant
from src.grid.generator import generate_puzzle
from src.grid.types import GeneratedPuzzle
from src.reproducibility.seed import daily_seed, fresh_seed

log = logging.getLogger(__name__)


class CoverageSession:
    """One Threadline round at a time.

    Each new puzzle replaces the layout and tracer wholesale; reset() only
    clears the traced path.
    """

    def __init__(
        self,
        config: PuzzleConfig,
        seed: int,
        listener: TraceListener | None = None,
    ) -> None:
        self.config = config
        self.listener = listener
        self.seed = seed
        self.puzzle: GeneratedPuzzle = generate_puzzle(config, seed)
        self.tracer = self._new_tracer()

    @classmethod
    def daily(
        cls,
        config: PuzzleConfig,
        day: date | None = None,
        listener: TraceListener | None = None,
    ) -> "CoverageSession":
        """Session seeded from the calendar day."""
        return cls(config, daily_seed(day), listener)

    @property
    def puzzle_id(self) -> str:
        """Shareable name that regenerates this round's grid."""
        return puzzle_id(self.config, self.seed)

    def _new_tracer(self) -> PathTracer:
        return PathTracer(
            self.puzzle.layout, Variant.FULL_COVERAGE, listener=self.listener
        )

    def new_puzzle(
        self, seed: int | None = None, config: PuzzleConfig | None = None
    ) -> GeneratedPuzzle:
        """Discard the current round and generate a fresh one."""
        if config is not None:
            self.config = config
        self.seed = fresh_seed() if seed is None else seed
        self.puzzle = generate_puzzle(self.config, self.seed)
        log.info("New puzzle %s", self.puzzle_id)
        self.tracer = self._new_tracer()
        return self.puzzle

    def reset(self) -> None:
        self.tracer.reset()
