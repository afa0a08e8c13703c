#!/usr/bin/env python3
"""Entry point for generating and replaying grid puzzles.

Generates a Threadline (numbered full-coverage) puzzle or a hazard maze from
a seed, prints it, and optionally replays the generator's own solution path
through the tracing engine to confirm the layout is solvable.

Usage:
    python run_puzzle.py --daily
    python run_puzzle.py --seed 1234 --difficulty hard --solve
    python run_puzzle.py --mode hazard --seed 7 --set 3 --solve
    python run_puzzle.py --config config.json --dry-run
"""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from src.config import (
    DEFAULT_CONFIG,
    config_from_json,
    full_config_hash,
    preset,
    puzzle_id,
)
from src.engine import EngineState, PathTracer, Variant
from src.grid import generate_hazard_puzzle, generate_puzzle, validate_puzzle
from src.grid.render import format_layout
from src.grid.types import GeneratedPuzzle
from src.reproducibility import daily_seed, fresh_seed

log = logging.getLogger(__name__)


def replay_solution(puzzle: GeneratedPuzzle, variant: Variant) -> PathTracer:
    """Feed the generator's solution path to a fresh tracer, move by move."""
    tracer = PathTracer(puzzle.layout, variant)
    for cell in puzzle.solution_path:
        tracer.attempt_move(cell)
    return tracer


def run(args: argparse.Namespace) -> int:
    """Generate, print and optionally replay one puzzle.

    Returns:
        Process exit code: 0 on success, 1 if validation or replay failed.
    """
    config = DEFAULT_CONFIG
    if args.config:
        config = config_from_json(Path(args.config).read_text())
        log.info("Config loaded from %s", args.config)

    if args.daily:
        seed = daily_seed()
    elif args.seed is not None:
        seed = args.seed
    elif args.config:
        seed = config.seed
    else:
        seed = fresh_seed()

    full_coverage = args.mode == "coverage"
    if full_coverage:
        puzzle_config = (
            preset(args.difficulty) if args.difficulty else config.puzzle
        )
        described = asdict(puzzle_config)
        identity = puzzle_id(puzzle_config, seed)
    else:
        if not 1 <= args.set <= len(config.hazard_levels):
            print(
                f"--set must be in 1..{len(config.hazard_levels)}",
                file=sys.stderr,
            )
            return 2
        hazard_config = config.hazard_levels[args.set - 1]
        described = asdict(hazard_config)
        identity = puzzle_id(hazard_config, seed)

    print(
        f"Mode: {args.mode}  Seed: {seed}  "
        f"Config hash: {full_config_hash(config)}"
    )
    print(f"Puzzle: {identity}")
    print(json.dumps(described, indent=2, sort_keys=True))
    if args.dry_run:
        return 0

    if full_coverage:
        puzzle = generate_puzzle(puzzle_config, seed)
        variant = Variant.FULL_COVERAGE
    else:
        puzzle = generate_hazard_puzzle(hazard_config, seed)
        variant = Variant.REACH_GOAL

    print()
    print(format_layout(puzzle.layout))
    if puzzle.used_fallback:
        print("(snake fallback path)")

    errors = validate_puzzle(puzzle, full_coverage=full_coverage)
    for error in errors:
        print(f"INVALID: {error}", file=sys.stderr)
    if errors:
        return 1

    if args.solve:
        tracer = replay_solution(puzzle, variant)
        print()
        print(format_layout(puzzle.layout, visited=tracer.visited))
        print(f"Replay: {tracer.state.value} in {tracer.moves} moves")
        if tracer.state is not EngineState.SUCCEEDED:
            return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--mode", choices=("coverage", "hazard"), default="coverage"
    )
    seed_group = parser.add_mutually_exclusive_group()
    seed_group.add_argument("--seed", type=int, help="explicit puzzle seed")
    seed_group.add_argument(
        "--daily", action="store_true", help="use today's daily seed"
    )
    parser.add_argument(
        "--difficulty",
        choices=("easy", "medium", "hard", "expert"),
        help="Threadline difficulty preset (overrides --config puzzle)",
    )
    parser.add_argument(
        "--set", type=int, default=1, help="hazard set number (1-based)"
    )
    parser.add_argument("--config", help="path to a GameConfig JSON file")
    parser.add_argument(
        "--solve",
        action="store_true",
        help="replay the generator's solution through the engine",
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="print the config and exit"
    )
    parser.add_argument("--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
