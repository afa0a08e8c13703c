"""Tests for the run_puzzle command-line entry point."""

from dataclasses import replace

import pytest

import run_puzzle
from src.config import DEFAULT_CONFIG, config_to_json, puzzle_id
from src.engine import EngineState, Variant
from src.grid import generate_puzzle


class TestRunPuzzle:

    def test_coverage_solve(self, capsys):
        assert run_puzzle.main(["--seed", "1", "--solve"]) == 0
        out = capsys.readouterr().out
        assert "Mode: coverage  Seed: 1" in out
        assert "Replay: succeeded" in out

    def test_hazard_solve(self, capsys):
        code = run_puzzle.main(
            ["--mode", "hazard", "--seed", "7", "--set", "3", "--solve"]
        )
        assert code == 0
        assert "Replay: succeeded" in capsys.readouterr().out

    def test_difficulty_preset(self, capsys):
        assert run_puzzle.main(["--seed", "4", "--difficulty", "expert"]) == 0
        assert '"obstacle_count": 8' in capsys.readouterr().out

    def test_dry_run_stops_before_generation(self, capsys, monkeypatch):
        def fail(*args, **kwargs):
            raise AssertionError("generator called during dry run")

        monkeypatch.setattr(run_puzzle, "generate_puzzle", fail)
        assert run_puzzle.main(["--seed", "2", "--dry-run"]) == 0
        assert "Config hash" in capsys.readouterr().out

    def test_config_file_seed(self, tmp_path, capsys):
        path = tmp_path / "config.json"
        path.write_text(config_to_json(replace(DEFAULT_CONFIG, seed=5)))
        assert run_puzzle.main(["--config", str(path), "--dry-run"]) == 0
        assert "Seed: 5" in capsys.readouterr().out

    def test_banner_names_puzzle(self, capsys):
        assert run_puzzle.main(["--seed", "9", "--dry-run"]) == 0
        expected = puzzle_id(DEFAULT_CONFIG.puzzle, 9)
        assert f"Puzzle: {expected}" in capsys.readouterr().out

    def test_set_out_of_range(self, capsys):
        code = run_puzzle.main(
            ["--mode", "hazard", "--seed", "1", "--set", "9"]
        )
        assert code == 2
        assert "--set must be in 1..5" in capsys.readouterr().err

    def test_seed_and_daily_exclusive(self):
        with pytest.raises(SystemExit):
            run_puzzle.main(["--seed", "1", "--daily"])

    def test_invalid_layout_exit_code(self, capsys, monkeypatch):
        monkeypatch.setattr(
            run_puzzle, "validate_puzzle", lambda *a, **k: ["bad layout"]
        )
        assert run_puzzle.main(["--seed", "1"]) == 1
        assert "INVALID: bad layout" in capsys.readouterr().err


class TestReplaySolution:

    def test_replay_reaches_success(self):
        puzzle = generate_puzzle(DEFAULT_CONFIG.puzzle, 13)
        tracer = run_puzzle.replay_solution(puzzle, Variant.FULL_COVERAGE)
        assert tracer.state is EngineState.SUCCEEDED
        assert tracer.moves == len(puzzle.solution_path) - 1
