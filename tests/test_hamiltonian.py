"""Tests for Hamiltonian path construction and the snake fallback."""

import logging

import pytest

from src.grid.hamiltonian import (
    build_hamiltonian_path,
    is_hamiltonian_path,
    search_path,
    snake_path,
)
from src.grid.types import is_adjacent, neighbors


class TestSnakePath:
    """The boustrophedon fallback is always a valid cover."""

    def test_snake_3x3_order(self) -> None:
        assert snake_path(3) == [
            (0, 0), (0, 1), (0, 2),
            (1, 2), (1, 1), (1, 0),
            (2, 0), (2, 1), (2, 2),
        ]

    @pytest.mark.parametrize("size", [1, 2, 5, 8])
    def test_snake_is_hamiltonian(self, size: int) -> None:
        assert is_hamiltonian_path(snake_path(size), size)


class TestNeighbors:

    def test_corner(self) -> None:
        assert neighbors((0, 0), 3) == [(1, 0), (0, 1)]

    def test_interior_in_direction_order(self) -> None:
        assert neighbors((1, 1), 3) == [(0, 1), (2, 1), (1, 0), (1, 2)]

    def test_single_cell_grid(self) -> None:
        assert neighbors((0, 0), 1) == []


class TestIsHamiltonianPath:
    """Rejects paths that skip, repeat, or jump."""

    def test_rejects_short_path(self) -> None:
        assert not is_hamiltonian_path([(0, 0), (0, 1)], 2)

    def test_rejects_repeat(self) -> None:
        assert not is_hamiltonian_path([(0, 0), (0, 1), (0, 0), (1, 0)], 2)

    def test_rejects_diagonal_step(self) -> None:
        assert not is_hamiltonian_path([(0, 0), (1, 1), (0, 1), (1, 0)], 2)


class TestBuildHamiltonianPath:
    """Randomized search output is a permutation of all cells."""

    @pytest.mark.parametrize("size", [2, 3, 4, 5, 6, 7])
    @pytest.mark.parametrize("seed", [0, 1, 42, 20261018, -5])
    def test_full_cover(self, size: int, seed: int) -> None:
        result = build_hamiltonian_path(size, seed)
        path = result.path
        assert len(path) == size * size
        assert set(path) == {(r, c) for r in range(size) for c in range(size)}
        assert all(is_adjacent(a, b) for a, b in zip(path, path[1:]))

    @pytest.mark.parametrize("size", [8, 10, 12])
    @pytest.mark.parametrize("seed", range(5))
    def test_large_grids_found_by_search(self, size: int, seed: int) -> None:
        """Random search, not the snake fallback, covers larger grids."""
        result = build_hamiltonian_path(size, seed)
        assert not result.used_fallback
        assert is_hamiltonian_path(result.path, size)

    def test_large_grid_layouts_vary(self) -> None:
        paths = {build_hamiltonian_path(10, s).path for s in range(5)}
        assert len(paths) > 1

    def test_deterministic(self) -> None:
        assert build_hamiltonian_path(6, 99) == build_hamiltonian_path(6, 99)

    def test_seeds_vary_layouts(self) -> None:
        paths = {build_hamiltonian_path(5, s).path for s in range(20)}
        assert len(paths) > 1

    def test_single_cell(self) -> None:
        result = build_hamiltonian_path(1, 3)
        assert result.path == ((0, 0),)

    def test_invalid_size(self) -> None:
        with pytest.raises(ValueError, match="size"):
            build_hamiltonian_path(0, 1)

    def test_starts_on_diagonal(self) -> None:
        result = build_hamiltonian_path(6, 1234)
        if not result.used_fallback:
            row, col = result.path[0]
            assert row == col

    def test_fallback_when_budget_exhausted(self, caplog) -> None:
        """A starved search degrades to the snake path, never an error."""
        with caplog.at_level(logging.WARNING, logger="src.grid.hamiltonian"):
            result = build_hamiltonian_path(6, 5, max_expansions=3)
        assert result.used_fallback
        assert result.attempt == -1
        assert list(result.path) == snake_path(6)
        assert is_hamiltonian_path(result.path, 6)
        assert "snake" in caplog.text

    def test_success_reports_attempt(self) -> None:
        result = build_hamiltonian_path(4, 8)
        if not result.used_fallback:
            assert 0 <= result.attempt < 10


class TestSearchPath:
    """Explicit-stack DFS in goal-seeking mode."""

    def test_reaches_goal(self) -> None:
        route = search_path(5, (0, 0), 17, 10_000, goal=(4, 4))
        assert route is not None
        assert route[0] == (0, 0)
        assert route[-1] == (4, 4)
        assert len(set(route)) == len(route)
        assert all(is_adjacent(a, b) for a, b in zip(route, route[1:]))

    def test_max_length_respected(self) -> None:
        route = search_path(
            5, (0, 0), 3, 10_000, goal=(2, 2), max_length=7
        )
        assert route is not None
        assert len(route) <= 7

    def test_impossible_length_returns_none(self) -> None:
        # Manhattan distance 8 needs 9 cells
        assert search_path(
            5, (0, 0), 3, 10_000, goal=(4, 4), max_length=5
        ) is None
