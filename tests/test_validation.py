"""Tests for structural puzzle validation."""

import numpy as np

from src.grid import (
    GeneratedPuzzle,
    PuzzleLayout,
    Waypoint,
    count_open_components,
    is_reachable,
    snake_path,
    validate_puzzle,
)
from src.grid.validation import grid_adjacency


def _snake_puzzle(obstacles=frozenset(), waypoints=None):
    path = tuple(snake_path(3))
    if waypoints is None:
        waypoints = (Waypoint(1, path[0]), Waypoint(2, path[-1]))
    layout = PuzzleLayout.build(3, waypoints, obstacles, seed=0, attempt=0)
    return GeneratedPuzzle(layout=layout, solution_path=path)


class TestGridAdjacency:

    def test_full_grid_edge_count(self):
        adj = grid_adjacency(np.ones((3, 3), dtype=bool))
        # 12 undirected edges, stored symmetrically
        assert adj.nnz == 24
        assert (adj != adj.T).nnz == 0

    def test_blocked_cell_isolated(self):
        mask = np.ones((3, 3), dtype=bool)
        mask[1, 1] = False
        adj = grid_adjacency(mask)
        assert adj[4].nnz == 0
        assert adj[:, 4].nnz == 0


class TestConnectivity:

    def test_single_component(self):
        assert count_open_components(np.ones((4, 4), dtype=bool)) == 1

    def test_wall_splits_grid(self):
        mask = np.ones((3, 3), dtype=bool)
        mask[:, 1] = False
        assert count_open_components(mask) == 2

    def test_all_blocked(self):
        assert count_open_components(np.zeros((2, 2), dtype=bool)) == 0

    def test_reachable(self):
        mask = np.ones((3, 3), dtype=bool)
        mask[1, :2] = False
        assert is_reachable(mask, (0, 0), (2, 0))

    def test_unreachable(self):
        mask = np.ones((3, 3), dtype=bool)
        mask[1, :] = False
        assert not is_reachable(mask, (0, 0), (2, 2))

    def test_blocked_endpoint(self):
        mask = np.ones((3, 3), dtype=bool)
        mask[2, 2] = False
        assert not is_reachable(mask, (0, 0), (2, 2))


class TestValidatePuzzle:

    def test_valid_snake(self):
        assert validate_puzzle(_snake_puzzle()) == []

    def test_obstacle_on_path(self):
        errors = validate_puzzle(_snake_puzzle(obstacles=frozenset({(1, 1)})))
        assert any("Obstacles on solution path" in e for e in errors)

    def test_waypoints_out_of_path_order(self):
        path = snake_path(3)
        waypoints = (
            Waypoint(1, path[0]),
            Waypoint(2, path[6]),
            Waypoint(3, path[3]),
            Waypoint(4, path[8]),
        )
        errors = validate_puzzle(_snake_puzzle(waypoints=waypoints))
        assert any("not increasing" in e for e in errors)

    def test_bad_numbering(self):
        path = snake_path(3)
        waypoints = (Waypoint(1, path[0]), Waypoint(3, path[8]))
        errors = validate_puzzle(_snake_puzzle(waypoints=waypoints))
        assert any("not 1..K" in e for e in errors)

    def test_not_hamiltonian(self):
        path = ((0, 0), (0, 1), (0, 2))
        waypoints = (Waypoint(1, (0, 0)), Waypoint(2, (0, 2)))
        layout = PuzzleLayout.build(3, waypoints, frozenset(), 0, 0)
        puzzle = GeneratedPuzzle(layout=layout, solution_path=path)
        errors = validate_puzzle(puzzle)
        assert "Solution path is not a Hamiltonian path" in errors
        assert validate_puzzle(puzzle, full_coverage=False) == []

    def test_route_with_gap(self):
        path = ((0, 0), (0, 2))
        waypoints = (Waypoint(1, (0, 0)), Waypoint(2, (0, 2)))
        layout = PuzzleLayout.build(3, waypoints, frozenset(), 0, 0)
        puzzle = GeneratedPuzzle(layout=layout, solution_path=path)
        errors = validate_puzzle(puzzle, full_coverage=False)
        assert any("not adjacent" in e for e in errors)

    def test_hazards_beside_route(self):
        path = ((0, 0), (0, 1), (0, 2), (1, 2), (2, 2))
        waypoints = (Waypoint(1, (0, 0)), Waypoint(2, (2, 2)))
        layout = PuzzleLayout.build(
            3, waypoints, frozenset({(1, 0), (1, 1), (2, 1)}), 0, 0
        )
        puzzle = GeneratedPuzzle(layout=layout, solution_path=path)
        assert validate_puzzle(puzzle, full_coverage=False) == []

    def test_hazard_route_blocked(self):
        path = ((0, 0), (1, 0), (2, 0), (2, 1), (2, 2))
        waypoints = (Waypoint(1, (0, 0)), Waypoint(2, (2, 2)))
        hazards = frozenset({(1, 1), (1, 2), (2, 1)})
        layout = PuzzleLayout.build(3, waypoints, hazards, 0, 0)
        puzzle = GeneratedPuzzle(layout=layout, solution_path=path)
        errors = validate_puzzle(puzzle, full_coverage=False)
        assert any("Obstacles on solution path" in e for e in errors)
        assert "Goal not reachable from start without hazards" in errors
