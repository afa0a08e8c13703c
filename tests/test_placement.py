"""Tests for waypoint and obstacle placement."""

import logging

import pytest

from src.grid.hamiltonian import snake_path
from src.grid.placement import (
    place_obstacles,
    place_waypoints,
    waypoint_indices,
)
from src.grid.types import Waypoint


class TestWaypointIndices:
    """Indices are anchored at both ends and strictly increasing."""

    @pytest.mark.parametrize("length", [2, 3, 5, 9, 36, 64])
    @pytest.mark.parametrize("count", [2, 3, 5, 8])
    def test_strictly_increasing(self, length: int, count: int) -> None:
        if count > length:
            pytest.skip("more waypoints than cells")
        for seed in range(25):
            idx = waypoint_indices(length, count, seed)
            assert len(idx) == count
            assert idx[0] == 0
            assert idx[-1] == length - 1
            assert all(a < b for a, b in zip(idx, idx[1:]))

    def test_waypoints_fill_every_cell(self) -> None:
        assert waypoint_indices(4, 4, 0) == [0, 1, 2, 3]

    def test_near_even_spacing(self) -> None:
        """Intermediate waypoints sit within one index of i * len // K."""
        for seed in range(20):
            idx = waypoint_indices(36, 5, seed)
            for i in range(1, 4):
                assert abs(idx[i] - i * 36 // 5) <= 1

    def test_jitter_collisions_clamped(self) -> None:
        """Short paths force clamping instead of duplicates."""
        for seed in range(50):
            idx = waypoint_indices(5, 4, seed)
            assert len(set(idx)) == 4

    def test_deterministic(self) -> None:
        assert waypoint_indices(36, 5, 9) == waypoint_indices(36, 5, 9)

    def test_too_few_waypoints(self) -> None:
        with pytest.raises(ValueError, match="count must be >= 2"):
            waypoint_indices(10, 1, 0)

    def test_too_many_waypoints(self) -> None:
        with pytest.raises(ValueError, match="exceeds path length"):
            waypoint_indices(4, 5, 0)


class TestPlaceWaypoints:
    """Waypoints map path indices to cells numbered 1..K."""

    def test_numbering_and_cells(self) -> None:
        path = snake_path(3)
        waypoints = place_waypoints(path, 2, seed=1)
        assert waypoints == (Waypoint(1, (0, 0)), Waypoint(2, (2, 2)))

    def test_path_order_preserved(self) -> None:
        path = snake_path(6)
        waypoints = place_waypoints(path, 5, seed=3)
        positions = [path.index(w.cell) for w in waypoints]
        assert [w.number for w in waypoints] == [1, 2, 3, 4, 5]
        assert positions == sorted(positions)
        assert len(set(positions)) == 5


class TestPlaceObstacles:
    """Obstacles never touch the solution path or waypoints."""

    def test_full_cover_leaves_no_room(self, caplog) -> None:
        path = snake_path(4)
        waypoints = place_waypoints(path, 3, seed=0)
        with caplog.at_level(logging.INFO, logger="src.grid.placement"):
            obstacles = place_obstacles(4, path, waypoints, 4, seed=0)
        assert obstacles == frozenset()
        assert "0 obstacles out of 4" in caplog.text

    def test_partial_path_obstacles_off_path(self) -> None:
        path = [(0, 0), (0, 1), (0, 2), (1, 2), (2, 2)]
        waypoints = (Waypoint(1, (0, 0)), Waypoint(2, (2, 2)))
        obstacles = place_obstacles(3, path, waypoints, 3, seed=5)
        assert len(obstacles) == 3
        assert not obstacles & set(path)

    def test_fewer_eligible_than_requested(self) -> None:
        path = [(0, 0), (0, 1), (1, 1)]
        waypoints = (Waypoint(1, (0, 0)), Waypoint(2, (1, 1)))
        obstacles = place_obstacles(2, path, waypoints, 10, seed=5)
        assert obstacles == frozenset({(1, 0)})

    def test_deterministic(self) -> None:
        path = [(0, 0), (1, 0), (2, 0)]
        waypoints = (Waypoint(1, (0, 0)), Waypoint(2, (2, 0)))
        a = place_obstacles(4, path, waypoints, 5, seed=77)
        b = place_obstacles(4, path, waypoints, 5, seed=77)
        assert a == b

    def test_zero_requested(self) -> None:
        path = [(0, 0), (0, 1)]
        waypoints = (Waypoint(1, (0, 0)), Waypoint(2, (0, 1)))
        assert place_obstacles(3, path, waypoints, 0, seed=1) == frozenset()
