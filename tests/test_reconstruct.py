import pytest

from pathstep.core.grid import CellGrid
from pathstep.core.reconstruct import reconstruct_path
from pathstep.core.types import CellKind, InvariantError, OBSTACLE, frontier, settled


def _settle_all(g, dist):
    for cell, d in dist.items():
        g.set(cell, settled(d))


def test_walks_back_to_start_and_marks_path():
    g = CellGrid(3, 1)
    _settle_all(g, {(0, 0): 0, (1, 0): 1, (2, 0): 2})
    path = reconstruct_path(g, (0, 0), (2, 0))
    assert path == [(2, 0), (1, 0), (0, 0)]
    assert all(g.get(c).kind is CellKind.ON_PATH for c in path)
    assert [g.get(c).distance for c in path] == [2, 1, 0]


def test_ties_pick_lowest_coordinate():
    # goal (1,1) has two neighbours at distance 1: (0,1) and (1,0)
    g = CellGrid(2, 2)
    _settle_all(g, {(0, 0): 0, (1, 0): 1, (0, 1): 1, (1, 1): 2})
    assert reconstruct_path(g, (0, 0), (1, 1)) == [(1, 1), (0, 1), (0, 0)]
    assert g.get((1, 0)).kind is CellKind.SETTLED


def test_frontier_and_obstacle_neighbours_are_ignored():
    g = CellGrid(3, 2)
    _settle_all(g, {(0, 0): 0, (0, 1): 1, (1, 1): 2, (2, 1): 3})
    g.set((1, 0), frontier(1))
    g.set((2, 0), OBSTACLE)
    assert reconstruct_path(g, (0, 0), (2, 1)) == [(2, 1), (1, 1), (0, 1), (0, 0)]


def test_start_is_goal():
    g = CellGrid(2, 2)
    g.set((1, 1), settled(0))
    assert reconstruct_path(g, (1, 1), (1, 1)) == [(1, 1)]


def test_unsettled_goal_is_fatal():
    g = CellGrid(2, 2)
    g.set((0, 0), settled(0))
    g.set((1, 1), frontier(2))
    with pytest.raises(InvariantError):
        reconstruct_path(g, (0, 0), (1, 1))


def test_gap_in_distances_is_fatal():
    g = CellGrid(3, 1)
    _settle_all(g, {(0, 0): 0, (1, 0): 3, (2, 0): 4})
    with pytest.raises(InvariantError):
        reconstruct_path(g, (0, 0), (2, 0))
