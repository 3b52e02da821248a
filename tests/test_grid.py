import pytest

from pathstep.core.grid import CellGrid
from pathstep.core.types import CellKind, OBSTACLE, UNKNOWN, frontier


def test_new_grid_is_all_unknown():
    g = CellGrid(4, 3)
    assert (g.width, g.height) == (4, 3)
    assert all(st == UNKNOWN for _, st in g)
    assert g.count(CellKind.UNKNOWN) == 12


@pytest.mark.parametrize("w,h", [(0, 3), (3, 0), (-1, 5)])
def test_non_positive_dimensions_rejected(w, h):
    with pytest.raises(ValueError):
        CellGrid(w, h)


def test_get_out_of_bounds_returns_none():
    g = CellGrid(3, 3)
    assert g.get((-1, 0)) is None
    assert g.get((3, 0)) is None
    assert g.get((0, 3)) is None
    assert g.get((2, 2)) == UNKNOWN


def test_set_out_of_bounds_is_ignored():
    g = CellGrid(3, 3)
    assert g.set((5, 5), OBSTACLE) is False
    assert g.count(CellKind.OBSTACLE) == 0
    assert g.set((1, 2), OBSTACLE) is True
    assert g.get((1, 2)) == OBSTACLE


def test_neighbors_order_up_down_left_right():
    g = CellGrid(3, 3)
    assert g.neighbors((1, 1)) == [(1, 0), (1, 2), (0, 1), (2, 1)]


def test_neighbors_clipped_at_corners_and_edges():
    g = CellGrid(3, 3)
    assert g.neighbors((0, 0)) == [(0, 1), (1, 0)]
    assert g.neighbors((2, 2)) == [(2, 1), (1, 2)]
    assert g.neighbors((1, 0)) == [(1, 1), (0, 0), (2, 0)]
    assert CellGrid(1, 1).neighbors((0, 0)) == []


def test_dimensions_are_read_only():
    g = CellGrid(3, 3)
    with pytest.raises(AttributeError):
        g.width = 5
    assert not hasattr(g, "resize")


def test_rows_are_a_copy():
    g = CellGrid(2, 2)
    rows = g.rows()
    g.set((0, 0), frontier(0))
    assert rows[0][0] == UNKNOWN
    assert g.rows()[0][0].kind is CellKind.FRONTIER
