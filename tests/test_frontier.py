from pathstep.core.frontier import Frontier, heuristic, priority_key
from pathstep.core.types import HeuristicMode


def test_pop_min_on_empty_returns_none():
    f = Frontier()
    assert f.pop_min() is None
    assert not f
    assert len(f) == 0


def test_pops_by_priority():
    f = Frontier()
    f.push((0, 0), 5, 5)
    f.push((1, 0), 2, 2)
    f.push((2, 0), 9, 9)
    assert [f.pop_min()[0] for _ in range(3)] == [(1, 0), (0, 0), (2, 0)]


def test_ties_break_on_distance_then_cell():
    f = Frontier()
    f.push((3, 3), 6, 4)
    f.push((0, 5), 6, 2)
    f.push((0, 4), 6, 2)
    f.push((1, 0), 6, 2)
    out = [f.pop_min() for _ in range(4)]
    assert out == [((0, 4), 6, 2), ((0, 5), 6, 2), ((1, 0), 6, 2), ((3, 3), 6, 4)]


def test_duplicates_are_kept():
    f = Frontier()
    f.push((1, 1), 3, 3)
    f.push((1, 1), 3, 3)
    assert len(f) == 2
    assert f.pop_min() == ((1, 1), 3, 3)
    assert f.pop_min() == ((1, 1), 3, 3)


def test_heuristic_is_floored_euclidean():
    assert heuristic((0, 0), (0, 0)) == 0
    assert heuristic((0, 0), (3, 4)) == 5
    assert heuristic((0, 0), (4, 4)) == 5     # sqrt(32) = 5.65...
    assert heuristic((4, 4), (0, 0)) == 5
    assert heuristic((2, 0), (0, 1)) == 2     # sqrt(5) = 2.23...


def test_heuristic_never_exceeds_manhattan():
    goal = (7, 3)
    for x in range(12):
        for y in range(9):
            assert heuristic((x, y), goal) <= abs(x - 7) + abs(y - 3)


def test_priority_key_by_mode():
    assert priority_key(3, (0, 0), (3, 4), HeuristicMode.DIJKSTRA) == 3
    assert priority_key(3, (0, 0), (3, 4), HeuristicMode.ASTAR) == 8
