from pathstep.core.raster import line_cells


def test_horizontal_line_excludes_end_column():
    assert line_cells((1, 2), (4, 2)) == [(1, 2), (2, 2), (3, 2)]


def test_diagonal_line_samples_one_cell_per_column():
    assert line_cells((0, 0), (3, 3)) == [(0, 0), (1, 1), (2, 2)]


def test_shallow_slope_truncates():
    # slope 1/2 -> y = 0, 0.5, 1, 1.5
    assert line_cells((0, 0), (4, 2)) == [(0, 0), (1, 0), (2, 1), (3, 1)]


def test_descending_line():
    assert line_cells((0, 4), (2, 0)) == [(0, 4), (1, 2)]


def test_right_to_left_segment_is_swapped():
    assert line_cells((3, 1), (0, 1)) == [(0, 1), (1, 1), (2, 1)]


def test_vertical_line_walks_y_half_open():
    assert line_cells((2, 0), (2, 3)) == [(2, 0), (2, 1), (2, 2)]
    assert line_cells((2, 3), (2, 0)) == [(2, 3), (2, 2), (2, 1)]


def test_single_point_is_empty():
    assert line_cells((1, 1), (1, 1)) == []


def test_samples_above_the_grid_stay_negative():
    # y at x=1 is -0.5, which lies above row 0
    assert line_cells((0, -1), (2, 0)) == [(0, -1), (1, -1)]
    assert line_cells((0, 0), (2, -1)) == [(0, 0), (1, -1)]
