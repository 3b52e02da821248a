# pathstep/core/raster.py
#!/usr/bin/env python3
"""
Obstacle-line rasterization.

Sloped segments are sampled once per column over the half-open x-range
[frm.x, to.x): y = floor(frm.y + slope * (x - frm.x)).
Steep segments therefore leave gaps, one cell per column.

Vertical segments (frm.x == to.x) are walked along y over [frm.y, to.y),
toward to.y. Segments given right-to-left are drawn with their ends swapped.
"""

from math import floor
from typing import List

from pathstep.core.types import Cell


def line_cells(frm: Cell, to: Cell) -> List[Cell]:
    (x0, y0) = frm
    (x1, y1) = to

    if x0 == x1:
        step = 1 if y1 >= y0 else -1
        return [(x0, y) for y in range(y0, y1, step)]

    if x0 > x1:
        (x0, y0), (x1, y1) = (x1, y1), (x0, y0)

    slope = (y1 - y0) / (x1 - x0)
    out: List[Cell] = []
    for x in range(x0, x1):
        y = floor(y0 + slope * (x - x0))
        out.append((x, y))
    return out
