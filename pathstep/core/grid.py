# pathstep/core/grid.py
#!/usr/bin/env python3
"""
Cell state store: the single owner of per-cell classification.

Dimensions are fixed at construction. There is no resize; build a new
grid instead.
"""

from typing import List, Optional, Tuple, Iterator

from pathstep.core.types import Cell, CellKind, CellState, UNKNOWN


class CellGrid:
    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self._width = int(width)
        self._height = int(height)
        self._cells: List[List[CellState]] = [
            [UNKNOWN for _ in range(self._width)] for _ in range(self._height)
        ]   # [row][col]

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, c: Cell) -> bool:
        x, y = c
        return 0 <= x < self._width and 0 <= y < self._height

    def get(self, c: Cell) -> Optional[CellState]:
        """State of `c`, or None when `c` lies outside the grid."""
        if not self.in_bounds(c):
            return None
        x, y = c
        return self._cells[y][x]

    def set(self, c: Cell, state: CellState) -> bool:
        # out-of-bounds writes are ignored; returns whether anything was written
        if not self.in_bounds(c):
            return False
        x, y = c
        self._cells[y][x] = state
        return True

    def neighbors(self, c: Cell) -> List[Cell]:
        """In-bounds 4-neighbours in fixed order: up, down, left, right."""
        x, y = c
        candidates: List[Cell] = [
            (x, y - 1),
            (x, y + 1),
            (x - 1, y),
            (x + 1, y),
        ]
        return [n for n in candidates if self.in_bounds(n)]

    def count(self, kind: CellKind) -> int:
        return sum(1 for row in self._cells for st in row if st.kind is kind)

    def rows(self) -> Tuple[Tuple[CellState, ...], ...]:
        return tuple(tuple(row) for row in self._cells)

    def __iter__(self) -> Iterator[Tuple[Cell, CellState]]:
        for y, row in enumerate(self._cells):
            for x, st in enumerate(row):
                yield (x, y), st
