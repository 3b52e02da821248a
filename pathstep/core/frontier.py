# pathstep/core/frontier.py
#!/usr/bin/env python3
"""
Frontier: binary heap of (priority, distance, cell) entries.

Duplicate and stale entries are tolerated (no decrease-key). Callers check a
popped entry against the cell store before acting on it.

Ordering: lower priority, then lower distance, then cell (x, y) ascending.
Plain tuple comparison gives exactly that, so no sequence counter is needed.
"""

from math import isqrt
from typing import List, Optional, Tuple
import heapq

from pathstep.core.types import Cell, HeuristicMode

Entry = Tuple[int, int, Cell]   # (priority, distance, cell)


def heuristic(c: Cell, goal: Cell) -> int:
    """Floored Euclidean distance to goal. Never exceeds the 4-connected step count."""
    (x, y) = c
    (gx, gy) = goal
    dx = gx - x
    dy = gy - y
    return isqrt(dx * dx + dy * dy)


def priority_key(distance: int, c: Cell, goal: Cell, mode: HeuristicMode) -> int:
    if mode is HeuristicMode.ASTAR:
        return distance + heuristic(c, goal)
    return distance


class Frontier:
    def __init__(self):
        self._heap: List[Entry] = []

    def push(self, c: Cell, priority: int, distance: int) -> None:
        heapq.heappush(self._heap, (priority, distance, c))

    def pop_min(self) -> Optional[Tuple[Cell, int, int]]:
        """Smallest entry as (cell, priority, distance), or None when empty."""
        if not self._heap:
            return None
        priority, distance, c = heapq.heappop(self._heap)
        return c, priority, distance

    def clear(self) -> None:
        self._heap.clear()

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
