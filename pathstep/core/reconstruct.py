# pathstep/core/reconstruct.py
#!/usr/bin/env python3
"""
Path reconstruction: walk back from the goal through settled cells.

At each cursor pick the settled neighbour with the smallest distance
(ties: lowest (x, y)), mark the cursor OnPath and move on, until the
cursor reaches start. Start is marked as well.
"""

import logging
from typing import List

from pathstep.core.grid import CellGrid
from pathstep.core.types import Cell, CellKind, InvariantError, on_path

logger = logging.getLogger(__name__)


def reconstruct_path(grid: CellGrid, start: Cell, goal: Cell) -> List[Cell]:
    """Mark the shortest path OnPath and return it ordered goal -> start."""
    goal_state = grid.get(goal)
    if goal_state is None or goal_state.kind is not CellKind.SETTLED:
        raise InvariantError(f"goal {goal} is not settled: {goal_state}")

    path: List[Cell] = []
    cur = goal
    dist = goal_state.distance
    while True:
        path.append(cur)
        grid.set(cur, on_path(dist))
        if cur == start:
            break

        best = None
        for n in grid.neighbors(cur):
            st = grid.get(n)
            if st.kind is not CellKind.SETTLED:
                continue
            key = (st.distance, n)
            if best is None or key < best:
                best = key

        if best is None or best[0] != dist - 1:
            raise InvariantError(
                f"no settled neighbour one step closer to start at {cur} (distance {dist}): {best}")
        dist, cur = best

    logger.debug("reconstructed path of %d cells from %s to %s", len(path), goal, start)
    return path
