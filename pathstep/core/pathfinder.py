#!/usr/bin/env python3
"""
Incremental Dijkstra / A* on a uniform-cost 4-connected grid — one
settlement per step() so a driver can animate the search.

API used by the viewer:
- place_obstacle(frm, to) before the first step
- step() -> StepResult
- snapshot() -> Snapshot

Unit edge weights make the first discovered distance of a cell final, so
neighbours already on the frontier are never relaxed again. The frontier
breaks priority ties on the lower distance, which keeps that true in A*
mode as well.
"""

import logging
from typing import List, Optional

from pathstep.core.frontier import Frontier, priority_key
from pathstep.core.grid import CellGrid
from pathstep.core.raster import line_cells
from pathstep.core.reconstruct import reconstruct_path
from pathstep.core.types import (
    Cell, CellKind, HeuristicMode, InvariantError, SearchStateError, SearchStatus,
    Snapshot, StepResult, OBSTACLE, frontier, settled,
)

logger = logging.getLogger(__name__)


class IncrementalPathfinder:
    def __init__(self, width: int, height: int, start: Cell, goal: Cell,
                 heuristic: HeuristicMode = HeuristicMode.DIJKSTRA):
        self.grid = CellGrid(width, height)
        start = (int(start[0]), int(start[1]))
        goal = (int(goal[0]), int(goal[1]))
        if not self.grid.in_bounds(start):
            raise ValueError(f"start {start} out of bounds for {width}x{height} grid")
        if not self.grid.in_bounds(goal):
            raise ValueError(f"goal {goal} out of bounds for {width}x{height} grid")

        self.start = start
        self.goal = goal
        self.heuristic = HeuristicMode(heuristic)
        self.name = self.heuristic.label

        self._frontier = Frontier()
        self._status = SearchStatus.NOT_STARTED
        self._current = start
        self._current_distance = 0
        self._steps = 0
        self._settled = 0
        self._open = 1   # cells in Frontier state; start is the first
        self._path: Optional[List[Cell]] = None   # start -> goal

        self.grid.set(start, frontier(0))
        self._frontier.push(start, priority_key(0, start, goal, self.heuristic), 0)

        if start == goal:
            # nothing to search: settle and mark the single-cell path now
            self._frontier.clear()
            self._settle(start, 0)
            self._finish()

    # -------------------- read-only state --------------------

    @property
    def status(self) -> SearchStatus:
        return self._status

    @property
    def current(self) -> Cell:
        return self._current

    @property
    def current_distance(self) -> int:
        return self._current_distance

    @property
    def steps_taken(self) -> int:
        return self._steps

    @property
    def path(self) -> Optional[List[Cell]]:
        return list(self._path) if self._path is not None else None

    @property
    def is_finished(self) -> bool:
        return self._status.terminal

    @property
    def metrics(self) -> dict:
        return self._metrics()

    def snapshot(self) -> Snapshot:
        return Snapshot(
            width=self.grid.width,
            height=self.grid.height,
            cells=self.grid.rows(),
            current=self._current,
            current_distance=self._current_distance,
            start=self.start,
            goal=self.goal,
            status=self._status,
        )

    # -------------------- setup --------------------

    def place_obstacle(self, frm: Cell, to: Cell) -> int:
        """Rasterize an obstacle line. Returns how many cells became obstacles."""
        if self._steps:
            raise SearchStateError(f"obstacles must be placed before the first step ({self._steps} steps taken)")

        painted = 0
        for c in line_cells(frm, to):
            if c == self.start or c == self.goal:
                logger.warning("obstacle line %s -> %s crosses %s; left passable", frm, to, c)
                continue
            st = self.grid.get(c)
            if st is None or st.kind is CellKind.OBSTACLE:
                continue
            self.grid.set(c, OBSTACLE)
            painted += 1
        logger.debug("placed obstacle %s -> %s (%d cells)", frm, to, painted)
        return painted

    # -------------------- stepping --------------------

    def step(self) -> StepResult:
        """
        Settle the current cell, discover its unknown neighbours, and pop the
        next current cell. Terminal states are left untouched.
        """
        if self._status.terminal or self._current == self.goal:
            return self._result()

        u = self._current
        g_u = self._current_distance
        st = self.grid.get(u)
        if st.kind is not CellKind.FRONTIER or st.distance != g_u:
            raise InvariantError(f"current cell {u} expected frontier at distance {g_u}, found {st}")

        self._status = SearchStatus.RUNNING
        self._steps += 1

        opened: List[Cell] = []
        for v in self.grid.neighbors(u):
            nst = self.grid.get(v)
            if nst.kind is CellKind.UNKNOWN:
                alt = g_u + 1
                self.grid.set(v, frontier(alt))
                self._open += 1
                self._frontier.push(v, priority_key(alt, v, self.goal, self.heuristic), alt)
                opened.append(v)
            elif nst.kind is CellKind.SETTLED:
                if nst.distance > g_u + 1:
                    raise InvariantError(
                        f"settled neighbour {v} at distance {nst.distance} exceeds {g_u} + 1 through {u}")
            # frontier: first discovery stands; obstacle: impassable

        self._settle(u, g_u)
        closed = [u]

        nxt = self._pop_valid()
        if nxt is None:
            self._status = SearchStatus.EXHAUSTED
            logger.info("%s: frontier exhausted after %d steps, no path from %s to %s",
                        self.name, self._steps, self.start, self.goal)
            return self._result(opened=opened, closed=closed)

        self._current, self._current_distance = nxt
        logger.debug("%s step %d: settled %s at %d, next %s at %d, frontier %d",
                     self.name, self._steps, u, g_u, self._current, self._current_distance,
                     len(self._frontier))

        if self._current == self.goal:
            self._settle(self.goal, self._current_distance)
            closed.append(self.goal)
            self._finish()

        return self._result(opened=opened, closed=closed)

    def run(self, max_steps: Optional[int] = None) -> StepResult:
        """Step until the search finishes or `max_steps` steps were taken."""
        res = self._result()
        taken = 0
        while not self._status.terminal and (max_steps is None or taken < max_steps):
            res = self.step()
            taken += 1
        return res

    # -------------------- helpers --------------------

    def _settle(self, c: Cell, distance: int) -> None:
        self.grid.set(c, settled(distance))
        self._settled += 1
        self._open -= 1

    def _pop_valid(self):
        while True:
            entry = self._frontier.pop_min()
            if entry is None:
                return None
            c, _, distance = entry
            st = self.grid.get(c)
            if st is not None and st.kind is CellKind.FRONTIER and st.distance == distance:
                return c, distance
            logger.debug("discarding stale frontier entry %s at %d (cell is %s)", c, distance, st)

    def _finish(self) -> None:
        back = reconstruct_path(self.grid, self.start, self.goal)
        back.reverse()
        self._path = back
        self._status = SearchStatus.COMPLETED
        logger.info("%s: reached %s at distance %d after %d steps (path %d cells)",
                    self.name, self.goal, self._current_distance, self._steps, len(back))

    def _result(self, opened: Optional[List[Cell]] = None,
                closed: Optional[List[Cell]] = None) -> StepResult:
        return StepResult(
            status=self._status,
            opened=opened or [],
            closed=closed or [],
            current=self._current,
            path=self.path,
            metrics=self._metrics(),
        )

    def _metrics(self) -> dict:
        goal_state = self.grid.get(self.goal)
        return {
            "algo": self.name,
            "steps": self._steps,
            "settled": self._settled,
            "frontier_size": self._open,
            "path_len": len(self._path) if self._path else 0,
            "goal_distance": goal_state.distance if goal_state.kind in (CellKind.SETTLED, CellKind.ON_PATH) else None,
        }
