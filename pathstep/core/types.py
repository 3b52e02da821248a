# pathstep/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Optional, Dict, Any, Iterator

Cell = Tuple[int, int]  # (x, y) == (col, row)


class InvariantError(RuntimeError):
    """Internal consistency failure in the search; a bug, never user input."""


class SearchStateError(RuntimeError):
    """Operation not allowed in the current search state."""


class CellKind(Enum):
    UNKNOWN = "unknown"
    FRONTIER = "frontier"
    SETTLED = "settled"
    OBSTACLE = "obstacle"
    ON_PATH = "on_path"


class SearchStatus(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"   # goal settled, path marked
    EXHAUSTED = "exhausted"   # frontier empty, no path

    @property
    def terminal(self) -> bool:
        return self in (SearchStatus.COMPLETED, SearchStatus.EXHAUSTED)


class HeuristicMode(Enum):
    DIJKSTRA = "dijkstra"
    ASTAR = "astar"

    @property
    def label(self) -> str:
        return "A*" if self is HeuristicMode.ASTAR else "Dijkstra"


@dataclass(frozen=True)
class CellState:
    kind: CellKind
    distance: Optional[int] = None   # Frontier / Settled / OnPath only


UNKNOWN = CellState(CellKind.UNKNOWN)
OBSTACLE = CellState(CellKind.OBSTACLE)


def frontier(distance: int) -> CellState:
    return CellState(CellKind.FRONTIER, distance)


def settled(distance: int) -> CellState:
    return CellState(CellKind.SETTLED, distance)


def on_path(distance: int) -> CellState:
    return CellState(CellKind.ON_PATH, distance)


@dataclass
class StepResult:
    status: SearchStatus
    opened: List[Cell] = field(default_factory=list)
    closed: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None   # start -> goal, once completed
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def finished(self) -> bool:
        return self.status.terminal


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the grid for renderers. Frontier contents are not exposed."""
    width: int
    height: int
    cells: Tuple[Tuple[CellState, ...], ...]   # [row][col]
    current: Cell
    current_distance: int
    start: Cell
    goal: Cell
    status: SearchStatus

    def state_at(self, c: Cell) -> Optional[CellState]:
        x, y = c
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        return self.cells[y][x]

    def cells_of(self, kind: CellKind) -> List[Cell]:
        return [(x, y)
                for y, row in enumerate(self.cells)
                for x, st in enumerate(row)
                if st.kind is kind]

    def __iter__(self) -> Iterator[Tuple[Cell, CellState]]:
        for y, row in enumerate(self.cells):
            for x, st in enumerate(row):
                yield (x, y), st
