# pathstep/core/config.py
"""
Scenario loading and run-time settings.

- ENV: PATHSTEP_HEURISTIC=dijkstra|astar, PATHSTEP_LOG_LEVEL=DEBUG|INFO|...
- CLI: --heuristic=..., --log-level=... (scanned from argv, last one wins)
- Maps: JSON files under <repo>/maps
"""

import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from pathstep.core.pathfinder import IncrementalPathfinder
from pathstep.core.types import Cell, HeuristicMode

MAP_DIR = Path(__file__).resolve().parents[2] / "maps"
MAP_FILES = {
    "01_open_field": MAP_DIR / "01_open_field.json",
    "02_wall_gap":   MAP_DIR / "02_wall_gap.json",
    "03_sealed_goal": MAP_DIR / "03_sealed_goal.json",
}

_HEURISTIC_ALIASES = {
    "dijkstra": HeuristicMode.DIJKSTRA,
    "astar": HeuristicMode.ASTAR,
    "a*": HeuristicMode.ASTAR,
    "a-star": HeuristicMode.ASTAR,
}

DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


class ScenarioError(ValueError):
    """Malformed scenario description."""


@dataclass
class Scenario:
    width: int
    height: int
    start: Cell
    goal: Cell
    heuristic: HeuristicMode = HeuristicMode.DIJKSTRA
    obstacles: List[Tuple[Cell, Cell]] = field(default_factory=list)
    name: str = "custom"   # map key: file stem for loaded maps
    title: str = ""        # display name from the JSON "name" field

    @property
    def label(self) -> str:
        return self.title or self.name


# the original driver's grid: 20 x 20, corner to corner
DEFAULT_SCENARIO = Scenario(width=20, height=20, start=(0, 0), goal=(19, 19), name="default")


def parse_heuristic(value: str) -> HeuristicMode:
    key = str(value).strip().lower()
    if key not in _HEURISTIC_ALIASES:
        raise ValueError(f"unknown heuristic mode {value!r} (expected one of {sorted(_HEURISTIC_ALIASES)})")
    return _HEURISTIC_ALIASES[key]


def _setting(env_key: str, flag: str, default: str, argv: Optional[Sequence[str]] = None) -> str:
    value = os.getenv(env_key, default)
    for arg in (sys.argv[1:] if argv is None else argv):
        if arg.startswith(flag + "="):
            value = arg.split("=", 1)[1]
    return value


def resolve_heuristic(argv: Optional[Sequence[str]] = None) -> HeuristicMode:
    return parse_heuristic(_setting("PATHSTEP_HEURISTIC", "--heuristic", "dijkstra", argv))


def resolve_log_level(argv: Optional[Sequence[str]] = None) -> str:
    return _setting("PATHSTEP_LOG_LEVEL", "--log-level", DEFAULT_LOG_LEVEL, argv).upper()


def _cell(data, what: str) -> Cell:
    try:
        x, y = data
        return (int(x), int(y))
    except (TypeError, ValueError):
        raise ScenarioError(f"{what} must be a pair of integers, got {data!r}")


def scenario_from_dict(data: dict, name: str = "custom") -> Scenario:
    for key in ("width", "height", "start", "goal"):
        if key not in data:
            raise ScenarioError(f"missing field {key!r}")
    try:
        width = int(data["width"])
        height = int(data["height"])
    except (TypeError, ValueError):
        raise ScenarioError("width/height must be integers")
    if width <= 0 or height <= 0:
        raise ScenarioError(f"grid dimensions must be positive, got {width}x{height}")

    start = _cell(data["start"], "start")
    goal = _cell(data["goal"], "goal")
    sx, sy = start; gx, gy = goal
    if not (0 <= sx < width and 0 <= sy < height):
        raise ScenarioError(f"start {start} out of bounds")
    if not (0 <= gx < width and 0 <= gy < height):
        raise ScenarioError(f"goal {goal} out of bounds")

    try:
        heuristic = parse_heuristic(data.get("heuristic", "dijkstra"))
    except ValueError as ex:
        raise ScenarioError(str(ex))

    obstacles: List[Tuple[Cell, Cell]] = []
    for i, seg in enumerate(data.get("obstacles", [])):
        if not isinstance(seg, (list, tuple)) or len(seg) != 2:
            raise ScenarioError(f"obstacles[{i}] must be [[x0, y0], [x1, y1]]")
        obstacles.append((_cell(seg[0], f"obstacles[{i}][0]"), _cell(seg[1], f"obstacles[{i}][1]")))

    return Scenario(width, height, start, goal, heuristic, obstacles, name=name, title=str(data.get("name", "")))


def load_scenario(path: Path) -> Scenario:
    path = Path(path)
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as ex:
            raise ScenarioError(f"{path.name}: invalid JSON ({ex})")
    if not isinstance(data, dict):
        raise ScenarioError(f"{path.name}: top level must be an object")
    return scenario_from_dict(data, name=path.stem)


def build_pathfinder(scenario: Scenario, heuristic: Optional[HeuristicMode] = None) -> IncrementalPathfinder:
    """Fresh pathfinder for `scenario`, obstacles already painted."""
    pf = IncrementalPathfinder(scenario.width, scenario.height, scenario.start, scenario.goal,
                               heuristic if heuristic is not None else scenario.heuristic)
    for frm, to in scenario.obstacles:
        pf.place_obstacle(frm, to)
    return pf
