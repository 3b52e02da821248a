#!/usr/bin/env python3
"""
Pathstep Viewer — drives an IncrementalPathfinder one step at a time

- Keyboard:
    [1]/[2]/[3]  -> switch map
    [D]/[A]      -> select algorithm (Dijkstra / A*)
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> reset
    [+]/[-]      -> steps/sec
    [Q]/[ESC]    -> quit

Settings:
- ENV: PATHSTEP_HEURISTIC, PATHSTEP_LOG_LEVEL
- CLI: --heuristic=dijkstra|astar, --log-level=..., optional path to a map JSON
"""

import logging
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

import pygame

from pathstep.core.config import (
    DEFAULT_SCENARIO, LOG_FORMAT, MAP_FILES, Scenario, ScenarioError,
    build_pathfinder, load_scenario, resolve_heuristic, resolve_log_level,
)
from pathstep.core.types import Cell, CellKind, CellState, HeuristicMode, SearchStatus, Snapshot

logger = logging.getLogger(__name__)

# ---------- Layout ----------
PANEL_W = 300            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_GAP = 1
FONT_NAME = None  # default pygame font

# Colors
WHITE        = (255, 255, 255)
BLACK        = (  0,   0,   0)
BG_GRAY      = (127, 127, 127)
UNKNOWN_GRAY = ( 63,  63,  63)
FRONTIER_CYAN = ( 0, 150, 255)
SETTLED_MAG  = (170,  40, 110)
PATH_MINT    = (  0, 255, 200)
START_BLUE   = ( 70, 130, 180)
GOAL_RED     = (220,  50,  47)
CURSOR_GOLD  = (255, 210,   0)

CARD_BG      = (24, 28, 36, 220)
TEXT_LIGHT   = (230, 235, 240)
ACCENT_GOLD  = (255, 210, 0)

_KIND_COLORS = {
    CellKind.UNKNOWN:  UNKNOWN_GRAY,
    CellKind.FRONTIER: FRONTIER_CYAN,
    CellKind.SETTLED:  SETTLED_MAG,
    CellKind.OBSTACLE: BLACK,
    CellKind.ON_PATH:  PATH_MINT,
}

_STATUS_LABELS = {
    SearchStatus.NOT_STARTED: "Idle",
    SearchStatus.RUNNING:     "Running",
    SearchStatus.COMPLETED:   "Done",
    SearchStatus.EXHAUSTED:   "No path",
}


def cell_color(state: CellState) -> Tuple[int, int, int]:
    return _KIND_COLORS[state.kind]


def status_label(status: SearchStatus, running: bool = False) -> str:
    if status is SearchStatus.RUNNING and not running:
        return "Paused"
    return _STATUS_LABELS[status]


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False  # highlight state

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        bg_idle   = (36, 40, 48, 220)
        bg_hover  = (46, 50, 60, 230)
        bg_active = (58, 86, 160, 235)
        border_active = (120, 170, 255, 255)

        if self.active and self.togglable:
            bg = bg_active
        elif self.hover:
            bg = bg_hover
        else:
            bg = bg_idle

        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, border_active, self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235, 238, 242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event):
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()


# ---------- Viewer ----------
class Viewer:
    def __init__(self, scenario: Scenario, heuristic: HeuristicMode):
        pygame.init()

        self.scenario = scenario
        self.heuristic = heuristic
        self.selected_map_key = scenario.name
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        self.pf = build_pathfinder(scenario, heuristic)
        self.snap: Snapshot = self.pf.snapshot()
        self._last_metrics = self.pf.metrics

        win_w = 819 + PANEL_W
        win_h = 819
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption(f"pathstep — {scenario.label}")

        self._buttons: List[UIButton] = []
        self._layout(win_w, win_h)

        self.running = False
        self.clock = pygame.time.Clock()
        self.steps_per_sec = 8
        self._last_step_t = 0.0

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Integer cell size that fits the window; grid centred left of the panel."""
        g = self.snap
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        pitch = max(4, min(avail_w // g.width, avail_h // g.height))
        self.cell_pitch = pitch
        self.cell_size = max(2, pitch - CELL_GAP)

        plate_w = g.width * pitch + 2 * GRID_MARGIN
        plate_h = g.height * pitch + 2 * GRID_MARGIN
        left_x = max(0, (win_w - PANEL_W - plate_w) // 2)
        top_y = max(0, (win_h - plate_h) // 2)
        self.canvas_rect = pygame.Rect(left_x, top_y, plate_w, plate_h)
        self._grid_origin = (left_x + GRID_MARGIN, top_y + GRID_MARGIN)
        self._right_band = pygame.Rect(win_w - PANEL_W, 0, PANEL_W, win_h)

        self._build_buttons()

    def run(self):
        while True:
            self._handle_events()
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(60)

    def _tick_algorithm(self):
        t0 = time.time()
        step_interval = 1.0 / max(1, self.steps_per_sec)
        if t0 - self._last_step_t >= step_interval:
            self._last_step_t = t0
            self._do_step()

    def _do_step(self):
        res = self.pf.step()
        self.snap = self.pf.snapshot()
        self._last_metrics = res.metrics
        if res.finished:
            self.running = False
        self._refresh_active_states()

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    pygame.quit(); sys.exit(0)
                elif e.key == pygame.K_SPACE:
                    self._toggle_run()
                elif e.key == pygame.K_r:
                    self._reset()
                elif e.key == pygame.K_n:
                    self._do_step()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._bump_speed(+1)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self._bump_speed(-1)
                elif e.key == pygame.K_1:
                    self._switch_map("01_open_field")
                elif e.key == pygame.K_2:
                    self._switch_map("02_wall_gap")
                elif e.key == pygame.K_3:
                    self._switch_map("03_sealed_goal")
                elif e.key == pygame.K_d:
                    self._switch_algo(HeuristicMode.DIJKSTRA)
                elif e.key == pygame.K_a:
                    self._switch_algo(HeuristicMode.ASTAR)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                for b in self._buttons:
                    b.handle_mouse(e)

    def _switch_map(self, key: str):
        if key not in MAP_FILES: return
        try:
            scenario = load_scenario(MAP_FILES[key])
        except (OSError, ScenarioError) as ex:
            logger.error("failed to load map %s: %s", key, ex)
            return
        self.scenario = scenario
        self.selected_map_key = key
        pygame.display.set_caption(f"pathstep — {scenario.label}")
        self._reset()
        self._layout(*self.screen.get_size())

    def _switch_algo(self, mode: HeuristicMode):
        self.heuristic = mode
        self._reset()

    def _reset(self):
        self.running = False
        self.pf = build_pathfinder(self.scenario, self.heuristic)
        self.snap = self.pf.snapshot()
        self._last_metrics = self.pf.metrics
        self._refresh_active_states()

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill(BG_GRAY)
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _cell_rect(self, cell: Cell) -> pygame.Rect:
        ox, oy = self._grid_origin
        col, row = cell
        return pygame.Rect(ox + col * self.cell_pitch, oy + row * self.cell_pitch,
                           self.cell_size, self.cell_size)

    def _draw_grid(self):
        snap = self.snap
        for cell, state in snap:
            pygame.draw.rect(self.screen, cell_color(state), self._cell_rect(cell))

        if not snap.status.terminal:
            pygame.draw.rect(self.screen, CURSOR_GOLD, self._cell_rect(snap.current), 2)

        self._draw_badge(snap.start, START_BLUE, "S")
        self._draw_badge(snap.goal, GOAL_RED, "G")

    def _draw_badge(self, cell: Cell, color: Tuple[int, int, int], label: str):
        rect = self._cell_rect(cell)
        pygame.draw.circle(self.screen, color, rect.center, max(3, self.cell_size // 2 - 1))
        if self.cell_size >= 14:
            txt = self.font.render(label, True, WHITE)
            self.screen.blit(txt, txt.get_rect(center=rect.center))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 250  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None):
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run"); y += h + gap
        add("Step Once", self._do_step); y += h + gap
        add("Reset", self._reset);       y += h + gap

        half = (w - 8) // 2
        self._buttons.append(UIButton("Speed -", pygame.Rect(x, y, half, h), lambda: self._bump_speed(-1)))
        self._buttons.append(UIButton("Speed +", pygame.Rect(x + half + 8, y, half, h), lambda: self._bump_speed(+1)))
        y += h + gap

        add("Algo: Dijkstra", lambda: self._switch_algo(HeuristicMode.DIJKSTRA), togglable=True, store_as="btn_algo_d"); y += h + gap
        add("Algo: A*",       lambda: self._switch_algo(HeuristicMode.ASTAR),    togglable=True, store_as="btn_algo_a"); y += h + gap

        add("Map 1: Open field", lambda: self._switch_map("01_open_field"),  togglable=True, store_as="btn_map1"); y += h + gap
        add("Map 2: Wall gap",   lambda: self._switch_map("02_wall_gap"),    togglable=True, store_as="btn_map2"); y += h + gap
        add("Map 3: Sealed",     lambda: self._switch_map("03_sealed_goal"), togglable=True, store_as="btn_map3")

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(getattr(self, "running", False))
        if hasattr(self, "btn_algo_d"):
            self.btn_algo_d.set_active(self.heuristic is HeuristicMode.DIJKSTRA)
        if hasattr(self, "btn_algo_a"):
            self.btn_algo_a.set_active(self.heuristic is HeuristicMode.ASTAR)
        if hasattr(self, "btn_map1"):
            self.btn_map1.set_active(self.selected_map_key == "01_open_field")
        if hasattr(self, "btn_map2"):
            self.btn_map2.set_active(self.selected_map_key == "02_wall_gap")
        if hasattr(self, "btn_map3"):
            self.btn_map3.set_active(self.selected_map_key == "03_sealed_goal")

    def _toggle_run(self):
        if self.pf.is_finished:
            return
        self.running = not self.running
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(1, min(60, self.steps_per_sec + dv)))

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card = pygame.Surface((rb.width - 20, 230), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        m = self._last_metrics
        line("Metrics", big=True, color=ACCENT_GOLD)
        line(f"State: {status_label(self.pf.status, self.running)}")
        line(f"Steps: {m.get('steps', 0)}")
        line(f"Settled: {m.get('settled', 0)}")
        line(f"Frontier: {m.get('frontier_size', 0)}")
        gd = m.get("goal_distance")
        line(f"Goal distance: {gd if gd is not None else '-'}")
        line(f"Path Len: {m.get('path_len', 0)}")
        line(f"Algo: {self.heuristic.label}")
        line(f"Speed: {self.steps_per_sec} steps/s")

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def main(argv: Optional[List[str]] = None):
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=resolve_log_level(argv), format=LOG_FORMAT)

    try:
        heuristic = resolve_heuristic(argv)
    except ValueError as ex:
        logger.error("%s", ex)
        sys.exit(2)

    paths = [a for a in argv if not a.startswith("--")]
    scenario = DEFAULT_SCENARIO
    if paths:
        try:
            scenario = load_scenario(Path(paths[0]))
        except (OSError, ScenarioError) as ex:
            logger.error("failed to load map %s: %s", paths[0], ex)
            sys.exit(1)

    logger.info("starting viewer: %s (%dx%d), %s", scenario.label, scenario.width, scenario.height, heuristic.label)
    Viewer(scenario, heuristic).run()


if __name__ == "__main__":
    main()
