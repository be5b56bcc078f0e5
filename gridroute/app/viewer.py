# gridroute/app/viewer.py
#!/usr/bin/env python3
"""
Search Viewer: watch uniform-cost search expand one cell at a time.

- Keyboard:
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> reset
    [+]/[-]      -> steps/sec
    [Q]/[ESC]    -> quit

Initial speed: ENV GRIDROUTE_STEPS_PER_SEC (default 8).
"""

import os
import time
from typing import Dict, List, Optional, Tuple

import pygame

from gridroute.logging_config import get_logger
from gridroute.core.grid import Grid
from gridroute.core.types import Cell, CellKind, Point
from gridroute.core.ucs import UniformCostSearch

logger = get_logger(__name__)

# ---------- Config ----------
PANEL_W = 320            # right band: metrics
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 32
FONT_NAME = None  # default pygame font

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
BLUE        = ( 70,130,180)
RED         = (220, 50, 47)
WALL        = ( 30, 32, 38)
CHEAP       = (200,200,200)
DEAR        = ( 96, 72, 48)
NEON_CYAN_A = (0,150,255,110)
NEON_MAG_A  = (255,0,120,90)
NEON_MINT   = (0,255,200)

CARD_BG     = (24,28,36,220)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)


def resolve_speed() -> int:
    raw = os.getenv("GRIDROUTE_STEPS_PER_SEC", "8")
    try:
        v = int(raw)
    except ValueError:
        logger.warning("ignoring GRIDROUTE_STEPS_PER_SEC=%r", raw)
        v = 8
    return max(1, min(60, v))


def cell_color(cell: Optional[Cell], max_cost: int) -> Tuple[int, int, int]:
    """Impassable cells are dark; present cells fade from light to brown with cost."""
    if cell is None:
        return WALL
    t = cell.cost / max_cost if max_cost > 0 else 0.0
    t = min(1.0, max(0.0, t))
    return (
        int(CHEAP[0] + (DEAR[0]-CHEAP[0]) * t),
        int(CHEAP[1] + (DEAR[1]-CHEAP[1]) * t),
        int(CHEAP[2] + (DEAR[2]-CHEAP[2]) * t),
    )


def fit_cell_size(grid: Grid, win_w: int, win_h: int) -> int:
    """Largest integer cell size (min 8) that fits the grid beside the panel."""
    avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
    avail_h = max(1, win_h - 2 * GRID_MARGIN)
    cs_by_w = avail_w // max(1, grid.width)
    cs_by_h = avail_h // max(1, grid.height)
    return int(max(8, min(cs_by_w, cs_by_h)))


# ---------- Viewer ----------
class Viewer:
    def __init__(self, grid: Grid):
        # fail on a start-less grid before a window opens
        self.algo = UniformCostSearch()
        self.algo.init(grid)
        self.grid = grid
        self.max_cost = max((c.cost for _, c in grid.enumerate() if c is not None), default=0)

        pygame.init()
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        cs = self._auto_cell_size(grid)
        win_w = GRID_MARGIN*2 + grid.width * cs + PANEL_W
        win_h = max(GRID_MARGIN*2 + grid.height * cs, 360)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("gridroute: uniform-cost search")
        self._layout(win_w, win_h)

        self.open_set: set = set()
        self.closed_set: set = set()
        self.path: List[Point] = []

        self.running = False
        self.clock = pygame.time.Clock()
        self.steps_per_sec = resolve_speed()
        self.state = "Idle"
        self._last_step_t = 0.0
        self._last_metrics: Dict = {}

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        self.cell_size = fit_cell_size(self.grid, win_w, win_h)
        top_y = max(0, (win_h - (self.grid.height * self.cell_size + 2 * GRID_MARGIN)) // 2)
        self._grid_origin = (GRID_MARGIN, top_y + GRID_MARGIN)
        right_x = GRID_MARGIN*2 + self.grid.width * self.cell_size
        self._right_band = pygame.Rect(right_x, 0, max(PANEL_W, win_w - right_x), win_h)

    def _auto_cell_size(self, grid: Grid) -> int:
        target_h = 720 - GRID_MARGIN*2
        return max(14, min(CELL_SIZE_DEFAULT, target_h // max(1, grid.height)))

    def run(self):
        while self._handle_events():
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(60)
        pygame.quit()

    def _tick_algorithm(self):
        t0 = time.time()
        if t0 - self._last_step_t >= 1.0 / max(1, self.steps_per_sec):
            self._last_step_t = t0
            self._do_step()

    def _do_step(self):
        res = self.algo.step()
        for c in res.closed:
            self.open_set.discard(c)
            self.closed_set.add(c)
        for c in res.opened: self.open_set.add(c)
        if res.current is not None: self.open_set.discard(res.current)
        if res.path is not None: self.path = res.path
        if res.status == "done":
            self.state = "Done"; self.running = False
        elif res.status == "no_path":
            self.state = "No path"; self.running = False
        if res.metrics:
            self._last_metrics = res.metrics

    def _handle_events(self) -> bool:
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                return False
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    return False
                elif e.key == pygame.K_SPACE:
                    if self.state not in ("Done","No path"):
                        self.running = not self.running
                        self.state = "Running" if self.running else "Paused"
                elif e.key == pygame.K_r:
                    self._reset()
                elif e.key == pygame.K_n:
                    self._do_step()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self.steps_per_sec = min(60, self.steps_per_sec + 1)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self.steps_per_sec = max(1, self.steps_per_sec - 1)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
        return True

    def _reset(self):
        self.running = False
        self.state = "Idle"
        self.algo.reset()
        self.open_set.clear()
        self.closed_set.clear()
        self.path = []
        self._last_metrics = {}

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill((24, 26, 32))
        self._draw_grid()
        self._draw_metrics()
        pygame.display.flip()

    def _cell_rect(self, p: Point) -> pygame.Rect:
        cs = self.cell_size
        ox, oy = self._grid_origin
        return pygame.Rect(ox + p.x*cs, oy + p.y*cs, cs, cs)

    def _draw_grid(self):
        cs = self.cell_size
        for p, cell in self.grid.enumerate():
            rect = self._cell_rect(p)
            pygame.draw.rect(self.screen, cell_color(cell, self.max_cost), rect)
            pygame.draw.rect(self.screen, BLACK, rect, 1)

        # overlays
        for fill, points in ((NEON_MAG_A, self.closed_set), (NEON_CYAN_A, self.open_set)):
            for p in points:
                s = pygame.Surface((cs, cs), pygame.SRCALPHA); s.fill(fill)
                self.screen.blit(s, self._cell_rect(p).topleft)

        # path
        if len(self.path) >= 2:
            pts = [self._cell_rect(p).center for p in self.path]
            pygame.draw.lines(self.screen, NEON_MINT, False, pts, 5)

        for p, cell in self.grid.enumerate():
            if cell is None or cell.kind is CellKind.NORMAL:
                continue
            is_start = cell.kind is CellKind.START
            self._draw_badge(p, "S" if is_start else "F", BLUE if is_start else RED)

    def _draw_badge(self, p: Point, label: str, color: Tuple[int,int,int]):
        rect = self._cell_rect(p)
        pygame.draw.circle(self.screen, color, rect.center, max(4, self.cell_size//2 - 2))
        txt = self.font.render(label, True, WHITE)
        self.screen.blit(txt, txt.get_rect(center=rect.center))

    def _draw_metrics(self):
        rb = self._right_band
        card = pygame.Surface((rb.width - 20, 220), pygame.SRCALPHA)
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

        line("Metrics", big=True, color=ACCENT_GOLD)
        m = self._last_metrics
        line(f"Popped: {m.get('popped', 0)}")
        line(f"Open: {m.get('open_size', 1)}")
        line(f"Closed: {m.get('closed_count', 0)}")
        line(f"Path Len: {m.get('path_len', 0)}")
        if m.get("total_cost") is not None:
            line(f"Total Cost: {m['total_cost']}")
        line("-" * 26)
        line(f"State: {self.state}")
        line(f"Speed: {self.steps_per_sec} steps/s")
