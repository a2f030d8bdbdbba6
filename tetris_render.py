"""
Pygame display for the game core.

PygameView implements the display interface the game draws through. It keeps
its own mirror of drawn cells, so it never reads the board:
- drawing the same figure again erases where it was before;
- drawing a different figure leaves the previous one behind as fixed cells;
- wipe_lines collapses the mirror the same way the board does.

RenderAssets pre-renders the background grid and one sprite per variant and
is rebuilt only when the cell size changes.
"""
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple
from tetris_config import CONFIG
from tetris_piece import AREA_WIDTH as COLS, AREA_HEIGHT as ROWS, Figure, Point

# Colors per figure variant
COLORS: Dict[str, Tuple[int,int,int]] = {
    "I": (102,224,255),
    "J": (106,119,255),
    "L": (255,158,94),
    "O": (255,224,102),
    "S": (94,224,142),
    "T": (200,119,255),
    "Z": (255,102,119),
}

@dataclass
class Dims:
    cell: int
    margin: int = 16
    panel_w: int = 180

    @property
    def board_w(self) -> int: return COLS * self.cell
    @property
    def board_h(self) -> int: return ROWS * self.cell
    @property
    def total_w(self) -> int: return 3 * self.margin + self.board_w + self.panel_w
    @property
    def total_h(self) -> int: return 2 * self.margin + self.board_h
    @property
    def panel_x(self) -> int: return 2 * self.margin + self.board_w

def compute_dims() -> Dims:
    return Dims(cell=int(CONFIG["CELL_SIZE"]))

class PygameView:
    def __init__(self):
        self.cells: List[List[Optional[str]]] = [[None] * COLS for _ in range(ROWS)]
        self.score = 0
        self.level = 0
        self.is_game_over = False
        self._figure: Optional[Figure] = None
        self._figure_cells: List[Point] = []

    # ---------- Display interface ----------
    def clear_area(self):
        self.cells = [[None] * COLS for _ in range(ROWS)]
        self._figure = None
        self._figure_cells = []
        self.is_game_over = False

    def draw_figure(self, figure: Figure):
        if figure is self._figure:
            for x, y in self._figure_cells:
                self.cells[y][x] = None
        self._figure = figure
        self._figure_cells = figure.cells()
        for x, y in self._figure_cells:
            self.cells[y][x] = figure.variant

    def wipe_lines(self, indices: Sequence[int]):
        gone = set(indices)
        kept = [row for y, row in enumerate(self.cells) if y not in gone]
        self.cells = [[None] * COLS for _ in range(ROWS - len(kept))] + kept
        self._figure = None
        self._figure_cells = []

    def game_over(self):
        self.is_game_over = True

    # ---------- Painting ----------
    def draw(self, screen: pygame.Surface, assets: RenderAssets, paused: bool = False):
        assets.redraw_static(screen)
        for y, row in enumerate(self.cells):
            for x, t in enumerate(row):
                if t:
                    assets.draw_cell(screen, t, x, y)
        assets.draw_panel_hud(screen, self.score, self.level)
        if self.is_game_over:
            assets.draw_banner(screen, "GAME OVER (R to restart)")
        elif paused:
            assets.draw_banner(screen, "PAUSED")

class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims, font: pygame.font.Font):
        self.dims = dims
        self.font = font
        self._make_static()
        self._make_cells()
        self._hud: Dict[str, Tuple[int, pygame.Surface]] = {}

    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill((10,13,34))
        grid_col = (40,50,90)
        for x in range(COLS+1):
            X = d.margin + x*d.cell
            pygame.draw.line(self.bg, grid_col, (X, d.margin), (X, d.margin + d.board_h))
        for y in range(ROWS+1):
            Y = d.margin + y*d.cell
            pygame.draw.line(self.bg, grid_col, (d.margin, Y), (d.margin + d.board_w, Y))
        panel_rect = pygame.Rect(d.panel_x, d.margin, d.panel_w, d.board_h)
        pygame.draw.rect(self.bg, (21,25,53), panel_rect)
        pygame.draw.rect(self.bg, (50,60,100), panel_rect, 1)

    def _make_cells(self):
        self.cell_surf: Dict[str, pygame.Surface] = {}
        c = self.dims.cell
        for t, col in COLORS.items():
            s = pygame.Surface((c-2, c-2))
            s.fill(col)
            self.cell_surf[t] = s

    def redraw_static(self, screen: pygame.Surface):
        screen.blit(self.bg, (0,0))

    def draw_cell(self, screen: pygame.Surface, t: str, bx: int, by: int):
        rx = self.dims.margin + bx*self.dims.cell + 1
        ry = self.dims.margin + by*self.dims.cell + 1
        screen.blit(self.cell_surf[t], (rx, ry))

    def _text(self, key: str, value: int, label: str) -> pygame.Surface:
        cached = self._hud.get(key)
        if cached is None or cached[0] != value:
            cached = (value, self.font.render(f"{label}: {value}", True, (200,210,240)))
            self._hud[key] = cached
        return cached[1]

    def draw_panel_hud(self, screen: pygame.Surface, score: int, level: int):
        x = self.dims.panel_x + 12
        y = self.dims.margin + 12
        screen.blit(self._text("score", score, "Score"), (x, y))
        screen.blit(self._text("level", level, "Level"), (x, y + 24))

    def draw_banner(self, screen: pygame.Surface, text: str):
        msg = self.font.render(text, True, (255,220,220))
        d = self.dims
        screen.blit(msg, msg.get_rect(center=(d.margin + d.board_w // 2, d.margin + d.board_h // 2)))
