"""Board: grid of fixed cells plus the falling figure"""
import logging
from typing import List, Optional, Sequence

from tetris_piece import AREA_HEIGHT, AREA_WIDTH, ROTATIONS, Figure, Matrix, Point, cells_of
from tetris_view import GameView

log = logging.getLogger(__name__)

Grid = List[List[Optional[str]]]

def collide(grid: Grid, matrix: Matrix, position: Point) -> bool:
    rows, cols = len(grid), len(grid[0])
    for bx, by in cells_of(matrix, position):
        if bx<0 or bx>=cols or by<0 or by>=rows: return True
        if grid[by][bx]: return True
    return False

class Board:
    """Owns the fixed cells and the current figure.

    Moves and rotations are validated against the grid; an illegal one leaves
    the figure as it was. Every accepted change is pushed to the view.
    """

    def __init__(self, view: GameView, figure: Figure, width: int = AREA_WIDTH, height: int = AREA_HEIGHT):
        self.view = view
        self.width = width
        self.height = height
        self.grid: Grid = self._empty_grid()
        self.current_figure = figure

    def _empty_grid(self) -> Grid:
        return [[None] * self.width for _ in range(self.height)]

    def reset(self, figure: Figure):
        self.grid = self._empty_grid()
        self.current_figure = figure

    def fits(self) -> bool:
        f = self.current_figure
        return not collide(self.grid, f.matrix, f.position)

    def move_figure(self, delta: Point) -> bool:
        f = self.current_figure
        target = f.position + delta
        if collide(self.grid, f.matrix, target):
            return False
        f.position = target
        self.draw_figure()
        return True

    def rotate_figure(self):
        f = self.current_figure
        rotation = f.rotated()
        if rotation == f.rotation:
            return
        if collide(self.grid, ROTATIONS[f.variant][rotation], f.position):
            return
        f.rotation = rotation
        self.draw_figure()

    def fix_figure(self):
        f = self.current_figure
        for x, y in f.cells():
            self.grid[y][x] = f.variant

    def get_filled_lines_indices(self) -> List[int]:
        return [y for y, row in enumerate(self.grid) if all(row)]

    def wipe_lines(self, indices: Sequence[int]):
        gone = set(indices)
        kept = [row for y, row in enumerate(self.grid) if y not in gone]
        self.grid = [[None] * self.width for _ in range(self.height - len(kept))] + kept
        log.debug("wiped lines %s", sorted(gone))

    def draw_figure(self):
        self.view.draw_figure(self.current_figure)
