"""Display interface the game core draws through"""
from typing import Protocol, Sequence

from tetris_piece import Figure

class GameView(Protocol):
    score: int
    level: int

    def clear_area(self) -> None: ...

    def draw_figure(self, figure: Figure) -> None: ...

    def wipe_lines(self, indices: Sequence[int]) -> None: ...

    def game_over(self) -> None: ...
