"""Score and level counters"""
from typing import Callable

from tetris_config import CONFIG

def lines_award(count: int, level: int) -> int:
    # 100, 300, 700, 1500 at level 0: each extra line doubles the bonus
    return CONFIG["LINE_AWARD"] * (2 ** count - 1) * (level + 1)

class Score:
    def __init__(self, on_change: Callable[["Score"], None]):
        self.on_change = on_change
        self.points = 0
        self.level = 0
        self.lines = 0

    def award_start(self):
        self.points = self.level = self.lines = 0
        self.on_change(self)

    def award_speed_up(self):
        self.points += CONFIG["SPEED_UP_AWARD"]
        self.on_change(self)

    def award_lines_wipe(self, count: int):
        if count <= 0:
            return
        self.points += lines_award(count, self.level)
        self.lines += count
        self.level = max(self.level, self.lines // CONFIG["LINES_PER_LEVEL"])
        self.on_change(self)
