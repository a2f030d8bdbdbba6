import asyncio

import pytest

from tetris_config import CONFIG


class RecordingView:
    """Display double that records what the game asked it to do."""

    def __init__(self):
        self.score = None
        self.level = None
        self.cleared = 0
        self.drawn = []
        self.wiped = []
        self.game_overs = 0

    def clear_area(self):
        self.cleared += 1

    def draw_figure(self, figure):
        self.drawn.append((figure.variant, figure.position, figure.rotation))

    def wipe_lines(self, indices):
        self.wiped.append(list(indices))

    def game_over(self):
        self.game_overs += 1


class FixedRng:
    """Always hands out the same variant."""

    def __init__(self, variant):
        self.variant = variant

    def choice(self, seq):
        assert self.variant in seq
        return self.variant


async def wait_until(predicate, timeout=2.0):
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.002)


@pytest.fixture
def view():
    return RecordingView()


@pytest.fixture
def slow_gravity(monkeypatch):
    """No gravity step fires during a test; only inputs move the figure."""
    monkeypatch.setitem(CONFIG, "BASE_DELAY_MS", 60000)
    monkeypatch.setitem(CONFIG, "MOVE_REPEAT_MS", 10000)
    monkeypatch.setitem(CONFIG, "DOWN_REPEAT_MS", 10000)


@pytest.fixture
def fast_gravity(monkeypatch):
    monkeypatch.setitem(CONFIG, "BASE_DELAY_MS", 2)
    monkeypatch.setitem(CONFIG, "DELAY_STEP_MS", 0)
