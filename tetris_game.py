"""Game loop: gravity, input, locking, line clears and game over.

One asyncio task runs the loop below. Each pass of the falling phase waits
for whichever comes first, a signal from the input side or the gravity
timeout, and then moves the figure down at most once:

    FALLING -> LOCKING -> CLEARING -> SPAWNING -> FALLING
                  |
                  +-> GAME_OVER (figure blocked on its spawn row)

Key repeaters run as separate tasks on the same event loop, so every write
to the board and the score happens on the loop thread. Input callbacks
arriving from another thread are handed over with call_soon_threadsafe.
"""
import asyncio
import enum
import logging
import random
from typing import Optional, Set

from tetris_board import Board
from tetris_config import CONFIG
from tetris_input import KeyRepeater
from tetris_piece import AREA_WIDTH, DOWN, LEFT, RIGHT, Figure, random_figure
from tetris_score import Score
from tetris_view import GameView

log = logging.getLogger(__name__)

class GameState(enum.Enum):
    IDLE = "idle"
    FALLING = "falling"
    LOCKING = "locking"
    CLEARING = "clearing"
    SPAWNING = "spawning"
    PAUSED = "paused"
    GAME_OVER = "game over"

class Signal(enum.Enum):
    DESCEND = 1  # move the figure down now
    WAKE = 2     # recompute the gravity timeout without moving

def calculate_delay(level: int) -> int:
    """Milliseconds between gravity steps, never below 1."""
    return max(1, CONFIG["BASE_DELAY_MS"] - level * CONFIG["DELAY_STEP_MS"])

def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None

class Game:
    def __init__(self, view: GameView, rng: Optional[random.Random] = None):
        self.view = view
        self.rng = rng or random.Random()
        self.board = Board(view, self._random_figure())
        self.score = Score(self._show_score)

        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._signals: Optional[asyncio.Queue] = None
        self._tasks: Set[asyncio.Task] = set()
        self._actor: Optional[asyncio.Task] = None
        self._sessions = 0
        self._started = False
        self._paused = False
        self._state = GameState.IDLE

        self._down_key = KeyRepeater(self._spawn, self._speed_up, "DOWN_REPEAT_MS")
        self._left_key = KeyRepeater(self._spawn, lambda: self.board.move_figure(LEFT), "MOVE_REPEAT_MS")
        self._right_key = KeyRepeater(self._spawn, lambda: self.board.move_figure(RIGHT), "MOVE_REPEAT_MS")

    # ---------- Control surface ----------
    @property
    def started(self) -> bool:
        return self._started

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def state(self) -> GameState:
        if self._paused and self._state is GameState.FALLING:
            return GameState.PAUSED
        return self._state

    def start(self):
        """Begin a session. Must be called from a running event loop."""
        if self._started:
            raise RuntimeError("Can't start twice")
        self._loop = asyncio.get_running_loop()
        self._started = True
        self._paused = False
        self._state = GameState.FALLING
        self._signals = asyncio.Queue(maxsize=1)
        if self._sessions:
            self.board.reset(self._random_figure())
        self._sessions += 1

        self.view.clear_area()
        self.score.award_start()
        self._actor = self._spawn(self._run())

    def stop(self):
        self._call(self._teardown)

    def pause(self):
        self._input(self._toggle_pause)

    async def wait(self):
        """Return once the loop task of the last session has finished."""
        if self._actor is not None:
            await asyncio.wait({self._actor})

    def on_left_pressed(self): self._input(self._left_key.start)
    def on_left_released(self): self._input(self._left_key.stop)
    def on_right_pressed(self): self._input(self._right_key.start)
    def on_right_released(self): self._input(self._right_key.stop)
    def on_up_pressed(self): self._input(self.board.rotate_figure)
    def on_down_pressed(self): self._input(self._down_key.start)
    def on_down_released(self): self._input(self._down_key.stop)

    # ---------- Loop ----------
    async def _run(self):
        log.debug("game loop started")
        try:
            while True:
                self._state = GameState.FALLING
                self.board.draw_figure()
                # a figure spawned onto fixed cells locks straight away
                while self.board.fits() and await self._fall():
                    pass

                self._state = GameState.LOCKING
                if self._is_game_over():
                    break
                self.board.fix_figure()

                self._state = GameState.CLEARING
                lines = self.board.get_filled_lines_indices()
                if lines:
                    self.board.wipe_lines(lines)
                    self.view.wipe_lines(lines)
                    self.score.award_lines_wipe(len(lines))

                self._state = GameState.SPAWNING
                self.board.current_figure = self._random_figure()
            self._finish()
        finally:
            log.debug("game loop stopped")

    async def _fall(self) -> bool:
        """One falling step. False once the figure can't go further down."""
        try:
            signal = await asyncio.wait_for(self._signals.get(), self._timeout())
        except asyncio.TimeoutError:
            signal = Signal.DESCEND
        if signal is Signal.WAKE:
            return True
        return self.board.move_figure(DOWN)

    def _timeout(self) -> Optional[float]:
        if self._paused:
            return None
        return calculate_delay(self.score.level) / 1000

    def _is_game_over(self) -> bool:
        return self.board.current_figure.position.y <= 0

    def _finish(self):
        self._state = GameState.GAME_OVER
        self._started = False
        self._paused = False
        self._cancel_session()
        self.view.game_over()
        log.info("game over: %d points, level %d", self.score.points, self.score.level)

    # ---------- Session helpers ----------
    def _spawn(self, coro) -> asyncio.Task:
        task = self._loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _cancel_session(self):
        for key in (self._left_key, self._right_key, self._down_key):
            key.stop()
        current = asyncio.current_task()
        for task in list(self._tasks):
            if task is not current:
                task.cancel()

    def _teardown(self):
        if self._started:
            log.info("game stopped")
        self._started = False
        self._paused = False
        self._state = GameState.IDLE
        self._cancel_session()

    def _offer(self, signal: Signal):
        try:
            self._signals.put_nowait(signal)
        except asyncio.QueueFull:
            pass  # one pending signal is enough

    def _speed_up(self):
        self.score.award_speed_up()
        self._offer(Signal.DESCEND)

    def _toggle_pause(self):
        self._paused = not self._paused
        log.debug("paused" if self._paused else "resumed")
        self._offer(Signal.WAKE)

    def _call(self, fn, *args):
        loop = self._loop
        if loop is None or loop.is_closed():
            log.debug("dropping input: no running session loop")
            return
        if _running_loop() is loop:
            fn(*args)
        else:
            loop.call_soon_threadsafe(fn, *args)

    def _input(self, fn):
        self._call(self._if_started, fn)

    def _if_started(self, fn):
        if not self._started:
            log.debug("ignoring input while not started")
            return
        fn()

    def _show_score(self, score: Score):
        self.view.score = score.points
        self.view.level = score.level

    def _random_figure(self) -> Figure:
        return random_figure(self.rng, AREA_WIDTH)
