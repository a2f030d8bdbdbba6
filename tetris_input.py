"""Held-key repeat controller"""
import asyncio
from typing import Awaitable, Callable, Optional
from tetris_config import CONFIG

class KeyRepeater:
    """Turns a held key into a steady stream of actions.

    The first action runs inside start() itself, so a press released before
    the first interval still counts exactly once. Repeats come from a task
    created through `spawn`, which ties it to the game session. The interval
    is looked up in CONFIG under `interval_key` before every repeat.
    """

    def __init__(self, spawn: Callable[[Awaitable], asyncio.Task], action: Callable[[], object], interval_key: str):
        self.spawn = spawn
        self.action = action
        self.interval_key = interval_key
        self._task: Optional[asyncio.Task] = None

    @property
    def interval_ms(self) -> int:
        return CONFIG[self.interval_key]

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self):
        if self.active:
            return
        self.action()
        self._task = self.spawn(self._repeat())

    def stop(self):
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _repeat(self):
        while True:
            await asyncio.sleep(self.interval_ms / 1000)
            self.action()
