"""Timer handles for the cool-down, gravity and chase intervals.

Sessions never own a clock. The shell hands them a :class:`Scheduler`, and
every timer they start comes back as a :class:`TimerHandle` they can cancel
on reset or when the player returns to the menu.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Callable

Callback = Callable[[], None]


class TimerHandle(ABC):
    @abstractmethod
    def cancel(self) -> None:
        raise NotImplementedError

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        raise NotImplementedError


class Scheduler(ABC):
    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callback) -> TimerHandle:
        """Run ``callback`` once after ``delay_ms``."""
        raise NotImplementedError

    @abstractmethod
    def call_every(self, interval_ms: int, callback: Callback) -> TimerHandle:
        """Run ``callback`` every ``interval_ms`` until the handle is cancelled."""
        raise NotImplementedError


class _AsyncioTimer(TimerHandle):
    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        delay_s: float,
        callback: Callback,
        *,
        repeat: bool,
    ) -> None:
        self._loop = loop
        self._delay_s = delay_s
        self._callback = callback
        self._repeat = repeat
        self._cancelled = False
        self._handle = loop.call_later(delay_s, self._fire)

    def _fire(self) -> None:
        if self._cancelled:
            return
        if self._repeat:
            # Re-arm first so the callback may cancel its own timer.
            self._handle = self._loop.call_later(self._delay_s, self._fire)
        self._callback()

    def cancel(self) -> None:
        self._cancelled = True
        self._handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class AsyncioScheduler(Scheduler):
    """Scheduler on an asyncio event loop; callbacks run on the loop thread."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay_ms: int, callback: Callback) -> TimerHandle:
        return _AsyncioTimer(self.loop, delay_ms / 1000, callback, repeat=False)

    def call_every(self, interval_ms: int, callback: Callback) -> TimerHandle:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        return _AsyncioTimer(self.loop, interval_ms / 1000, callback, repeat=True)
