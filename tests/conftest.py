from __future__ import annotations

import random
from collections.abc import Generator
from dataclasses import dataclass

import fakeredis
import pytest

from arcade.scheduler import Callback, Scheduler, TimerHandle
from arcade.score_store import ScoreStore
from arcade.settings import ArcadeSettings


@dataclass(eq=False)
class ManualTimer(TimerHandle):
    due_ms: int
    interval_ms: int | None
    callback: Callback
    _cancelled: bool = False
    done: bool = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """Deterministic clock for session tests: time only moves on `advance`."""

    def __init__(self) -> None:
        self.now_ms = 0
        self.timers: list[ManualTimer] = []

    def call_later(self, delay_ms: int, callback: Callback) -> TimerHandle:
        t = ManualTimer(due_ms=self.now_ms + delay_ms, interval_ms=None, callback=callback)
        self.timers.append(t)
        return t

    def call_every(self, interval_ms: int, callback: Callback) -> TimerHandle:
        t = ManualTimer(due_ms=self.now_ms + interval_ms, interval_ms=interval_ms, callback=callback)
        self.timers.append(t)
        return t

    @property
    def pending(self) -> list[ManualTimer]:
        return [t for t in self.timers if not t.cancelled and not t.done]

    def advance(self, ms: int) -> None:
        target = self.now_ms + ms
        while True:
            due = [t for t in self.pending if t.due_ms <= target]
            if not due:
                break
            t = min(due, key=lambda x: x.due_ms)
            self.now_ms = t.due_ms
            if t.interval_ms is None:
                t.done = True
            else:
                t.due_ms += t.interval_ms
            t.callback()
        self.now_ms = target


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture()
def redis_client() -> Generator[fakeredis.FakeRedis, None, None]:
    r = fakeredis.FakeRedis(decode_responses=True)
    yield r
    r.flushall()


@pytest.fixture()
def store(redis_client: fakeredis.FakeRedis) -> ScoreStore:
    return ScoreStore(redis_client)


@pytest.fixture()
def settings() -> ArcadeSettings:
    return ArcadeSettings(seed=1234)
