from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from typing import ClassVar

from arcade.command_processing.validators import CommandContext, CommandRejected, validate_command
from arcade.core.commands import Command, CommandKind, Direction
from arcade.core.snapshot import RenderSnapshot
from arcade.core.status import GameKind, GameStatus
from arcade.fsm import PlayStatusFSM, TileMergeStatusFSM
from arcade.scheduler import Callback, Scheduler, TimerHandle
from arcade.score_store import ScoreStore
from arcade.settings import ArcadeSettings

logger = logging.getLogger(__name__)


class GameSession(ABC):
    """One play-through of one game.

    Holds the latest immutable engine snapshot, the status machine, the score
    and any running timers. Every command and tick runs to completion before
    the next one is accepted, and rejected commands leave state untouched.
    """

    game: ClassVar[GameKind]
    fsm_class: ClassVar[type[PlayStatusFSM] | type[TileMergeStatusFSM]]

    def __init__(
        self,
        *,
        scheduler: Scheduler,
        store: ScoreStore | None = None,
        settings: ArcadeSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or ArcadeSettings()
        self.scheduler = scheduler
        self.store = store
        self.rng = rng or random.Random(self.settings.seed)
        self.score = 0
        self.best_score = store.best(self.game) if store is not None else None
        self._timers: dict[str, TimerHandle] = {}
        self.fsm = self.fsm_class()
        self._new_game()

    @property
    def status(self) -> GameStatus:
        return self.fsm.game_status

    @abstractmethod
    def _new_game(self) -> None:
        """Reset the board, score and highlights for a fresh game."""

    def _fire(self, event: str) -> bool:
        return self.fsm.try_send(event)

    @abstractmethod
    def snapshot(self) -> RenderSnapshot:
        raise NotImplementedError

    def _on_started(self) -> None:
        pass

    def _on_move(self, direction: Direction) -> bool:
        return False

    def _on_rotate(self) -> bool:
        return False

    @property
    def cooling_down(self) -> bool:
        return False

    def handle(self, command: Command) -> bool:
        """Apply a command; returns True if it changed anything."""
        ctx = CommandContext(game=self.game, status=self.status, command=command, cooling_down=self.cooling_down)
        try:
            validate_command(ctx)
        except CommandRejected as e:
            logger.debug("%s ignored command: %s", self.game.value, e)
            return False

        if command.kind == CommandKind.reset:
            self.reset()
            return True
        if command.kind == CommandKind.start:
            return self.start()

        # Any live input in idle starts the game first.
        started = self.status == GameStatus.idle and self.start()
        if command.kind == CommandKind.rotate:
            return self._on_rotate() or started
        if command.direction is None:
            return started
        return self._on_move(command.direction) or started

    def start(self) -> bool:
        if not self._fire("begin"):
            return False
        self._on_started()
        return True

    def reset(self) -> None:
        self.cancel_timers()
        self._fire("restart")
        self.score = 0
        self._new_game()
        logger.info("%s reset", self.game.value)

    def finish(self, event: str = "end") -> None:
        self.cancel_timers()
        if self._fire(event):
            logger.info("%s finished with status %s, score %d", self.game.value, self.status.value, self.score)

    def cancel_timers(self) -> None:
        for handle in self._timers.values():
            handle.cancel()
        self._timers.clear()

    def _start_timer(self, name: str, handle: TimerHandle) -> None:
        previous = self._timers.pop(name, None)
        if previous is not None:
            previous.cancel()
        self._timers[name] = handle

    def _every(self, name: str, interval_ms: int, callback: Callback) -> None:
        self._start_timer(name, self.scheduler.call_every(interval_ms, callback))

    def _later(self, name: str, delay_ms: int, callback: Callback) -> None:
        self._start_timer(name, self.scheduler.call_later(delay_ms, callback))

    def _timer_active(self, name: str) -> bool:
        handle = self._timers.get(name)
        return handle is not None and not handle.cancelled

    def _clear_timer(self, name: str) -> None:
        self._timers.pop(name, None)

    def _add_score(self, delta: int) -> None:
        if delta <= 0:
            return
        self.score += delta
        if self.store is not None:
            self.best_score = self.store.record(self.game, self.score, known_best=self.best_score)
        elif self.best_score is None or self.score > self.best_score:
            self.best_score = self.score
