from __future__ import annotations

import logging
import random
from typing import Any

from arcade.core.commands import Command
from arcade.core.snapshot import RenderSnapshot
from arcade.core.status import GameKind
from arcade.scheduler import Scheduler
from arcade.score_store import ScoreStore
from arcade.sessions import SESSION_TYPES, GameSession
from arcade.settings import ArcadeSettings

logger = logging.getLogger(__name__)


class ArcadeShell:
    """Menu shell: at most one game session is active at a time.

    Entry point for every input source. Commands go to the active session in
    arrival order; with no active session they are dropped.
    """

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
        self._active: GameSession | None = None

    @property
    def active(self) -> GameSession | None:
        return self._active

    @property
    def active_game(self) -> GameKind | None:
        return self._active.game if self._active is not None else None

    def select(self, game: GameKind | str) -> GameSession:
        """Leave the current game (cancelling its timers) and open a fresh ``game``."""
        try:
            kind = GameKind(game)
        except ValueError:
            raise ValueError(f"Unknown game: {game}") from None

        self.back_to_menu()
        session_type = SESSION_TYPES[kind]
        self._active = session_type(
            scheduler=self.scheduler,
            store=self.store,
            settings=self.settings,
            rng=self.rng,
        )
        logger.info("selected %s", kind.value)
        return self._active

    def back_to_menu(self) -> None:
        if self._active is None:
            return
        self._active.cancel_timers()
        logger.info("left %s with score %d", self._active.game.value, self._active.score)
        self._active = None

    def dispatch(self, command: Command | dict[str, Any]) -> bool:
        """Forward a command to the active game; returns whether state changed.

        Raw dicts are validated into a :class:`Command` first, so malformed
        input raises ``pydantic.ValidationError`` here.
        """
        if not isinstance(command, Command):
            command = Command.model_validate(command)
        if self._active is None:
            logger.debug("no active game; dropping %s", command.kind.value)
            return False
        return self._active.handle(command)

    def snapshot(self) -> RenderSnapshot | None:
        if self._active is None:
            return None
        return self._active.snapshot()
