from __future__ import annotations

import logging

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from arcade.core.status import GameStatus

logger = logging.getLogger(__name__)


class _StatusTracking:
    """Helpers shared by the per-game status machines."""

    @property
    def game_status(self) -> GameStatus:
        return GameStatus(str(self.current_state_value))  # type: ignore[attr-defined]

    def try_send(self, event: str) -> bool:
        """Fire ``event`` if the current status allows it; returns whether it fired."""
        before = self.game_status
        try:
            self.send(event)  # type: ignore[attr-defined]
        except TransitionNotAllowed:
            return False
        logger.info("status %s -> %s via %s", before.value, self.game_status.value, event)
        return True


class PlayStatusFSM(_StatusTracking, StateMachine):
    """idle -> playing -> over, with `restart` back to idle from anywhere.

    Used by the stacking and locomotion sessions. `over` is terminal until
    an explicit restart.
    """

    idle = State(GameStatus.idle.value, value=GameStatus.idle.value, initial=True)
    playing = State(GameStatus.playing.value, value=GameStatus.playing.value)
    over = State(GameStatus.over.value, value=GameStatus.over.value)

    begin = idle.to(playing)
    end = playing.to(over)
    restart = idle.to(idle) | playing.to(idle) | over.to(idle)

    def __init__(self, status: GameStatus = GameStatus.idle):
        super().__init__(start_value=GameStatus(status).value)


class TileMergeStatusFSM(_StatusTracking, StateMachine):
    """Like PlayStatusFSM, plus a terminal `won` reached from playing."""

    idle = State(GameStatus.idle.value, value=GameStatus.idle.value, initial=True)
    playing = State(GameStatus.playing.value, value=GameStatus.playing.value)
    won = State(GameStatus.won.value, value=GameStatus.won.value)
    over = State(GameStatus.over.value, value=GameStatus.over.value)

    begin = idle.to(playing)
    win = playing.to(won)
    end = playing.to(over)
    restart = idle.to(idle) | playing.to(idle) | won.to(idle) | over.to(idle)

    def __init__(self, status: GameStatus = GameStatus.idle):
        super().__init__(start_value=GameStatus(status).value)
