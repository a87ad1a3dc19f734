from __future__ import annotations

from arcade.core.commands import Cell, Direction
from arcade.core.snapshot import LocomotionSnapshot
from arcade.core.status import GameKind, GameStatus
from arcade.engines import locomotion
from arcade.fsm import PlayStatusFSM
from arcade.sessions.base import GameSession

CHASE_TIMER = "chase"


class LocomotionSession(GameSession):
    """Snake-style chase on a fixed tick.

    ``heading`` is the direction used by the last tick; ``pending`` is the
    latest accepted request and is only applied on the next tick.
    """

    game = GameKind.locomotion
    fsm_class = PlayStatusFSM

    snake: locomotion.Snake
    food: Cell | None
    heading: Direction
    pending: Direction

    def _new_game(self) -> None:
        self.snake = locomotion.initial_snake()
        self.heading = locomotion.INITIAL_DIRECTION
        self.pending = locomotion.INITIAL_DIRECTION
        self.food = locomotion.random_free_cell(self.snake, self.rng)

    def _on_started(self) -> None:
        self._every(CHASE_TIMER, self.settings.chase_ms, self.tick)

    def _on_move(self, direction: Direction) -> bool:
        if locomotion.set_direction(self.heading, direction) != direction:
            return False
        changed = direction != self.pending
        self.pending = direction
        return changed

    def tick(self) -> None:
        if self.status != GameStatus.playing:
            return

        outcome = locomotion.tick(self.snake, self.food, self.pending, self.rng)
        if outcome.terminal:
            self.finish("end")
            return

        self.heading = self.pending
        self.snake = outcome.snake
        self.food = outcome.food
        if outcome.ate:
            self._add_score(self.settings.food_score)
        if self.food is None:
            # Board is full; nowhere left to go.
            self.finish("end")

    def snapshot(self) -> LocomotionSnapshot:
        return LocomotionSnapshot(
            status=self.status,
            score=self.score,
            best_score=self.best_score,
            rows=locomotion.ROWS,
            cols=locomotion.COLS,
            head=self.snake[0],
            body=list(self.snake[1:]),
            food=self.food,
            heading=self.heading.value,
        )
