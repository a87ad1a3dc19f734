from __future__ import annotations

from arcade.core.commands import Cell, Direction
from arcade.core.snapshot import TileMergeSnapshot
from arcade.core.status import GameKind
from arcade.engines import tile_merge
from arcade.fsm import TileMergeStatusFSM
from arcade.sessions.base import GameSession

COOLDOWN_TIMER = "cooldown"


class TileMergeSession(GameSession):
    """Sliding tile puzzle.

    After every effective move a cool-down window opens; moves arriving inside
    it are dropped, not queued. Highlights only describe the latest effective
    move, and a no-op move clears them.
    """

    game = GameKind.tile_merge
    fsm_class = TileMergeStatusFSM

    board: tile_merge.Board
    merged: list[Cell]
    spawned: list[Cell]

    def _new_game(self) -> None:
        self.board = tile_merge.new_board(self.rng).board
        self.merged = []
        self.spawned = []

    @property
    def cooling_down(self) -> bool:
        return self._timer_active(COOLDOWN_TIMER)

    def _end_cooldown(self) -> None:
        self._clear_timer(COOLDOWN_TIMER)

    def _on_move(self, direction: Direction) -> bool:
        outcome = tile_merge.play_move(self.board, direction, self.rng)
        if outcome.board == self.board:
            self.merged = []
            self.spawned = []
            return False

        self.board = outcome.board
        self.merged = outcome.merged_cells
        self.spawned = [outcome.spawned] if outcome.spawned is not None else []
        self._add_score(outcome.score_delta)
        self._later(COOLDOWN_TIMER, self.settings.merge_cooldown_ms, self._end_cooldown)

        if tile_merge.contains_target(self.board, self.settings.merge_target):
            self.finish("win")
        elif not tile_merge.has_any_legal_move(self.board):
            self.finish("end")
        return True

    def snapshot(self) -> TileMergeSnapshot:
        return TileMergeSnapshot(
            status=self.status,
            score=self.score,
            best_score=self.best_score,
            board=[list(row) for row in self.board],
            merged=list(self.merged),
            spawned=list(self.spawned),
        )
