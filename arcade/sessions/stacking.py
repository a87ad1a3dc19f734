from __future__ import annotations

import logging

from arcade.core.commands import Direction
from arcade.core.snapshot import StackingSnapshot
from arcade.core.status import GameKind, GameStatus
from arcade.engines import stacking
from arcade.fsm import PlayStatusFSM
from arcade.sessions.base import GameSession

logger = logging.getLogger(__name__)

GRAVITY_TIMER = "gravity"

_SIDEWAYS = {
    Direction.left: (0, -1),
    Direction.right: (0, 1),
}


class StackingSession(GameSession):
    """Falling-block puzzle driven by a fixed gravity tick.

    Input mapping: left/right shift, down drops one row (locking when blocked),
    up rotates.
    """

    game = GameKind.stacking
    fsm_class = PlayStatusFSM

    board: stacking.Board
    piece: stacking.Piece | None

    def _new_game(self) -> None:
        self.board = stacking.empty_board()
        self.piece = stacking.spawn_piece(self.board, self.rng)

    def _on_started(self) -> None:
        self._every(GRAVITY_TIMER, self.settings.gravity_ms, self.tick)

    def tick(self) -> None:
        if self.status != GameStatus.playing or self.piece is None:
            return
        self._fall()

    def _fall(self) -> bool:
        if self.piece is None:
            return False
        outcome = stacking.gravity_step(self.board, self.piece, self.rng, per_line=self.settings.line_score)
        self.board = outcome.board
        self.piece = outcome.piece
        if outcome.lines_cleared:
            logger.debug("cleared %d line(s)", outcome.lines_cleared)
            self._add_score(outcome.score_delta)
        if outcome.locked and outcome.piece is None:
            self.finish("end")
        return True

    def _on_move(self, direction: Direction) -> bool:
        if self.piece is None:
            return False
        if direction == Direction.up:
            return self._on_rotate()
        if direction == Direction.down:
            return self._fall()

        step = stacking.try_move(self.board, self.piece, _SIDEWAYS[direction])
        self.piece = step.piece
        return step.moved

    def _on_rotate(self) -> bool:
        if self.piece is None:
            return False
        rotated = stacking.rotate(self.board, self.piece)
        changed = rotated is not self.piece
        self.piece = rotated
        return changed

    def snapshot(self) -> StackingSnapshot:
        piece = self.piece
        return StackingSnapshot(
            status=self.status,
            score=self.score,
            best_score=self.best_score,
            board=[list(row) for row in self.board],
            piece_kind=piece.kind.value if piece else None,
            piece_color=piece.color if piece else None,
            piece_cells=stacking.piece_cells(piece) if piece else [],
        )
