from __future__ import annotations

import fakeredis
import pytest

from arcade.core.commands import Command
from arcade.core.snapshot import StackingSnapshot
from arcade.core.status import GameStatus
from arcade.engines import stacking as st
from arcade.engines.stacking import Piece, PieceKind
from arcade.score_store import ScoreStore, best_key
from arcade.sessions import StackingSession
from arcade.settings import ArcadeSettings
from tests.conftest import ManualScheduler


def _board_with(cells: dict[tuple[int, int], str]) -> st.Board:
    rows = [[None] * st.COLS for _ in range(st.ROWS)]
    for (r, c), color in cells.items():
        rows[r][c] = color
    return tuple(tuple(row) for row in rows)


@pytest.fixture()
def session(scheduler: ManualScheduler, store: ScoreStore, settings: ArcadeSettings) -> StackingSession:
    return StackingSession(scheduler=scheduler, store=store, settings=settings)


def test_new_session_is_idle_with_a_piece(session: StackingSession, scheduler: ManualScheduler) -> None:
    assert session.status == GameStatus.idle
    assert session.piece is not None
    assert session.piece.anchor == st.SPAWN_ANCHOR
    assert scheduler.pending == []


def test_gravity_runs_only_while_playing(session: StackingSession, scheduler: ManualScheduler) -> None:
    scheduler.advance(1000)
    assert session.piece is not None
    assert session.piece.anchor == st.SPAWN_ANCHOR

    assert session.handle(Command.start()) is True
    assert len(scheduler.pending) == 1

    scheduler.advance(500)
    assert session.piece.anchor == (1, 4)
    scheduler.advance(1000)
    assert session.piece.anchor == (3, 4)


def test_sideways_moves_and_rotation(session: StackingSession) -> None:
    session.start()
    session.piece = Piece.of(PieceKind.T, anchor=(5, 5))

    assert session.handle(Command.move("left")) is True
    assert session.piece.anchor == (5, 4)
    assert session.handle(Command.move("right")) is True
    assert session.piece.anchor == (5, 5)

    assert session.handle(Command.rotate()) is True
    assert session.piece.offsets == ((1, 0), (0, 0), (-1, 0), (0, 1))
    # Up is the rotate key as well.
    assert session.handle(Command.move("up")) is True
    assert session.piece.offsets == ((0, 1), (0, 0), (0, -1), (-1, 0))


def test_blocked_moves_are_ignored(session: StackingSession) -> None:
    session.start()
    piece = Piece.of(PieceKind.I, anchor=(0, 1))
    session.piece = piece

    assert session.handle(Command.move("left")) is False
    assert session.handle(Command.rotate()) is False
    assert session.piece is piece
    assert session.status == GameStatus.playing


def test_rotate_in_idle_starts_the_game(session: StackingSession) -> None:
    session.piece = Piece.of(PieceKind.T, anchor=(5, 5))
    assert session.handle(Command.rotate()) is True
    assert session.status == GameStatus.playing


def test_soft_drop_locks_and_scores_line(
    session: StackingSession,
    redis_client: fakeredis.FakeRedis,
) -> None:
    session.start()
    session.board = _board_with({(19, c): "x" for c in range(st.COLS) if c not in range(4, 8)})
    session.piece = Piece.of(PieceKind.I, anchor=(19, 5))

    assert session.handle(Command.move("down")) is True

    assert session.score == 100
    assert session.board == st.empty_board()
    assert session.piece is not None
    assert session.piece.anchor == st.SPAWN_ANCHOR
    assert redis_client.get(best_key("stacking")) == "100"


def test_blocked_spawn_ends_the_game(session: StackingSession, scheduler: ManualScheduler) -> None:
    session.start()
    session.board = _board_with({st.SPAWN_ANCHOR: "x", (2, 0): "x", (2, 1): "x"})
    session.piece = Piece.of(PieceKind.O, anchor=(0, 0))

    scheduler.advance(500)

    assert session.status == GameStatus.over
    assert session.piece is None
    assert scheduler.pending == []
    assert session.handle(Command.move("left")) is False
    assert session.handle(Command.start()) is False


def test_reset_after_over(session: StackingSession, scheduler: ManualScheduler) -> None:
    session.start()
    session.board = _board_with({st.SPAWN_ANCHOR: "x", (2, 0): "x"})
    session.piece = Piece.of(PieceKind.O, anchor=(0, 0))
    scheduler.advance(500)
    assert session.status == GameStatus.over

    assert session.handle(Command.reset()) is True

    assert session.status == GameStatus.idle
    assert session.board == st.empty_board()
    assert session.piece is not None
    assert scheduler.pending == []


def test_snapshot_lists_active_piece_cells(session: StackingSession) -> None:
    session.piece = Piece.of(PieceKind.O, anchor=(3, 3))
    snap = session.snapshot()
    assert isinstance(snap, StackingSnapshot)
    assert snap.piece_kind == "O"
    assert snap.piece_color == st.SHAPES[PieceKind.O].color
    assert sorted(snap.piece_cells) == [(3, 3), (3, 4), (4, 3), (4, 4)]
    assert len(snap.board) == st.ROWS


def test_inputs_without_a_piece_change_nothing(session: StackingSession) -> None:
    session.start()
    session.piece = None
    board = session.board

    assert session.handle(Command.move("down")) is False
    assert session.handle(Command.move("left")) is False
    assert session.handle(Command.rotate()) is False
    session.tick()

    assert session.board == board
    assert session.status == GameStatus.playing
