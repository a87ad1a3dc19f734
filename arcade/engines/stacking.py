"""Piece-stacking engine.

A 20x10 board of locked cells plus one active piece described by offsets
around an anchor. Everything here is a pure function; gravity is driven by an
external tick that calls :func:`gravity_step`.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Iterable

from arcade.core.commands import Cell

ROWS = 20
COLS = 10
SPAWN_ANCHOR: Cell = (0, 4)
LINE_SCORE = 100

Board = tuple[tuple[str | None, ...], ...]
Offsets = tuple[Cell, ...]


class PieceKind(StrEnum):
    I = "I"
    O = "O"
    T = "T"
    L = "L"
    J = "J"
    S = "S"
    Z = "Z"


@dataclass(frozen=True, slots=True)
class Shape:
    color: str
    offsets: Offsets


SHAPES: dict[PieceKind, Shape] = {
    PieceKind.I: Shape("#4fc3f7", ((0, -1), (0, 0), (0, 1), (0, 2))),
    PieceKind.O: Shape("#ffeb3b", ((0, 0), (0, 1), (1, 0), (1, 1))),
    PieceKind.T: Shape("#ba68c8", ((0, -1), (0, 0), (0, 1), (1, 0))),
    PieceKind.L: Shape("#ffb74d", ((0, -1), (0, 0), (0, 1), (1, -1))),
    PieceKind.J: Shape("#64b5f6", ((0, -1), (0, 0), (0, 1), (1, 1))),
    PieceKind.S: Shape("#81c784", ((0, 0), (0, 1), (1, -1), (1, 0))),
    PieceKind.Z: Shape("#e57373", ((0, -1), (0, 0), (1, 0), (1, 1))),
}


@dataclass(frozen=True, slots=True)
class Piece:
    kind: PieceKind
    color: str
    offsets: Offsets
    anchor: Cell = SPAWN_ANCHOR

    @classmethod
    def of(cls, kind: PieceKind | str, anchor: Cell = SPAWN_ANCHOR) -> Piece:
        kind = PieceKind(kind)
        shape = SHAPES[kind]
        return cls(kind=kind, color=shape.color, offsets=shape.offsets, anchor=anchor)


@dataclass(frozen=True, slots=True)
class Translation:
    moved: bool
    piece: Piece


@dataclass(frozen=True, slots=True)
class Lock:
    board: Board
    lines_cleared: int


@dataclass(frozen=True, slots=True)
class GravityOutcome:
    """Result of one gravity tick.

    ``locked`` is set when the piece could not fall; ``piece`` is then the
    freshly spawned piece, or None when the spawn was blocked.
    """

    board: Board
    piece: Piece | None
    locked: bool = False
    lines_cleared: int = 0
    score_delta: int = 0


def empty_board(rows: int = ROWS, cols: int = COLS) -> Board:
    return tuple(tuple(None for _ in range(cols)) for _ in range(rows))


def in_bounds(board: Board, cell: Cell) -> bool:
    r, c = cell
    return 0 <= r < len(board) and 0 <= c < len(board[0])


def translate(offsets: Iterable[Cell], anchor: Cell) -> list[Cell]:
    ar, ac = anchor
    return [(ar + dr, ac + dc) for dr, dc in offsets]


def piece_cells(piece: Piece) -> list[Cell]:
    return translate(piece.offsets, piece.anchor)


def can_place(board: Board, offsets: Iterable[Cell], anchor: Cell) -> bool:
    for cell in translate(offsets, anchor):
        if not in_bounds(board, cell):
            return False
        r, c = cell
        if board[r][c] is not None:
            return False
    return True


def rotate_offsets(offsets: Offsets) -> Offsets:
    return tuple((-dc, dr) for dr, dc in offsets)


def rotate(board: Board, piece: Piece) -> Piece:
    """Rotate a quarter turn in place; no kicks, rejected rotations return ``piece``."""
    rotated = rotate_offsets(piece.offsets)
    if not can_place(board, rotated, piece.anchor):
        return piece
    return replace(piece, offsets=rotated)


def try_move(board: Board, piece: Piece, delta: Cell) -> Translation:
    dr, dc = delta
    ar, ac = piece.anchor
    anchor = (ar + dr, ac + dc)
    if not can_place(board, piece.offsets, anchor):
        return Translation(moved=False, piece=piece)
    return Translation(moved=True, piece=replace(piece, anchor=anchor))


def clear_full_rows(rows: list[list[str | None]]) -> int:
    """Remove full rows in place, scanning bottom-up; returns the count removed."""
    cols = len(rows[0])
    cleared = 0
    r = len(rows) - 1
    while r >= 0:
        if all(cell is not None for cell in rows[r]):
            del rows[r]
            rows.insert(0, [None] * cols)
            cleared += 1
            # Rows above shifted down into index r; check it again.
            continue
        r -= 1
    return cleared


def lock_piece(board: Board, piece: Piece) -> Lock:
    rows = [list(row) for row in board]
    for cell in piece_cells(piece):
        if in_bounds(board, cell):
            r, c = cell
            rows[r][c] = piece.color

    cleared = clear_full_rows(rows)
    return Lock(board=tuple(tuple(row) for row in rows), lines_cleared=cleared)


def line_clear_score(lines: int, per_line: int = LINE_SCORE) -> int:
    return lines * per_line


def spawn_piece(board: Board, rng: random.Random, anchor: Cell = SPAWN_ANCHOR) -> Piece | None:
    piece = Piece.of(rng.choice(list(PieceKind)), anchor=anchor)
    if not can_place(board, piece.offsets, piece.anchor):
        return None
    return piece


def gravity_step(board: Board, piece: Piece, rng: random.Random, *, per_line: int = LINE_SCORE) -> GravityOutcome:
    """Drop the piece one row, locking it and spawning the next when it cannot fall."""
    step = try_move(board, piece, (1, 0))
    if step.moved:
        return GravityOutcome(board=board, piece=step.piece)

    lock = lock_piece(board, piece)
    return GravityOutcome(
        board=lock.board,
        piece=spawn_piece(lock.board, rng),
        locked=True,
        lines_cleared=lock.lines_cleared,
        score_delta=line_clear_score(lock.lines_cleared, per_line),
    )
