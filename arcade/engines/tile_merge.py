"""Tile-merge engine.

Pure functions over immutable 4x4 boards. Every direction is normalised onto a
single "compact and merge left" primitive by rotating the board clockwise,
merging each row, then rotating back.

Only spawning is random; callers pass an explicit ``random.Random``.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Sequence, TypeVar

from arcade.core.commands import Cell, Direction

BOARD_SIZE = 4
WIN_TARGET = 2048
SPAWN_FOUR_PROBABILITY = 0.1

T = TypeVar("T")

Board = tuple[tuple[int, ...], ...]
Mask = tuple[tuple[bool, ...], ...]

# Clockwise quarter turns that bring each direction onto "left".
ROTATIONS: dict[Direction, int] = {
    Direction.left: 0,
    Direction.down: 1,
    Direction.right: 2,
    Direction.up: 3,
}


@dataclass(frozen=True, slots=True)
class LineMerge:
    line: tuple[int, ...]
    score_delta: int
    merged_mask: tuple[bool, ...]


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    board: Board
    score_delta: int
    merged_mask: Mask
    spawned: Cell | None = None

    @property
    def merged_cells(self) -> list[Cell]:
        return [(r, c) for r, row in enumerate(self.merged_mask) for c, hit in enumerate(row) if hit]


@dataclass(frozen=True, slots=True)
class Spawn:
    board: Board
    cell: Cell | None


def empty_board(size: int = BOARD_SIZE) -> Board:
    return tuple(tuple(0 for _ in range(size)) for _ in range(size))


def empty_mask(size: int = BOARD_SIZE) -> Mask:
    return tuple(tuple(False for _ in range(size)) for _ in range(size))


def rotate_clockwise(grid: Sequence[Sequence[T]]) -> tuple[tuple[T, ...], ...]:
    """Rotate an N x N grid a quarter turn clockwise: new[c][N-1-r] = old[r][c]."""
    n = len(grid)
    return tuple(tuple(grid[n - 1 - r][c] for r in range(n)) for c in range(n))


def rotate_times(grid: Sequence[Sequence[T]], times: int) -> tuple[tuple[T, ...], ...]:
    out = tuple(tuple(row) for row in grid)
    for _ in range(times % 4):
        out = rotate_clockwise(out)
    return out


def compact_and_merge_line(line: Sequence[int]) -> LineMerge:
    """Slide a line to the left, merging equal neighbours at most once each.

    ``[2, 2, 2, 2]`` becomes ``[4, 4, 0, 0]``; a merge product is never merged
    again in the same pass.
    """
    size = len(line)
    tiles = [v for v in line if v != 0]
    merged = [False] * len(tiles)
    score = 0

    i = 0
    while i < len(tiles) - 1:
        if tiles[i] == tiles[i + 1]:
            tiles[i] *= 2
            score += tiles[i]
            merged[i] = True
            tiles[i + 1] = 0
            i += 2
        else:
            i += 1

    kept = [(v, m) for v, m in zip(tiles, merged) if v != 0]
    padding = size - len(kept)
    new_line = tuple(v for v, _ in kept) + (0,) * padding
    mask = tuple(m for _, m in kept) + (False,) * padding
    return LineMerge(line=new_line, score_delta=score, merged_mask=mask)


def apply_move(board: Board, direction: Direction) -> MoveOutcome:
    """Slide the whole board in ``direction``; deterministic, never spawns."""
    k = ROTATIONS[Direction(direction)]
    rotated = rotate_times(board, k)

    rows: list[tuple[int, ...]] = []
    masks: list[tuple[bool, ...]] = []
    score = 0
    for row in rotated:
        merge = compact_and_merge_line(row)
        rows.append(merge.line)
        masks.append(merge.merged_mask)
        score += merge.score_delta

    back = (4 - k) % 4
    return MoveOutcome(
        board=rotate_times(rows, back),
        score_delta=score,
        merged_mask=rotate_times(masks, back),
    )


def empty_cells(board: Board) -> list[Cell]:
    return [(r, c) for r, row in enumerate(board) for c, v in enumerate(row) if v == 0]


def spawn_tile(board: Board, rng: random.Random) -> Spawn:
    empty = empty_cells(board)
    if not empty:
        return Spawn(board=board, cell=None)

    r, c = rng.choice(empty)
    value = 4 if rng.random() < SPAWN_FOUR_PROBABILITY else 2
    new_board = tuple(
        tuple(value if (ri, ci) == (r, c) else v for ci, v in enumerate(row)) for ri, row in enumerate(board)
    )
    return Spawn(board=new_board, cell=(r, c))


def new_board(rng: random.Random, size: int = BOARD_SIZE) -> Spawn:
    """Fresh board seeded with two tiles; ``cell`` is the second spawn."""
    first = spawn_tile(empty_board(size), rng)
    return spawn_tile(first.board, rng)


def has_any_legal_move(board: Board) -> bool:
    n = len(board)
    for r in range(n):
        for c in range(n):
            v = board[r][c]
            if v == 0:
                return True
            if c + 1 < n and board[r][c + 1] == v:
                return True
            if r + 1 < n and board[r + 1][c] == v:
                return True
    return False


def contains_target(board: Board, target: int = WIN_TARGET) -> bool:
    return any(v >= target for row in board for v in row)


def play_move(board: Board, direction: Direction, rng: random.Random) -> MoveOutcome:
    """Apply a move and spawn a tile, unless the move changed nothing."""
    outcome = apply_move(board, direction)
    if outcome.board == board:
        return MoveOutcome(board=board, score_delta=0, merged_mask=empty_mask(len(board)))

    spawn = spawn_tile(outcome.board, rng)
    return MoveOutcome(
        board=spawn.board,
        score_delta=outcome.score_delta,
        merged_mask=outcome.merged_mask,
        spawned=spawn.cell,
    )
