"""Locomotion engine.

A snake of cells moving one step per tick on a walled 20x20 board. The head
leads; eating food grows the body by one and places new food on a free cell.
Reversal filtering lives in :func:`set_direction`; :func:`tick` is pure apart
from the caller's ``random.Random`` used for food placement.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable

from arcade.core.commands import Cell, Direction

ROWS = 20
COLS = 20
INITIAL_DIRECTION = Direction.right

Snake = tuple[Cell, ...]


@dataclass(frozen=True, slots=True)
class TickOutcome:
    snake: Snake
    food: Cell | None
    ate: bool = False
    terminal: bool = False


def initial_snake(rows: int = ROWS, cols: int = COLS) -> Snake:
    """Three segments in the middle of the board, head first, facing right."""
    mid_r, mid_c = rows // 2, cols // 2
    return ((mid_r, mid_c + 1), (mid_r, mid_c), (mid_r, mid_c - 1))


def in_bounds(cell: Cell, rows: int = ROWS, cols: int = COLS) -> bool:
    r, c = cell
    return 0 <= r < rows and 0 <= c < cols


def random_free_cell(
    occupied: Iterable[Cell],
    rng: random.Random,
    rows: int = ROWS,
    cols: int = COLS,
) -> Cell | None:
    taken = set(occupied)
    free = [(r, c) for r in range(rows) for c in range(cols) if (r, c) not in taken]
    if not free:
        return None
    return rng.choice(free)


def set_direction(current: Direction, requested: Direction) -> Direction:
    """Return the new heading; a straight reversal is discarded."""
    requested = Direction(requested)
    if requested == current.opposite:
        return current
    return requested


def tick(
    snake: Snake,
    food: Cell | None,
    direction: Direction,
    rng: random.Random,
    rows: int = ROWS,
    cols: int = COLS,
) -> TickOutcome:
    head_r, head_c = snake[0]
    dr, dc = Direction(direction).vector
    new_head = (head_r + dr, head_c + dc)

    if not in_bounds(new_head, rows, cols):
        return TickOutcome(snake=snake, food=food, terminal=True)

    # The tail still counts even though it would move away this tick.
    if new_head in snake:
        return TickOutcome(snake=snake, food=food, terminal=True)

    if new_head == food:
        grown = (new_head,) + snake
        return TickOutcome(snake=grown, food=random_free_cell(grown, rng, rows, cols), ate=True)

    return TickOutcome(snake=(new_head,) + snake[:-1], food=food)
