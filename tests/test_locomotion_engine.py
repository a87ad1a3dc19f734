from __future__ import annotations

import random

from arcade.core.commands import Direction
from arcade.engines import locomotion as lm


def test_initial_snake_is_centered_and_connected() -> None:
    snake = lm.initial_snake()
    assert snake == ((10, 11), (10, 10), (10, 9))
    assert len(set(snake)) == 3


def test_set_direction_discards_reversal() -> None:
    assert lm.set_direction(Direction.right, Direction.left) == Direction.right
    assert lm.set_direction(Direction.up, Direction.down) == Direction.up
    assert lm.set_direction(Direction.right, Direction.up) == Direction.up
    assert lm.set_direction(Direction.right, Direction.right) == Direction.right


def test_tick_into_wall_is_terminal_and_unchanged(rng: random.Random) -> None:
    snake = ((0, 5), (0, 4), (0, 3))
    food = (7, 7)
    outcome = lm.tick(snake, food, Direction.up, rng)
    assert outcome.terminal is True
    assert outcome.ate is False
    assert outcome.snake == snake
    assert outcome.food == food


def test_tick_moves_and_drops_tail(rng: random.Random) -> None:
    snake = lm.initial_snake()
    outcome = lm.tick(snake, (0, 0), Direction.down, rng)
    assert outcome.terminal is False
    assert outcome.snake == ((11, 11), (10, 11), (10, 10))
    assert outcome.food == (0, 0)


def test_tick_onto_food_grows_and_relocates_food(rng: random.Random) -> None:
    snake = lm.initial_snake()
    food = (10, 12)
    outcome = lm.tick(snake, food, Direction.right, rng)
    assert outcome.ate is True
    assert len(outcome.snake) == len(snake) + 1
    assert outcome.snake[0] == food
    assert outcome.snake[1:] == snake
    assert outcome.food is not None
    assert outcome.food not in outcome.snake


def test_tick_into_own_tail_is_terminal(rng: random.Random) -> None:
    # A 2x2 loop: the tail cell would be vacated this tick but still blocks.
    snake = ((5, 5), (5, 6), (6, 6), (6, 5))
    outcome = lm.tick(snake, (0, 0), Direction.down, rng)
    assert outcome.terminal is True
    assert outcome.snake == snake


def test_random_free_cell_avoids_occupied(rng: random.Random) -> None:
    occupied = [(r, c) for r in range(lm.ROWS) for c in range(lm.COLS) if (r, c) != (3, 4)]
    assert lm.random_free_cell(occupied, rng) == (3, 4)
    assert lm.random_free_cell(occupied + [(3, 4)], rng) is None
