from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, model_validator

Cell = tuple[int, int]


class Direction(StrEnum):
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    @property
    def vector(self) -> Cell:
        return _VECTORS[self]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


_VECTORS: dict[Direction, Cell] = {
    Direction.up: (-1, 0),
    Direction.down: (1, 0),
    Direction.left: (0, -1),
    Direction.right: (0, 1),
}

_OPPOSITES: dict[Direction, Direction] = {
    Direction.up: Direction.down,
    Direction.down: Direction.up,
    Direction.left: Direction.right,
    Direction.right: Direction.left,
}


class CommandKind(StrEnum):
    move = "move"
    rotate = "rotate"
    start = "start"
    reset = "reset"


class Command(BaseModel):
    """Semantic input command, independent of the device that produced it."""

    kind: CommandKind
    direction: Direction | None = None

    @model_validator(mode="after")
    def _move_needs_direction(self) -> Command:
        if self.kind == CommandKind.move and self.direction is None:
            raise ValueError("move command requires a direction")
        return self

    @classmethod
    def move(cls, direction: Direction | str) -> Command:
        return cls(kind=CommandKind.move, direction=Direction(direction))

    @classmethod
    def rotate(cls) -> Command:
        return cls(kind=CommandKind.rotate)

    @classmethod
    def start(cls) -> Command:
        return cls(kind=CommandKind.start)

    @classmethod
    def reset(cls) -> Command:
        return cls(kind=CommandKind.reset)
