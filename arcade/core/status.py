from __future__ import annotations

from enum import StrEnum


class GameStatus(StrEnum):
    idle = "idle"
    playing = "playing"
    won = "won"
    over = "over"

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.won, GameStatus.over)


class GameKind(StrEnum):
    tile_merge = "tile_merge"
    stacking = "stacking"
    locomotion = "locomotion"
