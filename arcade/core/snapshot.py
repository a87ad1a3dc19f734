from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from arcade.core.status import GameKind, GameStatus


class SnapshotBase(BaseModel):
    game: GameKind
    status: GameStatus
    score: int = 0
    best_score: int | None = None


class TileMergeSnapshot(SnapshotBase):
    game: Literal[GameKind.tile_merge] = GameKind.tile_merge
    board: list[list[int]]

    # Transient highlights from the latest effective move only.
    merged: list[tuple[int, int]] = Field(default_factory=list)
    spawned: list[tuple[int, int]] = Field(default_factory=list)


class StackingSnapshot(SnapshotBase):
    game: Literal[GameKind.stacking] = GameKind.stacking
    board: list[list[str | None]]
    piece_kind: str | None = None
    piece_color: str | None = None
    piece_cells: list[tuple[int, int]] = Field(default_factory=list)


class LocomotionSnapshot(SnapshotBase):
    game: Literal[GameKind.locomotion] = GameKind.locomotion
    rows: int
    cols: int
    head: tuple[int, int]
    body: list[tuple[int, int]]
    food: tuple[int, int] | None = None
    heading: str


RenderSnapshot = TileMergeSnapshot | StackingSnapshot | LocomotionSnapshot
