from arcade.core.status import GameKind
from arcade.sessions.base import GameSession
from arcade.sessions.locomotion import LocomotionSession
from arcade.sessions.stacking import StackingSession
from arcade.sessions.tile_merge import TileMergeSession

SESSION_TYPES: dict[GameKind, type[GameSession]] = {
    GameKind.tile_merge: TileMergeSession,
    GameKind.stacking: StackingSession,
    GameKind.locomotion: LocomotionSession,
}

__all__ = [
    "GameSession",
    "LocomotionSession",
    "SESSION_TYPES",
    "StackingSession",
    "TileMergeSession",
]
