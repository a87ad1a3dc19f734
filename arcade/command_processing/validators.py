from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from arcade.core.commands import Command, CommandKind
from arcade.core.status import GameKind, GameStatus


class CommandRejected(ValueError):
    """An input that is ignored in the current state. Never surfaced to the player."""


@dataclass(frozen=True, slots=True)
class CommandContext:
    """Inputs available to validators.

    Keep this tight so it can be logged as-is.
    """

    game: GameKind
    status: GameStatus
    command: Command
    cooling_down: bool = False


class CommandValidator(ABC):
    @abstractmethod
    def validate(self, *, ctx: CommandContext) -> None:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class StatusValidator(CommandValidator):
    """Accept the command only in the listed statuses."""

    allowed_statuses: frozenset[GameStatus]

    def validate(self, *, ctx: CommandContext) -> None:
        if ctx.status not in self.allowed_statuses:
            allowed = ",".join(sorted(s.value for s in self.allowed_statuses))
            raise CommandRejected(
                f"Command '{ctx.command.kind.value}' not allowed in status '{ctx.status.value}' (allowed: {allowed})"
            )


@dataclass(frozen=True, slots=True)
class CooldownValidator(CommandValidator):
    """Drop moves while the previous move's animation window is open."""

    def validate(self, *, ctx: CommandContext) -> None:
        if ctx.cooling_down:
            raise CommandRejected("Move ignored during cool-down")


@dataclass(frozen=True, slots=True)
class ValidatorPipeline:
    validators: tuple[CommandValidator, ...]

    def validate(self, *, ctx: CommandContext) -> None:
        for v in self.validators:
            v.validate(ctx=ctx)


_LIVE = frozenset({GameStatus.idle, GameStatus.playing})
_ALL = frozenset(GameStatus)

_ANYTIME = ValidatorPipeline(validators=(StatusValidator(allowed_statuses=_ALL),))
_START = ValidatorPipeline(validators=(StatusValidator(allowed_statuses=frozenset({GameStatus.idle})),))
_LIVE_ONLY = ValidatorPipeline(validators=(StatusValidator(allowed_statuses=_LIVE),))


DEFAULT_COMMAND_PIPELINES: dict[tuple[GameKind, CommandKind], ValidatorPipeline] = {
    (GameKind.tile_merge, CommandKind.start): _START,
    (GameKind.tile_merge, CommandKind.reset): _ANYTIME,
    (GameKind.tile_merge, CommandKind.move): ValidatorPipeline(
        validators=(
            StatusValidator(allowed_statuses=_LIVE),
            CooldownValidator(),
        )
    ),
    (GameKind.stacking, CommandKind.start): _START,
    (GameKind.stacking, CommandKind.reset): _ANYTIME,
    (GameKind.stacking, CommandKind.move): _LIVE_ONLY,
    (GameKind.stacking, CommandKind.rotate): _LIVE_ONLY,
    (GameKind.locomotion, CommandKind.start): _START,
    (GameKind.locomotion, CommandKind.reset): _ANYTIME,
    (GameKind.locomotion, CommandKind.move): _LIVE_ONLY,
}


def pipeline_for_command(game: GameKind, kind: CommandKind) -> ValidatorPipeline:
    pipe = DEFAULT_COMMAND_PIPELINES.get((game, kind))
    if pipe is None:
        raise CommandRejected(f"Command '{kind.value}' is not supported by {game.value}")
    return pipe


def validate_command(ctx: CommandContext) -> None:
    pipeline_for_command(ctx.game, ctx.command.kind).validate(ctx=ctx)
