from __future__ import annotations

import asyncio

import fakeredis
import pytest

from arcade.core.commands import Command
from arcade.core.status import GameKind, GameStatus
from arcade.main import create_shell
from arcade.settings import ArcadeSettings


@pytest.mark.asyncio
async def test_create_shell_runs_a_game_on_the_event_loop(redis_client: fakeredis.FakeRedis) -> None:
    settings = ArcadeSettings(chase_ms=10, seed=5)
    shell = create_shell(settings=settings, r=redis_client)

    shell.select(GameKind.locomotion)
    shell.dispatch(Command.start())
    await asyncio.sleep(0.5)

    # Heading right from the middle, the snake reaches the wall within ~9 ticks.
    snap = shell.snapshot()
    assert snap is not None
    assert snap.status == GameStatus.over
    shell.back_to_menu()
