from __future__ import annotations

import asyncio
import logging
import random

import redis

from arcade.infra.redis_client import create_redis
from arcade.scheduler import AsyncioScheduler
from arcade.score_store import ScoreStore
from arcade.settings import ArcadeSettings, settings_from_env
from arcade.shell import ArcadeShell

logger = logging.getLogger(__name__)


def configure_logging(settings: ArcadeSettings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_shell(
    *,
    settings: ArcadeSettings | None = None,
    r: redis.Redis | None = None,
    loop: asyncio.AbstractEventLoop | None = None,
) -> ArcadeShell:
    """Wire a shell with its scheduler and score store.

    Settings come from the environment unless given. The Redis client is
    created lazily by redis-py, so an unreachable server only shows up as
    logged store warnings.
    """
    settings = settings or settings_from_env()
    configure_logging(settings)

    store = ScoreStore(r if r is not None else create_redis(settings.redis_url))
    shell = ArcadeShell(
        scheduler=AsyncioScheduler(loop),
        store=store,
        settings=settings,
        rng=random.Random(settings.seed),
    )
    logger.info("arcade shell ready (redis=%s)", settings.redis_url if r is None else "injected")
    return shell
