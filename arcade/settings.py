from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ArcadeSettings:
    redis_url: str = "redis://localhost:6379/0"
    log_level: str = "INFO"

    # Timer intervals, milliseconds.
    merge_cooldown_ms: int = 200
    gravity_ms: int = 500
    chase_ms: int = 180

    line_score: int = 100
    food_score: int = 10
    merge_target: int = 2048

    seed: int | None = None


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def settings_from_env() -> ArcadeSettings:
    defaults = ArcadeSettings()
    seed_raw = os.environ.get("ARCADE_SEED")
    return ArcadeSettings(
        redis_url=os.environ.get("ARCADE_REDIS_URL", defaults.redis_url),
        log_level=os.environ.get("ARCADE_LOG_LEVEL", defaults.log_level).upper(),
        merge_cooldown_ms=_int_from_env("ARCADE_MERGE_COOLDOWN_MS", defaults.merge_cooldown_ms),
        gravity_ms=_int_from_env("ARCADE_GRAVITY_MS", defaults.gravity_ms),
        chase_ms=_int_from_env("ARCADE_CHASE_MS", defaults.chase_ms),
        line_score=_int_from_env("ARCADE_LINE_SCORE", defaults.line_score),
        food_score=_int_from_env("ARCADE_FOOD_SCORE", defaults.food_score),
        merge_target=_int_from_env("ARCADE_MERGE_TARGET", defaults.merge_target),
        seed=_int_from_env("ARCADE_SEED", 0) if seed_raw else None,
    )
