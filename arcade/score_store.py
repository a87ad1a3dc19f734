from __future__ import annotations

import logging

import redis

from arcade.core.status import GameKind

logger = logging.getLogger(__name__)

SCORE_KEY_PREFIX = "arcade:score:"  # + {game}:{best|last}


def best_key(game: GameKind | str) -> str:
    return f"{SCORE_KEY_PREFIX}{GameKind(game).value}:best"


def last_key(game: GameKind | str) -> str:
    return f"{SCORE_KEY_PREFIX}{GameKind(game).value}:last"


class ScoreStore:
    """Best/last score per game on a Redis key-value store.

    Contract: persistence problems never reach the caller. Reads degrade to
    "absent" and writes are dropped, both with a warning in the log.
    """

    def __init__(self, r: redis.Redis) -> None:
        self._r = r

    def _read(self, key: str) -> int | None:
        """Read an integer score; raises ``redis.RedisError`` on connection problems."""
        raw = self._r.get(key)
        if raw is None:
            return None
        try:
            return int(raw)
        except (TypeError, ValueError):
            logger.warning("ignoring non-integer score at %s: %r", key, raw)
            return None

    def get(self, key: str) -> int | None:
        try:
            return self._read(key)
        except redis.RedisError as e:
            logger.warning("score store read failed for %s: %s", key, e)
            return None

    def set(self, key: str, value: int) -> None:
        try:
            self._r.set(key, int(value))
        except redis.RedisError as e:
            logger.warning("score store write failed for %s: %s", key, e)

    def best(self, game: GameKind | str) -> int | None:
        return self.get(best_key(game))

    def last(self, game: GameKind | str) -> int | None:
        return self.get(last_key(game))

    def record(self, game: GameKind | str, score: int, known_best: int | None = None) -> int:
        """Store ``score`` as the latest and, if higher, the best. Returns the best.

        The returned best is never below ``known_best`` or ``score``. When the
        stored best cannot be read it is left untouched.
        """
        self.set(last_key(game), score)
        best = max(score, known_best or 0)
        try:
            stored = self._read(best_key(game))
        except redis.RedisError as e:
            logger.warning("score store read failed for %s: %s", best_key(game), e)
            return best

        if stored is None or best > stored:
            self.set(best_key(game), best)
        return max(best, stored or 0)
