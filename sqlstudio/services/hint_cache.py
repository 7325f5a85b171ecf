"""
Redis cache for AI hints. Cache-Aside: the provider is the source, Redis only saves repeat calls.
All Redis errors are handled internally; never raise to caller. Hints work if Redis is down.
Key: hint:{sha256 of assignment context + query}, plain string, TTL from settings.
"""
import hashlib
import logging
from typing import Any

logger = logging.getLogger(__name__)

HINT_KEY_PREFIX = "hint:"


def _key(raw: str) -> str:
    return f"{HINT_KEY_PREFIX}{hashlib.sha256(raw.encode()).hexdigest()[:64]}"


class RedisHintCache:
    def __init__(self, redis_client: Any, ttl_seconds: int):
        self._redis = redis_client
        self._ttl = ttl_seconds

    async def get(self, raw_key: str) -> str | None:
        """Cached hint or None on miss/error."""
        if not self._redis:
            return None
        try:
            value = await self._redis.get(_key(raw_key))
        except Exception as e:
            logger.warning("Redis hint cache get failed: %s", e, exc_info=False)
            return None
        if value is None:
            return None
        return value.decode() if isinstance(value, bytes) else value

    async def set(self, raw_key: str, hint: str) -> None:
        if not self._redis or not hint:
            return
        try:
            await self._redis.set(_key(raw_key), hint, ex=self._ttl)
        except Exception as e:
            logger.warning("Redis hint cache set failed: %s", e, exc_info=False)
