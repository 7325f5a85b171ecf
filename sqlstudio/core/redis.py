"""
Optional async Redis client for the hint cache, owned by the app lifespan.
Empty redis_url or a failed ping leaves the cache disabled (None); hints still work.
"""
import logging
from typing import Any

from sqlstudio.config import Settings

logger = logging.getLogger(__name__)


async def connect_redis(settings: Settings) -> Any:
    """One async Redis client for the process, or None if disabled/unavailable."""
    url = (settings.redis_url or "").strip()
    if not url:
        return None
    try:
        from redis.asyncio import Redis
        client = Redis.from_url(url, decode_responses=True)
        await client.ping()
    except Exception as e:
        logger.warning("Redis unavailable (hint cache disabled): %s", e, exc_info=False)
        return None
    logger.info("Redis hint cache connected: %s", url.split("@")[-1] if "@" in url else url)
    return client


async def close_redis(client: Any) -> None:
    """Graceful shutdown: close the lifespan's Redis connection."""
    if client is None:
        return
    try:
        await client.aclose()
    except Exception as e:
        logger.warning("Redis close error: %s", e)
