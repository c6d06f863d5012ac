"""
Key cache selection from configuration.
"""

from shared.config import GuardConfig
from shared.logging import get_logger

from .base import KeyCache
from .memory import InMemoryKeyCache
from .redis_cache import RedisKeyCache

logger = get_logger("guard.cache")


def create_key_cache(config: GuardConfig) -> KeyCache:
    """Return a Redis cache when ``redis_url`` is set, else an in-process one."""
    if config.redis_url:
        logger.info("Using Redis key cache", prefix=config.cache_key_prefix)
        return RedisKeyCache(config.redis_url, prefix=config.cache_key_prefix)

    logger.info("Using in-memory key cache")
    return InMemoryKeyCache()
