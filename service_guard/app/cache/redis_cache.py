"""
Redis-backed key cache, for sharing resolved keys across worker processes.
"""

import json
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from shared.logging import get_logger
from shared.errors import ConfigurationError

from ..jwks.models import PublicKey


class RedisKeyCache:
    """Redis key cache for public keys.

    Entries are written without a TTL; expiry belongs to whatever policy
    manages the Redis instance. Read or write failures degrade to a miss
    so the resolver falls back to the JWKS endpoint.
    """

    def __init__(self, redis_url: str, prefix: str = "jwks:key:", client: Optional[redis.Redis] = None):
        self.redis_url = redis_url
        self.prefix = prefix
        self.logger = get_logger("guard.cache.redis")
        self.redis: Optional[redis.Redis] = client

    async def start(self):
        """Connect to Redis and verify the connection."""
        try:
            await self._connection().ping()

            self.logger.info("Redis key cache started")

        except RedisError as e:
            self.logger.error("Failed to start Redis key cache", error=str(e))
            raise ConfigurationError("Redis key cache unavailable", details={"redis_error": str(e)}) from e

    async def stop(self):
        """Close the Redis connection."""
        if self.redis:
            await self.redis.aclose()
            self.logger.info("Redis key cache stopped")

    async def get(self, key: str) -> Optional[PublicKey]:
        """Get a cached public key."""
        try:
            cached_data = await self._connection().get(self._cache_key(key))
            if not cached_data:
                return None

            public_key = PublicKey.from_dict(json.loads(cached_data))
            self.logger.debug("Cache hit for key", kid=key)
            return public_key

        except (RedisError, ValueError, KeyError, TypeError) as e:
            self.logger.error("Error getting cached key", kid=key, error=str(e))
            return None

    async def set(self, key: str, value: PublicKey) -> None:
        """Cache a public key."""
        try:
            await self._connection().set(self._cache_key(key), json.dumps(value.to_dict()))
            self.logger.debug("Cached key", kid=key)

        except RedisError as e:
            self.logger.error("Error caching key", kid=key, error=str(e))

    async def health_check(self) -> bool:
        """Check Redis health."""
        try:
            await self._connection().ping()
            return True
        except RedisError:
            return False

    def _connection(self) -> redis.Redis:
        # from_url does not connect; the pool dials on first command
        if self.redis is None:
            self.redis = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                retry_on_timeout=True,
                health_check_interval=30,
            )
        return self.redis

    def _cache_key(self, key: str) -> str:
        return f"{self.prefix}{key}"
