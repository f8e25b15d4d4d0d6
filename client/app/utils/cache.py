"""
client/app/utils/cache.py

Redis cache for API GET results.

Key = "cache:api:" + request path
(e.g. "cache:api:/api/businesses/42/booked-slots/2026-10-20").
Expiry is left to Redis (SETEX); writes invalidate by path prefix.
"""

import json
import logging
from typing import Any

import redis.asyncio as redis

from client.app.config import settings

logger = logging.getLogger(__name__)

KEY_PREFIX = "cache:api:"


class QueryCache:
    """JSON values in Redis, keyed by API path."""

    def __init__(self, client: redis.Redis, ttl: int, key_prefix: str = KEY_PREFIX):
        self.redis = client
        self.ttl = ttl
        self.key_prefix = key_prefix

    def _key(self, path: str) -> str:
        return f"{self.key_prefix}{path}"

    async def get(self, path: str) -> Any | None:
        """Cached value, or None on miss / Redis failure."""
        try:
            raw = await self.redis.get(self._key(path))
        except redis.RedisError as e:
            logger.warning(f"Cache read failed for {path}: {e}")
            return None

        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(f"Dropping unreadable cache entry {path}")
            await self.redis.delete(self._key(path))
            return None

    async def set(self, path: str, value: Any) -> None:
        if self.ttl <= 0:
            return
        try:
            await self.redis.setex(self._key(path), self.ttl, json.dumps(value))
        except redis.RedisError as e:
            logger.warning(f"Cache write failed for {path}: {e}")

    async def invalidate(self, prefix: str) -> int:
        """Drop every entry whose path starts with prefix. Returns count."""
        try:
            keys = [key async for key in self.redis.scan_iter(match=f"{self._key(prefix)}*")]
            if keys:
                await self.redis.delete(*keys)
        except redis.RedisError as e:
            logger.error(f"Cache invalidation failed for {prefix}: {e}")
            return 0

        if keys:
            logger.debug(f"Invalidated {len(keys)} cache entries for {prefix}")
        return len(keys)


def create_cache() -> QueryCache:
    return QueryCache(
        redis.from_url(settings.REDIS_URL, decode_responses=True),
        settings.QUERY_CACHE_TTL,
    )
