# src/cache/redis_store.py — v2
"""Redis-based cache store (CACHE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Suitable for distributed/multi-instance deployments; expiry is left to
the Redis server's eviction policy unless a TTL is given.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from docdigest.cache.base_cache_store import BaseCacheStore
from docdigest.cache.models import CachedAnalysis

logger = logging.getLogger(__name__)

_KEY_PREFIX = "docdigest:analysis:"
_INDEX_KEY = "docdigest:analysis:__index__"


class RedisCacheStore(BaseCacheStore):
    """Redis-backed cache store for distributed deployments."""

    def __init__(self, redis_url: str, ttl_s: int | None = None) -> None:
        try:
            import redis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._client = redis.Redis.from_url(redis_url, decode_responses=True)
        self._ttl_s = ttl_s

    async def get(self, key: str) -> CachedAnalysis | None:
        """Retrieve cache entry by key."""
        data = self._client.get(f"{_KEY_PREFIX}{key}")
        if data is None:
            return None
        try:
            return CachedAnalysis.model_validate_json(data)
        except ValidationError as e:
            logger.warning("Failed to deserialize cache entry %s: %s", key, e)
            return None

    async def put(self, key: str, entry: CachedAnalysis) -> None:
        """Store a cache entry."""
        redis_key = f"{_KEY_PREFIX}{key}"
        self._client.set(redis_key, entry.model_dump_json(), ex=self._ttl_s)
        # Maintain a set of all cache keys for list_keys
        self._client.sadd(_INDEX_KEY, key)

    async def delete(self, key: str) -> None:
        """Remove a cache entry."""
        self._client.delete(f"{_KEY_PREFIX}{key}")
        self._client.srem(_INDEX_KEY, key)

    async def list_keys(self) -> list[str]:
        """List cached keys whose entries still exist."""
        keys = []
        for key in sorted(self._client.smembers(_INDEX_KEY)):
            if self._client.exists(f"{_KEY_PREFIX}{key}"):
                keys.append(key)
            else:
                # Expired or evicted server-side
                self._client.srem(_INDEX_KEY, key)
        return keys

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()
