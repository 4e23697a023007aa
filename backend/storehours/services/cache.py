"""
Redis Cache Invalidation

The public store API caches location listings per retail chain under
"retail:<chain>" and the combined listing under "retail:all". This service
drops those keys when a scrape has written fresh data.
"""
import logging
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import ConnectionError as RedisConnectionError

from storehours.config import get_settings

logger = logging.getLogger(__name__)

# Cache key prefix
PREFIX_RETAIL = "retail:"
KEY_ALL_RETAILERS = f"{PREFIX_RETAIL}all"


def retailer_key(retail_name: str) -> str:
    """Cache key of a single retail chain's listing."""
    return f"{PREFIX_RETAIL}{retail_name.lower()}"


class CacheService:
    """Redis-based cache invalidation with fallback to no-cache."""

    def __init__(self, redis_url: Optional[str] = None):
        self._redis_url = redis_url
        self._client: Optional[redis.Redis] = None
        self._connected = False

    async def connect(self):
        """Initialize Redis connection."""
        if self._connected:
            return

        try:
            self._client = redis.from_url(
                self._redis_url or get_settings().redis_url,
                encoding="utf-8",
                decode_responses=True
            )
            # Test connection
            await self._client.ping()
            self._connected = True
            logger.info("Redis cache connected")
        except (RedisConnectionError, Exception) as e:
            logger.warning(f"Redis not available, cache invalidation disabled: {e}")
            self._client = None
            self._connected = False

    async def disconnect(self):
        """Close Redis connection."""
        if self._client:
            await self._client.aclose()
            self._client = None
            self._connected = False

    async def delete(self, *keys: str):
        """Delete specific keys."""
        if not self._client or not keys:
            return

        try:
            await self._client.delete(*keys)
            logger.info(f"Invalidated cache keys: {', '.join(keys)}")
        except Exception as e:
            logger.error(f"Cache delete error: {e}")

    async def invalidate_retailer(self, retail_name: str):
        """Invalidate the listing of one retail chain."""
        await self.delete(retailer_key(retail_name))

    async def invalidate_all(self, retail_names: list[str]):
        """Invalidate every retail chain's listing and the combined listing."""
        await self.delete(*[retailer_key(name) for name in retail_names], KEY_ALL_RETAILERS)

    @property
    def is_connected(self) -> bool:
        """Check if cache is available."""
        return self._connected


# Singleton instance
cache = CacheService()
