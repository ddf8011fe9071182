"""Redis cache client utilities."""

from typing import Any, Optional

import redis


def create_redis_client(redis_url: str) -> redis.Redis:
    """Return a Redis client that decodes responses to ``str``."""

    return redis.Redis.from_url(redis_url, decode_responses=True)


def cache_set(client: redis.Redis, key: str, value: Any, ex: Optional[int] = None) -> bool:
    """Set a value in Redis with optional expiration."""

    return bool(client.set(name=key, value=value, ex=ex))


def cache_get(client: redis.Redis, key: str) -> Optional[str]:
    """Get a value from Redis by key."""

    return client.get(name=key)


def cache_delete(client: redis.Redis, key: str) -> bool:
    """Remove a key from Redis."""

    return bool(client.delete(key))
