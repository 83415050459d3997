"""Redis-backed implementation of CacheClient."""

from __future__ import annotations

from redis.asyncio import Redis


class RedisCacheClient:
    """Cache shared by every process that can reach the Redis server."""

    def __init__(self, redis: Redis, namespace: str = "expboard") -> None:  # type: ignore[type-arg]
        """Wrap a redis-py asyncio client."""
        self._redis = redis
        self._namespace = namespace

    @classmethod
    def from_url(cls, url: str, namespace: str = "expboard") -> RedisCacheClient:
        """Build a client from a redis:// URL."""
        return cls(Redis.from_url(url), namespace=namespace)

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    async def get(self, key: str) -> str | None:
        """Return a stored value, decoding bytes, or None if absent."""
        value = await self._redis.get(self._key(key))
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value with an expiry in seconds."""
        await self._redis.set(name=self._key(key), value=value, ex=ttl_seconds)

    async def delete(self, key: str) -> None:
        """Remove a key."""
        await self._redis.delete(self._key(key))

    async def close(self) -> None:
        """Close the connection pool."""
        await self._redis.aclose()
